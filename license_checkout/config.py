"""
config.py — Environment Configuration

Backend addresses and defaults, normally supplied through environment
variables (Docker/Kubernetes). Every value has a local-development default.
"""

import os

# License backend endpoints
LICENSE_BACKEND_URL = os.environ.get("LICENSE_BACKEND_URL", "http://license_backend:8010/orders/licenses")
LICENSE_ENCODE_URL = os.environ.get("LICENSE_ENCODE_URL", "http://license_backend:8010/orders/licenses/embedded")
LICENSE_ORDER_URL = os.environ.get("LICENSE_ORDER_URL", "http://license_backend:8010/orders")

# PayPal uses 2 decimal places for the currencies we sell in
DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "USD")

LOG_FILE = os.environ.get("LOG_FILE", "license_checkout.log")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
