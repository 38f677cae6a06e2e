"""
Pytest configuration and shared fixtures.
"""

import httpx
import pytest

from license_checkout.clients import LicenseBackendClient
from license_checkout.order_builder import build_paypal_order
from mock_services.mock_license_backend import app as mock_backend_app

BACKEND = "http://license-backend.test"


@pytest.fixture
def products():
    """Two products, the second with quantity 2."""
    return [
        {"name": "My product name 1", "quantity": 1, "price": 1, "code": "prod-1"},
        {"name": "My product name 2", "quantity": 2, "price": 0.25, "code": "prod-2"},
    ]


@pytest.fixture
def order(products):
    return build_paypal_order("myOrderReferenceId", "USD", products)


@pytest.fixture
def backend_client():
    """Client talking to the mock license backend in-process."""
    transport = httpx.ASGITransport(app=mock_backend_app)
    return LicenseBackendClient(httpx.AsyncClient(transport=transport, base_url=BACKEND))


class RecordingTransport(httpx.MockTransport):
    """Mock transport that answers with a fixed envelope and records every request."""

    def __init__(self, body=None, status_code: int = 200, content: bytes = None):
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=body)

        super().__init__(handler)


@pytest.fixture
def recording_client():
    """Factory: returns (LicenseBackendClient, RecordingTransport) answering with `body`."""
    def _make(body=None, status_code: int = 200, content: bytes = None):
        transport = RecordingTransport(body, status_code, content)
        return LicenseBackendClient(httpx.AsyncClient(transport=transport)), transport
    return _make

