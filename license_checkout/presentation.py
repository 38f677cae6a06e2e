"""
presentation.py — Hand-off to a presentation layer

The checkout core only hands over two shapes: a license bundle to show after
a successful purchase, or an error message. Rendering is up to the caller.
"""

import logging
from typing import Iterable, List, Protocol, Tuple

from .models import LicenseBundleEntry

log = logging.getLogger(__name__)


class LicensePresenter(Protocol):
    def show_error(self, message) -> None:
        ...

    def show_licenses(self, bundle: List[LicenseBundleEntry]) -> None:
        ...


def license_rows(bundle: Iterable[LicenseBundleEntry]) -> List[Tuple[str, str]]:
    """Flattens a bundle into (product name, license key) rows, in bundle order."""
    return [(entry.name, license_key) for entry in bundle for license_key in entry.licenses]


class LoggingPresenter:
    """Presenter for headless deployments: writes licenses and errors to the log."""

    def show_error(self, message) -> None:
        log.error(f"There has been an error: {message}")

    def show_licenses(self, bundle: List[LicenseBundleEntry]) -> None:
        log.info("Thank you for your purchase. Here are your licenses:")
        for name, license_key in license_rows(bundle):
            log.info(f"  {name}: {license_key}")
