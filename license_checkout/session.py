"""
session.py — Caller-owned license session

A LicenseSession holds the license bundle acquired for one checkout flow
(direct mode) until the order is finalized. Create one per flow and pass it
along; sessions do not share state.
"""

import logging
from typing import Any, List

from pydantic import ValidationError

from .clients import LicenseBackendClient
from .exceptions import AcquisitionInProgressError, BackendError
from .models import LicenseBundle, LicenseBundleEntry
from .presentation import LicensePresenter
from .repacker import repack_licenses

log = logging.getLogger(__name__)


def _is_order_shaped(payload: Any) -> bool:
    """Checks container types only; missing keys are left to order validation."""
    if not isinstance(payload, dict):
        return False
    units = payload.get("purchase_units", [])
    if not isinstance(units, list) or not all(isinstance(unit, dict) for unit in units):
        return False
    items = units[0].get("items", []) if units else []
    return isinstance(items, list) and all(isinstance(item, dict) for item in items)


class LicenseSession:
    """
    Acquires licenses for an order, keeps the latest bundle and finalizes the order.

    Attributes:
        licenses (List[LicenseBundleEntry]): Most recently acquired bundle.
            Overwritten by each successful `acquire`, never cleared by `finalize`.
    """
    def __init__(self, client: LicenseBackendClient, presenter: LicensePresenter = None):
        """
        Args:
            client (LicenseBackendClient): Backend client used for every exchange.
            presenter (LicensePresenter): Optional; receives errors and, after
                finalizing, the license bundle. Errors are raised either way.
        """
        self.client = client
        self.presenter = presenter
        self.licenses: List[LicenseBundleEntry] = []
        self._acquiring = False

    def _report(self, error: BackendError):
        if self.presenter is not None:
            self.presenter.show_error(error.message)

    def _store_bundle(self, payload: Any) -> None:
        try:
            bundle = LicenseBundle.validate_python(payload)
        except ValidationError as e:
            raise BackendError(f"Invalid license bundle from license backend: {e}", code="BACKEND_INVALID_PAYLOAD") from e
        self.licenses = bundle
        log.info(f"Stored {sum(len(entry.licenses) for entry in bundle)} license(s) for {len(bundle)} product(s).")

    def _repack_payload(self, payload: Any) -> dict:
        if not _is_order_shaped(payload):
            raise BackendError(
                f"Invalid order from license backend: {str(payload)[:200]}", code="BACKEND_INVALID_PAYLOAD"
            )
        return repack_licenses(payload)

    async def acquire(self, order: dict, url: str) -> None:
        """
        Direct mode: submits the order and keeps the returned license bundle.

        Raises:
            AcquisitionInProgressError: Another acquisition on this session is running.
            SchemaError: The order is missing required fields. Nothing is sent.
            BackendError: The backend failed or returned a malformed bundle.
        """
        if self._acquiring:
            raise AcquisitionInProgressError()

        self._acquiring = True
        try:
            await self.client.submit_order(order, url, self._store_bundle)
        except BackendError as e:
            self._report(e)
            raise
        finally:
            self._acquiring = False

    async def encode_licenses(self, order: dict, url: str) -> dict:
        """
        Webhook mode: submits the order and returns it with licenses packed into item skus.

        The held bundle is left untouched.

        Raises:
            SchemaError: The order, or the backend's answer, lacks required fields.
            BackendError: The backend failed or did not answer with an order.
        """
        try:
            return await self.client.submit_order(order, url, self._repack_payload)
        except BackendError as e:
            self._report(e)
            raise

    async def finalize(self, details: Any, url: str) -> None:
        """
        Creates the order in the license backend once the payment is approved.

        Args:
            details (Any): Payment provider's approval details, sent as-is.
            url (str): License backend order endpoint.

        Raises:
            BackendError: The backend failed; its message is carried unchanged.
        """
        payload = {
            "licenses": [entry.model_dump() for entry in self.licenses],
            "details": details,
        }
        try:
            await self.client.post_envelope(url, payload)
        except BackendError as e:
            self._report(e)
            raise

        log.info("Order created in license backend.")
        if self.presenter is not None:
            self.presenter.show_licenses(self.licenses)
