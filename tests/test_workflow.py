"""
Tests for the checkout orchestration against the mock license backend.
"""
import pytest

from license_checkout.exceptions import BackendError, MissingItemCodeError
from license_checkout.presentation import LoggingPresenter, license_rows
from license_checkout.repacker import decode_sku
from license_checkout.session import LicenseSession
from license_checkout.workflow import (
    complete_direct_checkout,
    prepare_direct_checkout,
    prepare_webhook_checkout,
)


@pytest.mark.asyncio
class TestDirectCheckout:
    async def test_full_direct_flow(self, backend_client, products, caplog):
        session = LicenseSession(backend_client, LoggingPresenter())

        order = await prepare_direct_checkout(session, "ref-42", "USD", products, "/orders/licenses")
        assert order["purchase_units"][0]["amount"]["value"] == "1.50"

        with caplog.at_level("INFO"):
            rows = await complete_direct_checkout(session, {"id": "PAYID-42"}, "/orders")

        assert [name for name, _ in rows] == ["My product name 1", "My product name 2", "My product name 2"]
        assert rows == license_rows(session.licenses)
        assert all(license_key.startswith("prod-") for _, license_key in rows)
        assert "Here are your licenses" in caplog.text

    async def test_schema_error_aborts_before_backend(self, recording_client, products):
        client, transport = recording_client({"success": True, "message": "[]"})
        del products[0]["code"]

        with pytest.raises(MissingItemCodeError):
            await prepare_direct_checkout(LicenseSession(client), "ref-1", "USD", products, "http://backend")

        assert transport.requests == []

    async def test_backend_rejection_is_surfaced(self, backend_client, products, caplog):
        with pytest.raises(BackendError):
            await prepare_direct_checkout(
                LicenseSession(backend_client, LoggingPresenter()), "ref_fail_7", "USD", products, "/orders/licenses"
            )

        assert "There has been an error: Order rejected by license backend." in caplog.text


@pytest.mark.asyncio
class TestWebhookCheckout:
    async def test_full_webhook_flow(self, backend_client, products):
        repacked = await prepare_webhook_checkout(
            LicenseSession(backend_client), "ref-9", "EUR", products, "/orders/licenses/embedded"
        )

        unit = repacked["purchase_units"][0]
        assert unit["reference_id"] == "ref-9"
        assert len(unit["items"]) == 3
        assert {decode_sku(item["sku"])[0] for item in unit["items"]} == {"prod-1", "prod-2"}
        assert all("licenses" not in item and "code" not in item for item in unit["items"])
        assert unit["amount"]["breakdown"]["item_total"] == {"currency_code": "EUR", "value": "1.50"}
