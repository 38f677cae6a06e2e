"""
clients.py — License Backend Client (REST)

Encapsulates the JSON exchange with the license backend: every endpoint takes
a JSON POST and answers with a {success, message} envelope. One attempt per
call; no retry and no timeout.
"""

import json
import logging
from typing import Any, Callable, TypeVar

import httpx
from pydantic import ValidationError

from .exceptions import BackendError
from .models import BackendEnvelope
from .validation import validate_order

log = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
}


class LicenseBackendClient:
    """
    Client for the license backend.
    Validates orders locally, submits them and unwraps the response envelope.
    """
    def __init__(self, client: httpx.AsyncClient = None):
        """
        Args:
            client (httpx.AsyncClient): Optional preconfigured client, e.g. with a
                mock transport. By default a client without timeouts is created.
        """
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(None))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    async def post_envelope(self, url: str, payload: Any) -> BackendEnvelope:
        """
        Posts a JSON payload and returns the backend's success envelope.

        HTTP status codes are not interpreted; the envelope decides.

        Raises:
            BackendError: On transport failure, a non-JSON or malformed body,
                or a failure envelope (carrying the backend's message unchanged).
        """
        try:
            response = await self.client.post(url, json=payload, headers=JSON_HEADERS)
        except httpx.HTTPError as e:
            log.error(f"License backend unreachable at {url}: {e}")
            raise BackendError(str(e), code="BACKEND_UNREACHABLE") from e

        if response.is_error:
            log.warning(f"License backend answered HTTP {response.status_code} for {url}.")

        try:
            envelope = BackendEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            log.error(f"Invalid response from license backend at {url}: {e}")
            raise BackendError(f"Invalid response from license backend: {e}", code="BACKEND_INVALID_RESPONSE") from e

        if not envelope.success:
            log.error(f"License backend reported failure: {envelope.message}")
            raise BackendError(envelope.message)
        return envelope

    async def submit_order(self, order: dict, url: str, handler: Callable[[Any], T]) -> T:
        """
        Validates and submits an order, then hands the decoded payload to `handler`.

        Args:
            order (dict): PayPal order structure with backend product codes.
            url (str): License backend endpoint.
            handler (Callable): Receives the parsed payload; its return value is returned.

        Raises:
            SchemaError: The order is missing required fields. Nothing is sent.
            BackendError: The exchange failed or the payload is not valid JSON.
        """
        validate_order(order)

        reference_id = order["purchase_units"][0].get("reference_id")
        log.info(f"[Order: {reference_id}] Submitting order to license backend ({url}).")
        envelope = await self.post_envelope(url, order)

        try:
            payload = json.loads(envelope.message)
        except (TypeError, json.JSONDecodeError) as e:
            log.error(f"[Order: {reference_id}] License backend payload is not valid JSON: {e}")
            raise BackendError(f"Invalid payload from license backend: {e}", code="BACKEND_INVALID_PAYLOAD") from e

        return handler(payload)
