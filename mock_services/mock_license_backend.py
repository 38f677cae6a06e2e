"""
mock_license_backend.py — Mock Implementation of the License Backend (REST API)

A simulated license backend for testing the checkout flow. Every endpoint
answers with the {success, message} envelope; on success `message` is itself
a JSON string (double-encoded), as the real backend does.

Simulation Scenarios:
    • Successful license issuance
    • Rejected order (reference id starting with "ref_fail_")
    • Failed order creation (details id starting with "fail_")

Endpoints:
    POST /orders/licenses          — Issues licenses, returns a license bundle (direct mode).
    POST /orders/licenses/embedded — Issues licenses, returns the order with licenses per item (webhook mode).
    POST /orders                   — Creates the order once payment is approved.

Port:
    Default: 8010 (HTTP)
"""

import copy
import json
import logging
import uuid
from typing import Any, List

from fastapi import FastAPI, Request
from pydantic import BaseModel

app = FastAPI(title="Mock License Backend")
log = logging.getLogger(__name__)


class CreateOrderRequest(BaseModel):
    """
    Attributes:
        licenses (List[Any]): License bundle acquired earlier.
        details (Any): Payment provider's approval details.
    """
    licenses: List[Any]
    details: Any = None


def _issue_licenses(code: str, quantity: int) -> List[str]:
    return [f"{code}-{uuid.uuid4().hex[:12].upper()}" for _ in range(int(quantity))]


def _failure(message: str) -> dict:
    return {"success": False, "message": message}


def _success(payload: Any) -> dict:
    return {"success": True, "message": json.dumps(payload)}


def _purchase_unit(order: dict):
    units = order.get("purchase_units") or [{}]
    return units[0]


@app.post("/orders/licenses")
async def issue_licenses(request: Request):
    """Returns [{name, licenses}] with one license per unit of each item."""
    order = await request.json()
    unit = _purchase_unit(order)
    reference_id = unit.get("reference_id", "")
    log.info(f"[LB] License request for {reference_id}")

    if reference_id.startswith("ref_fail_"):
        log.warning(f"[LB] Order {reference_id} rejected.")
        return _failure("Order rejected by license backend.")

    bundle = [
        {"name": item["name"], "licenses": _issue_licenses(item["code"], item["quantity"])}
        for item in unit.get("items", [])
    ]
    return _success(bundle)


@app.post("/orders/licenses/embedded")
async def issue_embedded_licenses(request: Request):
    """Returns the submitted order with a `licenses` array on each item."""
    order = await request.json()
    unit = _purchase_unit(order)
    reference_id = unit.get("reference_id", "")
    log.info(f"[LB] Embedded license request for {reference_id}")

    if reference_id.startswith("ref_fail_"):
        return _failure("Order rejected by license backend.")

    answer = copy.deepcopy(order)
    for item in answer["purchase_units"][0].get("items", []):
        item["licenses"] = _issue_licenses(item["code"], item["quantity"])
    return _success(answer)


@app.post("/orders")
def create_order(request: CreateOrderRequest):
    """Accepts the acquired licenses together with the payment details."""
    details_id = request.details.get("id", "") if isinstance(request.details, dict) else ""
    if not request.licenses:
        return _failure("No licenses supplied.")
    if details_id.startswith("fail_"):
        log.warning(f"[LB] Order creation for payment {details_id} failed.")
        return _failure("Order could not be created.")

    log.info(f"[LB] Order created for payment {details_id}.")
    return _success({"orderId": f"ord_{uuid.uuid4()}"})


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8010)
