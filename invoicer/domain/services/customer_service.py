# invoicer/domain/services/customer_service.py
"""Customer records: GSTIN de-duplication and state derivation."""

from __future__ import annotations

import logging
from typing import Any, Mapping
from uuid import UUID

from invoicer.domain.exceptions import DuplicateError, InvoicerError, NotFoundError
from invoicer.domain.services.gstin_pan_validation import normalize_code, state_from_gstin

logger = logging.getLogger("customer_service")

CUSTOMER_FIELDS = ("name", "gst_number", "address", "state", "phone", "email")
OPTIONAL_FIELDS = ("gst_number", "phone", "email")


def _clean(data: Mapping[str, Any]) -> dict[str, Any]:
    fields = {key: data[key] for key in CUSTOMER_FIELDS if key in data}
    if "gst_number" in fields:
        fields["gst_number"] = normalize_code(fields["gst_number"])
    for key in OPTIONAL_FIELDS:
        if key in fields and not fields[key]:
            fields[key] = None
    return fields


async def get_customer(user_id: UUID, customer_id: UUID, *, customers: Any) -> Any:
    customer = await customers.get_for_user(customer_id, user_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


async def create_customer(user_id: UUID, data: Mapping[str, Any], *, customers: Any) -> Any:
    """
    A GST number may belong to at most one of the user's customers. When no
    state is given it is derived from the GSTIN's two-digit state code.
    """
    fields = _clean(data)
    gst_number = fields.get("gst_number")

    if gst_number and await customers.get_by_gst_number(user_id, gst_number):
        raise DuplicateError("A customer with this GST number already exists")

    if not fields.get("state"):
        fields["state"] = state_from_gstin(gst_number)

    customer = await customers.create(user_id, fields)
    logger.info("Customer %s created for user %s", customer.id, user_id)
    return customer


async def update_customer(
    user_id: UUID,
    customer_id: UUID,
    data: Mapping[str, Any],
    *,
    customers: Any,
) -> Any:
    customer = await get_customer(user_id, customer_id, customers=customers)
    fields = _clean(data)

    gst_number = fields.get("gst_number")
    if gst_number and gst_number != customer.gst_number:
        other = await customers.get_by_gst_number(user_id, gst_number)
        if other is not None and other.id != customer.id:
            raise DuplicateError("A customer with this GST number already exists")
        if not fields.get("state"):
            fields["state"] = state_from_gstin(gst_number) or customer.state

    return await customers.update(customer, fields)


async def delete_customer(user_id: UUID, customer_id: UUID, *, customers: Any) -> None:
    """Customers referenced by invoices are kept."""
    customer = await get_customer(user_id, customer_id, customers=customers)
    if await customers.count_invoices(customer.id, user_id) > 0:
        raise InvoicerError("Cannot delete customer with existing invoices")
    await customers.delete(customer)
    logger.info("Customer %s deleted by user %s", customer_id, user_id)
