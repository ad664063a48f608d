# invoicer/domain/services/invoice_service.py
"""
Invoice lifecycle: create, edit, cancel, delete and print.

Totals are always recomputed server-side from the line items; amounts sent
by the client are never trusted. Repositories are passed in by the caller
(the API layer builds them from the request's session).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Iterable, Mapping
from uuid import UUID

from invoicer.config.settings import settings
from invoicer.domain.exceptions import (
    BusinessProfileIncompleteError,
    DuplicateError,
    InvalidInvoiceTransitionError,
    InvoicerError,
    NotFoundError,
)
from invoicer.domain.services.amount_words import number_to_words
from invoicer.domain.services.formatting import format_inr, format_invoice_date
from invoicer.domain.services.gst_calculator import (
    InvoiceTotals,
    LineItemResult,
    process_invoice_items,
    round_money,
    summarize_by_hsn,
    to_decimal,
)
from invoicer.domain.services.gstin_pan_validation import is_inter_state, state_from_gstin
from invoicer.domain.services.hsn_sac import get_hsn_sac_by_code, hsn_sac_row_to_dict
from invoicer.domain.services.invoice_numbering import generate_invoice_number
from invoicer.domain.services.invoice_workflow import (
    DRAFT,
    GENERATED,
    ensure_deletable,
    ensure_editable,
    validate_transition,
)

logger = logging.getLogger("invoice_service")

BUYER_FIELDS = (
    "customer_name",
    "customer_gst",
    "customer_address",
    "customer_phone",
    "customer_email",
    "customer_state",
)

# Plain columns a PATCH may set directly.
EDITABLE_FIELDS = BUYER_FIELDS + (
    "customer_id",
    "invoice_date",
    "due_date",
    "payment_status",
    "terms_conditions",
    "notes",
)

CREATE_STATUSES = (DRAFT, GENERATED)


# ---------------------------------------------------------------------------
# Seller / buyer helpers
# ---------------------------------------------------------------------------

def ensure_business_profile(user: Any) -> None:
    """Invoices print the seller's name and address, so both must be set."""
    if not (user.business_name or "").strip() or not (user.business_address or "").strip():
        raise BusinessProfileIncompleteError(
            "Please complete your business settings before creating invoices"
        )


def seller_state(user: Any) -> str:
    return user.business_state or state_from_gstin(user.business_gst) or settings.DEFAULT_BUSINESS_STATE


def buyer_state(data: Mapping[str, Any]) -> str:
    return data.get("customer_state") or state_from_gstin(data.get("customer_gst"))


def resolve_inter_state(user: Any, data: Mapping[str, Any]) -> bool:
    """
    An explicit ``is_inter_state`` wins. Otherwise compare the seller's state
    with the buyer's; an unknown buyer state is treated as intra-state.
    """
    explicit = data.get("is_inter_state")
    if explicit is not None:
        return bool(explicit)
    state = buyer_state(data)
    if not state:
        return False
    return is_inter_state(seller_state(user), state)


async def _owned_customer(user_id: UUID, customer_id: UUID, customers: Any) -> Any:
    """The user's customer ``customer_id``; anything else is reported as not found."""
    customer = await customers.get_for_user(customer_id, user_id) if customers is not None else None
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


async def _buyer_snapshot(user_id: UUID, data: Mapping[str, Any], customers: Any) -> dict[str, Any]:
    """Buyer fields from the request, falling back to the linked customer record."""
    snapshot = {key: data.get(key) for key in BUYER_FIELDS}
    customer_id = data.get("customer_id")
    if customer_id:
        customer = await _owned_customer(user_id, customer_id, customers)
        defaults = {
            "customer_name": customer.name,
            "customer_gst": customer.gst_number,
            "customer_address": customer.address,
            "customer_phone": customer.phone,
            "customer_email": customer.email,
            "customer_state": customer.state,
        }
        for key, value in defaults.items():
            if not snapshot.get(key):
                snapshot[key] = value

    if not snapshot.get("customer_name") or not snapshot.get("customer_address"):
        raise InvoicerError("Customer name and address are required")
    if not snapshot.get("customer_state"):
        snapshot["customer_state"] = state_from_gstin(snapshot.get("customer_gst")) or None
    return snapshot


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

async def build_hsn_lookup(
    items: Iterable[Mapping[str, Any]],
    hsn_codes: Any,
) -> Callable[[str], Mapping[str, Any] | None]:
    """
    Prefetch catalogue rows for the item codes; the returned lookup prefers
    the database row and falls back to the built-in catalogue.
    """
    codes = sorted({(item.get("hsn_sac_code") or "").strip() for item in items} - {""})
    rows = await hsn_codes.get_active_by_codes(codes) if codes else []
    known = {row.code: hsn_sac_row_to_dict(row) for row in rows}

    def lookup(code: str) -> Mapping[str, Any] | None:
        return known.get(code) or get_hsn_sac_by_code(code)

    return lookup


async def calculate_totals(
    items: list[Mapping[str, Any]],
    inter_state: bool,
    hsn_codes: Any = None,
) -> InvoiceTotals:
    lookup = await build_hsn_lookup(items, hsn_codes) if hsn_codes is not None else None
    return process_invoice_items(
        items,
        inter_state,
        lookup=lookup,
        default_gst_rate=to_decimal(settings.DEFAULT_GST_RATE),
    )


def _totals_fields(totals: InvoiceTotals) -> dict[str, Any]:
    return {
        "subtotal": round_money(totals.subtotal),
        "cgst": round_money(totals.cgst),
        "sgst": round_money(totals.sgst),
        "igst": round_money(totals.igst),
        "total_amount": round_money(totals.total_amount),
    }


def _stored_items(invoice: Any) -> list[dict[str, Any]]:
    return [
        {
            "description": item.description,
            "quantity": item.quantity,
            "rate": item.rate,
            "gst_rate": item.gst_rate,
            "hsn_sac_code": item.hsn_sac_code,
            "hsn_sac_type": item.hsn_sac_type,
            "unit_of_measurement": item.unit_of_measurement,
        }
        for item in invoice.items
    ]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def get_invoice(user_id: UUID, invoice_id: UUID, *, invoices: Any) -> Any:
    invoice = await invoices.get_for_user(invoice_id, user_id)
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


async def create_invoice(
    user: Any,
    data: Mapping[str, Any],
    *,
    invoices: Any,
    hsn_codes: Any = None,
    frequent_items: Any = None,
    customers: Any = None,
) -> Any:
    """
    Validate the seller profile, compute totals, allocate the next invoice
    number and persist the invoice with its items.

    Numbers already in use are skipped (up to ``INVOICE_NUMBER_MAX_SKIP``);
    a concurrent insert of the same number is retried up to
    ``INVOICE_NUMBER_RETRIES`` times.
    """
    ensure_business_profile(user)
    user_id = user.id

    items = list(data.get("items") or [])
    if not items:
        raise InvoicerError("At least one item is required")

    status = data.get("status") or DRAFT
    if status not in CREATE_STATUSES:
        raise InvalidInvoiceTransitionError(f"New invoices cannot be created as '{status}'")

    snapshot = await _buyer_snapshot(user_id, data, customers)
    inter_state = resolve_inter_state(user, {**snapshot, "is_inter_state": data.get("is_inter_state")})
    totals = await calculate_totals(items, inter_state, hsn_codes)

    fields = {
        "user_id": user_id,
        "customer_id": data.get("customer_id"),
        "status": status,
        "payment_status": data.get("payment_status") or "PENDING",
        "invoice_date": data.get("invoice_date") or date.today(),
        "due_date": data.get("due_date"),
        "terms_conditions": data.get("terms_conditions") or None,
        "notes": data.get("notes") or None,
        "is_inter_state": inter_state,
        **snapshot,
        **_totals_fields(totals),
    }

    invoice = None
    offset = skipped = collisions = 0
    while invoice is None:
        number = await generate_invoice_number(
            user_id, invoices, prefix=settings.INVOICE_PREFIX, offset=offset
        )
        offset += 1
        if await invoices.exists_number(user_id, number):
            # Gaps left by deleted drafts push the count below the last issued number.
            skipped += 1
            if skipped > settings.INVOICE_NUMBER_MAX_SKIP:
                raise DuplicateError("Could not allocate a unique invoice number. Please try again.")
            continue
        try:
            invoice = await invoices.create_with_items({**fields, "invoice_number": number}, totals.items)
        except DuplicateError:
            collisions += 1
            logger.warning("Invoice number %s collided on insert for user %s", number, user_id)
            if collisions >= max(settings.INVOICE_NUMBER_RETRIES, 1):
                raise DuplicateError("Could not allocate a unique invoice number. Please try again.")

    if frequent_items is not None:
        await frequent_items.record_usage(user_id, totals.items)

    logger.info(
        "Invoice %s created for user %s (total=%s, inter_state=%s)",
        invoice.invoice_number, user_id, fields["total_amount"], inter_state,
    )
    return invoice


async def update_invoice(
    user: Any,
    invoice_id: UUID,
    data: Mapping[str, Any],
    *,
    invoices: Any,
    hsn_codes: Any = None,
    customers: Any = None,
) -> Any:
    """
    Apply a partial update. Only drafts may change content; a request that
    carries nothing but ``status`` is a lifecycle change and is allowed on
    any invoice the transition table permits.

    A new ``customer_id`` must be one of the user's own customers.
    Totals are recalculated when items, the jurisdiction or the buyer's
    state/GSTIN change.
    """
    invoice = await get_invoice(user.id, invoice_id, invoices=invoices)

    content = {key: value for key, value in data.items() if key != "status"}
    if content:
        ensure_editable(invoice.status)

    customer_id = content.get("customer_id")
    if customer_id and customer_id != invoice.customer_id:
        await _owned_customer(user.id, customer_id, customers)

    fields: dict[str, Any] = {key: content[key] for key in EDITABLE_FIELDS if key in content}
    for key in ("customer_gst", "customer_phone", "customer_email", "terms_conditions", "notes"):
        if key in fields and not fields[key]:
            fields[key] = None

    new_status = data.get("status")
    if new_status:
        validate_transition(invoice.status, new_status)
        fields["status"] = new_status

    jurisdiction_changed = any(
        key in content for key in ("is_inter_state", "customer_state", "customer_gst")
    )
    new_items = None
    if "items" in content or jurisdiction_changed:
        merged = {
            "customer_state": content.get("customer_state", invoice.customer_state),
            "customer_gst": content.get("customer_gst", invoice.customer_gst),
            "is_inter_state": content.get("is_inter_state")
            if "is_inter_state" in content
            else (None if jurisdiction_changed else invoice.is_inter_state),
        }
        inter_state = resolve_inter_state(user, merged)
        items = list(content["items"]) if content.get("items") else _stored_items(invoice)
        totals = await calculate_totals(items, inter_state, hsn_codes)
        fields.update(_totals_fields(totals))
        fields["is_inter_state"] = inter_state
        new_items = totals.items

    updated = await invoices.update(invoice, fields, items=new_items)
    logger.info("Invoice %s updated (%s)", updated.invoice_number, ", ".join(sorted(fields)) or "no changes")
    return updated


async def change_status(user_id: UUID, invoice_id: UUID, new_status: str, *, invoices: Any) -> Any:
    invoice = await get_invoice(user_id, invoice_id, invoices=invoices)
    validate_transition(invoice.status, new_status)
    if invoice.status == new_status:
        return invoice
    old_status = invoice.status
    updated = await invoices.update(invoice, {"status": new_status})
    logger.info("Invoice %s: %s -> %s", updated.invoice_number, old_status, new_status)
    return updated


async def delete_invoice(user_id: UUID, invoice_id: UUID, *, invoices: Any) -> None:
    invoice = await get_invoice(user_id, invoice_id, invoices=invoices)
    ensure_deletable(invoice.status)
    number = invoice.invoice_number
    await invoices.delete(invoice)
    logger.info("Invoice %s deleted by user %s", number, user_id)


# ---------------------------------------------------------------------------
# Print / PDF context
# ---------------------------------------------------------------------------

def stored_totals(invoice: Any) -> InvoiceTotals:
    """Rebuild an ``InvoiceTotals`` from persisted (already rounded) rows."""
    items = [
        LineItemResult(
            quantity=to_decimal(row.quantity),
            rate=to_decimal(row.rate),
            gst_rate=to_decimal(row.gst_rate),
            amount=to_decimal(row.amount),
            cgst=to_decimal(row.cgst),
            sgst=to_decimal(row.sgst),
            igst=to_decimal(row.igst),
            total_amount=to_decimal(row.total_amount),
            description=row.description,
            hsn_sac_code=row.hsn_sac_code,
            hsn_sac_type=row.hsn_sac_type or "HSN",
            unit_of_measurement=row.unit_of_measurement or "NOS",
        )
        for row in invoice.items
    ]
    return InvoiceTotals(
        subtotal=to_decimal(invoice.subtotal),
        cgst=to_decimal(invoice.cgst),
        sgst=to_decimal(invoice.sgst),
        igst=to_decimal(invoice.igst),
        total_amount=to_decimal(invoice.total_amount),
        items=items,
    )


def invoice_print_context(invoice: Any, user: Any) -> dict[str, Any]:
    """Everything the PDF renderer needs, with amounts already formatted."""
    totals = stored_totals(invoice)
    return {
        "invoice_number": invoice.invoice_number,
        "invoice_date": format_invoice_date(invoice.invoice_date),
        "due_date": format_invoice_date(invoice.due_date),
        "status": invoice.status,
        "is_inter_state": bool(invoice.is_inter_state),
        "seller": {
            "name": user.business_name,
            "address": user.business_address,
            "state": seller_state(user),
            "gst": user.business_gst,
            "phone": user.business_phone,
            "email": user.business_email,
        },
        "buyer": {
            "name": invoice.customer_name,
            "address": invoice.customer_address,
            "state": invoice.customer_state or state_from_gstin(invoice.customer_gst),
            "gst": invoice.customer_gst,
            "phone": invoice.customer_phone,
            "email": invoice.customer_email,
        },
        "items": [
            {
                "description": item.description,
                "hsn_sac_code": item.hsn_sac_code or "",
                "unit_of_measurement": item.unit_of_measurement,
                "quantity": f"{item.quantity.normalize():f}",
                "rate": format_inr(item.rate, symbol=""),
                "gst_rate": f"{item.gst_rate.normalize():f}%",
                "amount": format_inr(item.amount, symbol=""),
                "cgst": format_inr(item.cgst, symbol=""),
                "sgst": format_inr(item.sgst, symbol=""),
                "igst": format_inr(item.igst, symbol=""),
                "total_amount": format_inr(item.total_amount, symbol=""),
            }
            for item in totals.items
        ],
        "hsn_summary": [
            {
                "hsn_sac_code": row["hsn_sac_code"],
                "gst_rate": f"{row['gst_rate'].normalize():f}%",
                "taxable_amount": format_inr(row["taxable_amount"], symbol=""),
                "cgst": format_inr(row["cgst"], symbol=""),
                "sgst": format_inr(row["sgst"], symbol=""),
                "igst": format_inr(row["igst"], symbol=""),
                "total_tax": format_inr(row["total_tax"], symbol=""),
            }
            for row in summarize_by_hsn(totals)
        ],
        "subtotal": format_inr(totals.subtotal, symbol=""),
        "cgst": format_inr(totals.cgst, symbol=""),
        "sgst": format_inr(totals.sgst, symbol=""),
        "igst": format_inr(totals.igst, symbol=""),
        "total_tax": format_inr(totals.total_tax, symbol=""),
        "total_amount": format_inr(totals.total_amount, symbol=""),
        "amount_in_words": number_to_words(round_money(totals.total_amount)),
        "terms_conditions": invoice.terms_conditions or "",
        "notes": invoice.notes or "",
    }
