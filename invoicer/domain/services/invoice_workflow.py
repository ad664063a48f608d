# invoicer/domain/services/invoice_workflow.py
"""
Invoice status lifecycle:

    DRAFT → GENERATED → CANCELLED
    DRAFT → CANCELLED

Only DRAFT invoices may be edited or deleted.
"""

from __future__ import annotations

from invoicer.domain.exceptions import InvalidInvoiceTransitionError, InvoiceLockedError

DRAFT = "DRAFT"
GENERATED = "GENERATED"
CANCELLED = "CANCELLED"

VALID_TRANSITIONS: dict[str, list[str]] = {
    DRAFT: [GENERATED, CANCELLED],
    GENERATED: [CANCELLED],
    CANCELLED: [],  # terminal
}

ALL_STATUSES = set(VALID_TRANSITIONS.keys())

PAYMENT_STATUSES = {"PENDING", "PARTIAL", "PAID"}


def validate_transition(current_status: str, new_status: str) -> None:
    """Raise InvalidInvoiceTransitionError if the transition is not allowed."""
    if current_status == new_status:
        return
    allowed = VALID_TRANSITIONS.get(current_status, [])
    if new_status not in allowed:
        raise InvalidInvoiceTransitionError(
            f"Cannot transition invoice from '{current_status}' to '{new_status}'. "
            f"Allowed: {allowed}"
        )


def ensure_editable(status: str) -> None:
    if status != DRAFT:
        raise InvoiceLockedError("Only draft invoices can be edited")


def ensure_deletable(status: str) -> None:
    if status != DRAFT:
        raise InvoiceLockedError("Only draft invoices can be deleted")
