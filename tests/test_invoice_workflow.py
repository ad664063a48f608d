"""Tests for the invoice status lifecycle."""

import pytest

from invoicer.domain.exceptions import InvalidInvoiceTransitionError, InvoiceLockedError
from invoicer.domain.services.invoice_workflow import (
    CANCELLED,
    DRAFT,
    GENERATED,
    ensure_deletable,
    ensure_editable,
    validate_transition,
)


class TestTransitions:
    @pytest.mark.parametrize(
        "current,new",
        [(DRAFT, GENERATED), (DRAFT, CANCELLED), (GENERATED, CANCELLED), (DRAFT, DRAFT)],
    )
    def test_allowed(self, current, new):
        validate_transition(current, new)

    @pytest.mark.parametrize(
        "current,new",
        [(GENERATED, DRAFT), (CANCELLED, DRAFT), (CANCELLED, GENERATED), ("UNKNOWN", DRAFT)],
    )
    def test_rejected(self, current, new):
        with pytest.raises(InvalidInvoiceTransitionError):
            validate_transition(current, new)


class TestLocking:
    def test_draft_is_editable(self):
        ensure_editable(DRAFT)
        ensure_deletable(DRAFT)

    @pytest.mark.parametrize("status", [GENERATED, CANCELLED])
    def test_non_draft_is_locked(self, status):
        with pytest.raises(InvoiceLockedError):
            ensure_editable(status)
        with pytest.raises(InvoiceLockedError):
            ensure_deletable(status)

    def test_locked_error_is_client_error(self):
        assert InvoiceLockedError.status_code == 400
