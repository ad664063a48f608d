"""Tests for invoice number generation."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

from invoicer.domain.services.invoice_numbering import format_invoice_number, generate_invoice_number


def _counter(count: int):
    counter = MagicMock()
    counter.count_invoices_for_user = AsyncMock(return_value=count)
    return counter


class TestFormatInvoiceNumber:
    def test_shape(self):
        assert format_invoice_number(4, date(2025, 3, 14)) == "INV-2503-0004"

    def test_custom_prefix(self):
        assert format_invoice_number(12, date(2024, 11, 1), prefix="GST") == "GST-2411-0012"

    def test_padding_is_minimum_width(self):
        assert format_invoice_number(12345, date(2025, 1, 1)) == "INV-2501-12345"


class TestGenerateInvoiceNumber:
    def test_next_after_three(self, event_loop):
        counter = _counter(3)
        number = event_loop.run_until_complete(
            generate_invoice_number("user1", counter, today=date(2025, 3, 5))
        )
        assert number == "INV-2503-0004"
        counter.count_invoices_for_user.assert_awaited_once_with("user1")

    def test_first_invoice(self, event_loop):
        number = event_loop.run_until_complete(
            generate_invoice_number("user1", _counter(0), today=date(2025, 12, 31))
        )
        assert number == "INV-2512-0001"

    def test_offset_skips_ahead(self, event_loop):
        number = event_loop.run_until_complete(
            generate_invoice_number("user1", _counter(3), today=date(2025, 3, 5), offset=2)
        )
        assert number == "INV-2503-0006"

    def test_defaults_to_today(self, event_loop):
        number = event_loop.run_until_complete(generate_invoice_number("user1", _counter(0)))
        today = date.today()
        assert number == f"INV-{today:%y}{today.month:02d}-0001"
