"""Tests for dashboard statistics."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from invoicer.domain.services.dashboard import (
    build_dashboard_stats,
    month_window,
    previous_month_window,
    revenue_growth,
)

NOW = datetime(2025, 3, 14, 15, 30, tzinfo=timezone.utc)


class TestWindows:
    def test_month_window(self):
        start, end = month_window(NOW)
        assert start == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 4, 1, tzinfo=timezone.utc)

    def test_december_rolls_over(self):
        start, end = month_window(datetime(2024, 12, 31, tzinfo=timezone.utc))
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_previous_month_in_january(self):
        start, end = previous_month_window(datetime(2025, 1, 10, tzinfo=timezone.utc))
        assert start == datetime(2024, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestRevenueGrowth:
    def test_growth(self):
        assert revenue_growth(150, 100) == 50.0

    def test_decline_rounded_to_one_decimal(self):
        assert revenue_growth(Decimal("200"), Decimal("300")) == -33.3

    def test_no_previous_revenue(self):
        assert revenue_growth(500, 0) == 0.0


def test_build_dashboard_stats(event_loop):
    invoices = MagicMock()
    invoices.count_invoices_for_user = AsyncMock(return_value=12)
    invoices.count_between = AsyncMock(return_value=3)
    invoices.total_revenue = AsyncMock(return_value=Decimal("50000.5"))
    invoices.revenue_between = AsyncMock(side_effect=[Decimal("12000"), Decimal("10000")])
    recent = MagicMock(
        id="abc", invoice_number="INV-2503-0012", customer_name="Acme",
        total_amount=Decimal("1180"), status="DRAFT", created_at=NOW,
    )
    invoices.recent = AsyncMock(return_value=[recent])
    customers = MagicMock()
    customers.count_for_user = AsyncMock(return_value=4)

    result = event_loop.run_until_complete(
        build_dashboard_stats("user-1", invoices=invoices, customers=customers, now=NOW)
    )

    stats = result["stats"]
    assert stats["total_invoices"] == 12
    assert stats["this_month_invoices"] == 3
    assert stats["total_customers"] == 4
    assert stats["total_revenue"] == Decimal("50000.50")
    assert stats["revenue_growth"] == 20.0
    assert result["recent_invoices"][0]["invoice_number"] == "INV-2503-0012"
    invoices.count_between.assert_awaited_once_with(
        "user-1",
        datetime(2025, 3, 1, tzinfo=timezone.utc),
        datetime(2025, 4, 1, tzinfo=timezone.utc),
    )
