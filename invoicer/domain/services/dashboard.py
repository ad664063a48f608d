# invoicer/domain/services/dashboard.py
"""
Dashboard statistics: invoice counts, revenue and month-over-month growth.

Month windows are half-open ``[start, end)`` in UTC.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any
from uuid import UUID

from invoicer.domain.services.gst_calculator import ZERO, round_money, to_decimal

logger = logging.getLogger("dashboard")


def month_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    now = now or datetime.now(timezone.utc)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def previous_month_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    start, _ = month_window(now)
    if start.month == 1:
        prev = start.replace(year=start.year - 1, month=12)
    else:
        prev = start.replace(month=start.month - 1)
    return prev, start


def revenue_growth(current: Decimal | float | int, previous: Decimal | float | int) -> float:
    """
    Percent change from ``previous`` to ``current``, one decimal place.
    Zero when there was no revenue last month.

    >>> revenue_growth(150, 100)
    50.0
    """
    current, previous = to_decimal(current), to_decimal(previous)
    if previous <= ZERO:
        return 0.0
    growth = (current - previous) / previous * 100
    return float(growth.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


async def build_dashboard_stats(
    user_id: UUID,
    *,
    invoices: Any,
    customers: Any,
    now: datetime | None = None,
    recent_limit: int = 5,
) -> dict[str, Any]:
    this_start, this_end = month_window(now)
    last_start, last_end = previous_month_window(now)

    total_invoices = await invoices.count_invoices_for_user(user_id)
    month_invoices = await invoices.count_between(user_id, this_start, this_end)
    total_customers = await customers.count_for_user(user_id)
    total_revenue = await invoices.total_revenue(user_id)
    month_revenue = await invoices.revenue_between(user_id, this_start, this_end)
    last_month_revenue = await invoices.revenue_between(user_id, last_start, last_end)
    recent = await invoices.recent(user_id, limit=recent_limit)

    return {
        "stats": {
            "total_invoices": total_invoices,
            "this_month_invoices": month_invoices,
            "total_customers": total_customers,
            "total_revenue": round_money(total_revenue),
            "this_month_revenue": round_money(month_revenue),
            "revenue_growth": revenue_growth(month_revenue, last_month_revenue),
        },
        "recent_invoices": [
            {
                "id": str(inv.id),
                "invoice_number": inv.invoice_number,
                "customer_name": inv.customer_name,
                "total_amount": round_money(inv.total_amount),
                "status": inv.status,
                "created_at": inv.created_at,
            }
            for inv in recent
        ],
    }
