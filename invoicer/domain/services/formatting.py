# invoicer/domain/services/formatting.py
"""Display helpers for invoices: INR amounts, dates, initials."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from decimal import Decimal

from invoicer.domain.services.gst_calculator import round_money


def group_indian(digits: str) -> str:
    """
    Insert Indian digit-group separators: last three digits, then pairs.

    >>> group_indian("12345678")
    '1,23,45,678'
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_inr(amount: Decimal | float | int | str, symbol: str = "₹") -> str:
    """
    >>> format_inr(123456.789)
    '₹1,23,456.79'
    """
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    rupees, paise = f"{abs(value):.2f}".split(".")
    return f"{sign}{symbol}{group_indian(rupees)}.{paise}"


def format_invoice_date(value: date | datetime | str | None) -> str:
    """``15 Jan 2025``; ISO strings are parsed, ``None`` gives an empty string."""
    if value is None:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.strftime("%d %b %Y")


def days_from_now(value: date | datetime, now: datetime | None = None) -> int:
    """Whole days until ``value`` (rounded up); negative when it is in the past."""
    now = now or datetime.now(timezone.utc)
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=now.tzinfo)
    elif value.tzinfo is None and now.tzinfo is not None:
        value = value.replace(tzinfo=now.tzinfo)
    return math.ceil((value - now).total_seconds() / 86400)


def initials(name: str) -> str:
    return "".join(word[0] for word in (name or "").split()).upper()[:2]
