# invoicer/domain/services/invoice_numbering.py
"""
Sequential, human-readable invoice numbers: ``<PREFIX>-<YY><MM>-<NNNN>``.

The sequence is the user's existing invoice count plus one. The count comes
from an injected :class:`InvoiceCounter` so this module performs no I/O of its
own beyond that single read.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol
from uuid import UUID

logger = logging.getLogger("invoice_numbering")

DEFAULT_PREFIX = "INV"
SEQUENCE_WIDTH = 4


class InvoiceCounter(Protocol):
    async def count_invoices_for_user(self, user_id: UUID | str) -> int: ...


def format_invoice_number(sequence: int, on: date, prefix: str = DEFAULT_PREFIX) -> str:
    """
    >>> format_invoice_number(4, date(2025, 3, 14))
    'INV-2503-0004'
    """
    return f"{prefix}-{on:%y}{on.month:02d}-{sequence:0{SEQUENCE_WIDTH}d}"


async def generate_invoice_number(
    user_id: UUID | str,
    counter: InvoiceCounter,
    prefix: str = DEFAULT_PREFIX,
    today: date | None = None,
    offset: int = 0,
) -> str:
    """
    Next invoice number for ``user_id`` based on its current invoice count.

    ``offset`` skips ahead that many numbers; callers retrying after a
    collision pass the attempt index.
    """
    count = await counter.count_invoices_for_user(user_id)
    number = format_invoice_number(count + 1 + offset, today or date.today(), prefix)
    logger.debug("Generated invoice number %s for user %s (count=%d)", number, user_id, count)
    return number
