# invoicer/domain/services/amount_words.py
"""
Rupee amounts in English words, using the Indian numbering system
(thousand, lakh = 10^5, crore = 10^7), e.g. for the "Amount in words" line
printed on a tax invoice.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _below_thousand(n: int) -> str:
    if n == 0:
        return ""
    if n < 10:
        return ONES[n]
    if n < 20:
        return TEENS[n - 10]
    if n < 100:
        return TENS[n // 10] + (" " + ONES[n % 10] if n % 10 else "")
    rest = n % 100
    return ONES[n // 100] + " Hundred" + (" " + _below_thousand(rest) if rest else "")


def integer_to_words(n: int) -> str:
    """Words for a non-negative integer, grouped as crore / lakh / thousand."""
    if n < 1000:
        return _below_thousand(n)

    crore, rest = divmod(n, CRORE)
    lakh, rest = divmod(rest, LAKH)
    thousand, remainder = divmod(rest, THOUSAND)

    parts = []
    if crore:
        # more than 999 crore recurses through the same grouping
        parts.append(integer_to_words(crore) + " Crore")
    if lakh:
        parts.append(_below_thousand(lakh) + " Lakh")
    if thousand:
        parts.append(_below_thousand(thousand) + " Thousand")
    if remainder:
        parts.append(_below_thousand(remainder))
    return " ".join(parts)


def number_to_words(amount: int | float | str | Decimal) -> str:
    """
    >>> number_to_words(150000)
    'One Lakh Fifty Thousand Rupees Only'
    >>> number_to_words(1234567.89)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees and Eighty Nine Paise Only'
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite():
        raise ValueError(f"Cannot convert non-finite amount to words: {amount!r}")
    if value < 0:
        raise ValueError(f"Cannot convert negative amount to words: {amount!r}")

    if value == 0:
        return "Zero Rupees Only"

    rupees = int(value)
    paise = int(((value - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if paise == 100:
        rupees, paise = rupees + 1, 0

    words = (integer_to_words(rupees) or "Zero") + " Rupees"
    if paise:
        words += " and " + _below_thousand(paise) + " Paise"
    return words + " Only"
