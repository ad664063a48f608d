# invoicer/domain/services/gst_calculator.py
"""
GST tax calculation for invoice line items.

Intra-state supplies split the GST amount equally into CGST and SGST;
inter-state supplies carry the full amount as IGST. All arithmetic is done in
``Decimal`` and nothing is rounded here: callers quantize with
:func:`round_money` only when presenting or persisting a value, so that
rounding error does not accumulate across many line items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Iterable, Mapping

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONEY = Decimal("0.01")

DEFAULT_GST_RATE = Decimal("18")
DEFAULT_UNIT = "NOS"
DEFAULT_HSN_SAC_TYPE = "HSN"


def to_decimal(value: Any, default: str = "0") -> Decimal:
    """Convert int / float / str / Decimal / None to Decimal."""
    if value is None or value == "":
        return Decimal(default)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Any) -> Decimal:
    """Quantize to paise (2 places, half-up). Presentation boundary only."""
    return to_decimal(value).quantize(MONEY, rounding=ROUND_HALF_UP)


@dataclass
class LineItem:
    quantity: Decimal
    rate: Decimal
    gst_rate: Decimal
    description: str = ""
    hsn_sac_code: str | None = None
    hsn_sac_type: str = DEFAULT_HSN_SAC_TYPE
    unit_of_measurement: str = DEFAULT_UNIT
    item_category: str | None = None

    def __post_init__(self) -> None:
        self.quantity = to_decimal(self.quantity)
        self.rate = to_decimal(self.rate)
        self.gst_rate = to_decimal(self.gst_rate)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LineItem":
        return cls(
            quantity=data.get("quantity"),
            rate=data.get("rate"),
            gst_rate=data.get("gst_rate"),
            description=data.get("description") or "",
            hsn_sac_code=data.get("hsn_sac_code") or None,
            hsn_sac_type=data.get("hsn_sac_type") or DEFAULT_HSN_SAC_TYPE,
            unit_of_measurement=data.get("unit_of_measurement") or DEFAULT_UNIT,
            item_category=data.get("item_category"),
        )


@dataclass
class LineItemResult:
    """A line item with its computed amount and tax components."""

    quantity: Decimal
    rate: Decimal
    gst_rate: Decimal
    amount: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_amount: Decimal
    description: str = ""
    hsn_sac_code: str | None = None
    hsn_sac_type: str = DEFAULT_HSN_SAC_TYPE
    unit_of_measurement: str = DEFAULT_UNIT
    item_category: str | None = None

    @property
    def gst_amount(self) -> Decimal:
        return self.cgst + self.sgst + self.igst

    def to_dict(self, rounded: bool = True) -> dict:
        conv = round_money if rounded else (lambda v: v)
        return {
            "description": self.description,
            "hsn_sac_code": self.hsn_sac_code,
            "hsn_sac_type": self.hsn_sac_type,
            "unit_of_measurement": self.unit_of_measurement,
            "quantity": self.quantity,
            "rate": self.rate,
            "gst_rate": self.gst_rate,
            "amount": conv(self.amount),
            "cgst": conv(self.cgst),
            "sgst": conv(self.sgst),
            "igst": conv(self.igst),
            "total_amount": conv(self.total_amount),
        }


@dataclass
class InvoiceTotals:
    subtotal: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_amount: Decimal = ZERO
    items: list[LineItemResult] = field(default_factory=list)

    @property
    def total_tax(self) -> Decimal:
        return self.cgst + self.sgst + self.igst

    def to_dict(self, rounded: bool = True) -> dict:
        conv = round_money if rounded else (lambda v: v)
        return {
            "subtotal": conv(self.subtotal),
            "cgst": conv(self.cgst),
            "sgst": conv(self.sgst),
            "igst": conv(self.igst),
            "total_amount": conv(self.total_amount),
            "items": [item.to_dict(rounded=rounded) for item in self.items],
        }


def _as_line_item(item: LineItem | Mapping[str, Any]) -> LineItem:
    if isinstance(item, LineItem):
        return item
    return LineItem.from_mapping(item)


def calculate_line_item(item: LineItem | Mapping[str, Any], is_inter_state: bool) -> LineItemResult:
    """Compute amount and CGST/SGST or IGST for one line item."""
    item = _as_line_item(item)

    amount = item.quantity * item.rate
    gst_amount = amount * item.gst_rate / HUNDRED

    cgst = sgst = igst = ZERO
    if is_inter_state:
        igst = gst_amount
    else:
        cgst = gst_amount / 2
        sgst = gst_amount / 2

    return LineItemResult(
        quantity=item.quantity,
        rate=item.rate,
        gst_rate=item.gst_rate,
        amount=amount,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total_amount=amount + gst_amount,
        description=item.description,
        hsn_sac_code=item.hsn_sac_code,
        hsn_sac_type=item.hsn_sac_type,
        unit_of_measurement=item.unit_of_measurement,
        item_category=item.item_category,
    )


def calculate_invoice_totals(
    items: Iterable[LineItem | Mapping[str, Any]],
    is_inter_state: bool,
) -> InvoiceTotals:
    """
    Compute per-item breakdowns and aggregate totals for an invoice.

    ``total_amount`` is ``subtotal + cgst + sgst + igst`` and equals the sum of
    the item totals exactly. An empty item list gives all-zero totals.
    """
    totals = InvoiceTotals()

    for raw in items:
        result = calculate_line_item(raw, is_inter_state)
        totals.items.append(result)
        totals.subtotal += result.amount
        totals.cgst += result.cgst
        totals.sgst += result.sgst
        totals.igst += result.igst

    totals.total_amount = totals.subtotal + totals.cgst + totals.sgst + totals.igst
    return totals


# ---------------------------------------------------------------------------
# HSN/SAC-aware processing
# ---------------------------------------------------------------------------

def process_invoice_items(
    items: Iterable[Mapping[str, Any]],
    is_inter_state: bool,
    lookup: Callable[[str], Mapping[str, Any] | None] | None = None,
    default_gst_rate: Decimal = DEFAULT_GST_RATE,
) -> InvoiceTotals:
    """
    Fill in HSN/SAC defaults, then calculate totals.

    When an item carries an HSN/SAC code known to ``lookup``, the catalogue's
    GST rate, unit, category and code type override the item's own values.
    Items without a GST rate fall back to ``default_gst_rate``.
    """
    if lookup is None:
        from invoicer.domain.services.hsn_sac import get_hsn_sac_by_code

        lookup = get_hsn_sac_by_code

    prepared: list[LineItem] = []
    for raw in items:
        gst_rate = raw.get("gst_rate")
        unit = raw.get("unit_of_measurement") or DEFAULT_UNIT
        code_type = raw.get("hsn_sac_type") or DEFAULT_HSN_SAC_TYPE
        category = raw.get("item_category")
        code = (raw.get("hsn_sac_code") or "").strip() or None

        if code:
            details = lookup(code)
            if details:
                if details.get("gst_rate") is not None:
                    gst_rate = details["gst_rate"]
                unit = details.get("unit_of_measurement") or unit
                category = details.get("category") or category
                code_type = details.get("type") or code_type

        prepared.append(
            LineItem(
                quantity=raw.get("quantity"),
                rate=raw.get("rate"),
                gst_rate=default_gst_rate if gst_rate is None else gst_rate,
                description=raw.get("description") or "",
                hsn_sac_code=code,
                hsn_sac_type=code_type,
                unit_of_measurement=unit,
                item_category=category,
            )
        )

    return calculate_invoice_totals(prepared, is_inter_state)


def summarize_by_hsn(totals: InvoiceTotals) -> list[dict]:
    """
    HSN/SAC-wise tax summary, grouped by (code, gst rate).

    Items without a code are grouped under an empty code.
    """
    groups: dict[tuple[str, Decimal], dict] = {}
    for item in totals.items:
        key = (item.hsn_sac_code or "", item.gst_rate)
        row = groups.get(key)
        if row is None:
            row = {
                "hsn_sac_code": key[0],
                "hsn_sac_type": item.hsn_sac_type,
                "gst_rate": item.gst_rate,
                "taxable_amount": ZERO,
                "cgst": ZERO,
                "sgst": ZERO,
                "igst": ZERO,
                "total_tax": ZERO,
            }
            groups[key] = row
        row["taxable_amount"] += item.amount
        row["cgst"] += item.cgst
        row["sgst"] += item.sgst
        row["igst"] += item.igst
        row["total_tax"] += item.gst_amount

    return list(groups.values())
