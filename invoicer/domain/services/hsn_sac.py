# invoicer/domain/services/hsn_sac.py
"""
HSN (goods) / SAC (services) classification codes.

A built-in catalogue of common codes serves as the fallback behind the
``hsn_sac_codes`` table: search results from the database come first, then
static matches fill the remaining slots, de-duplicated by code.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal

logger = logging.getLogger("hsn_sac")

HsnSacType = Literal["HSN", "SAC"]

_HSN_RE = re.compile(r"^\d{4,8}$")
_SAC_RE = re.compile(r"^\d{6}$")


def _entry(code, type_, description, category, sub_category, gst_rate, unit) -> dict[str, Any]:
    return {
        "code": code,
        "type": type_,
        "description": description,
        "category": category,
        "sub_category": sub_category,
        "gst_rate": gst_rate,
        "unit_of_measurement": unit,
    }


COMMON_HSN_SAC_CODES: list[dict[str, Any]] = [
    # Goods
    _entry("1001", "HSN", "Wheat and meslin", "Agricultural Products", "Cereals", 0, "KGS"),
    _entry("1006", "HSN", "Rice", "Agricultural Products", "Cereals", 5, "KGS"),
    _entry("1701", "HSN", "Cane or beet sugar and chemically pure sucrose, in solid form",
           "Food Products", "Sugar and Confectionery", 5, "KGS"),
    _entry("2207", "HSN", "Undenatured ethyl alcohol of an alcoholic strength by volume of 80% vol or higher",
           "Beverages", "Alcoholic Beverages", 28, "LTR"),
    _entry("2710", "HSN", "Petroleum oils and oils obtained from bituminous minerals, other than crude",
           "Fuels", "Petroleum Products", 28, "LTR"),
    _entry("3004", "HSN", "Medicaments consisting of mixed or unmixed products for therapeutic or prophylactic uses",
           "Pharmaceuticals", "Medicines", 12, "NOS"),
    _entry("3926", "HSN", "Other articles of plastics and articles of other materials of headings 39.01 to 39.14",
           "Plastics", "Plastic Articles", 18, "NOS"),
    _entry("4901", "HSN", "Printed books, brochures, leaflets and similar printed matter",
           "Paper Products", "Printed Materials", 12, "NOS"),
    _entry("4911", "HSN", "Other printed matter, including printed pictures and photographs",
           "Paper Products", "Printed Materials", 12, "NOS"),
    _entry("5208", "HSN", "Woven fabrics of cotton", "Textiles", "Cotton Fabrics", 5, "MTR"),
    _entry("6109", "HSN", "T-shirts, singlets and other vests, knitted or crocheted",
           "Apparel", "Knitted Garments", 12, "NOS"),
    _entry("6204", "HSN", "Women's or girls' suits, ensembles, jackets, blazers, dresses, skirts",
           "Apparel", "Women's Clothing", 12, "NOS"),
    _entry("6403", "HSN", "Footwear with outer soles of rubber, plastics, leather", "Footwear", "Shoes", 18, "PAIRS"),
    _entry("7323", "HSN", "Table, kitchen or other household articles of iron or steel",
           "Metal Products", "Household Items", 18, "NOS"),
    _entry("8471", "HSN", "Automatic data processing machines and units thereof", "Electronics", "Computers", 18, "NOS"),
    _entry("8517", "HSN", "Telephone sets, including telephones for cellular networks",
           "Electronics", "Telecommunications", 12, "NOS"),
    _entry("8703", "HSN", "Motor cars and other motor vehicles for transport of persons",
           "Automobiles", "Passenger Vehicles", 28, "NOS"),
    _entry("9403", "HSN", "Other furniture and parts thereof", "Furniture", "Office Furniture", 18, "NOS"),
    _entry("9615", "HSN", "Combs, hair-slides and the like; hairpins, curling pins",
           "Personal Care", "Hair Accessories", 18, "NOS"),
    # Services
    _entry("991111", "SAC", "Transport of goods by road", "Transportation", "Goods Transport", 5, "KMS"),
    _entry("991211", "SAC", "Transport of passengers by road", "Transportation", "Passenger Transport", 5, "KMS"),
    _entry("996511", "SAC", "Advertising services", "Business Services", "Marketing Services", 18, "NOS"),
    _entry("997212", "SAC", "Architectural services", "Professional Services", "Architectural Services", 18, "NOS"),
    _entry("997213", "SAC", "Engineering services", "Professional Services", "Engineering Services", 18, "NOS"),
    _entry("998211", "SAC", "Information technology consulting services", "IT Services", "Consulting", 18, "HRS"),
    _entry("998212", "SAC", "Information technology design and development services",
           "IT Services", "Development", 18, "NOS"),
    _entry("998213", "SAC", "Web design and development services", "IT Services", "Web Development", 18, "NOS"),
    _entry("998214", "SAC", "Software implementation services", "IT Services", "Implementation", 18, "NOS"),
    _entry("998311", "SAC", "Data processing services", "IT Services", "Data Processing", 18, "NOS"),
    _entry("999599", "SAC", "Business auxiliary services not elsewhere classified",
           "Business Services", "Other Business Services", 18, "NOS"),
    _entry("997311", "SAC", "Legal services", "Professional Services", "Legal Services", 18, "HRS"),
    _entry("997321", "SAC", "Accounting, bookkeeping and auditing services",
           "Professional Services", "Accounting Services", 18, "HRS"),
    _entry("996111", "SAC", "Insurance services", "Financial Services", "Insurance", 18, "NOS"),
    _entry("997331", "SAC", "Management consulting services", "Professional Services", "Management Consulting", 18, "HRS"),
    _entry("995411", "SAC", "Hotel and similar accommodation services", "Hospitality", "Accommodation", 12, "DAYS"),
    _entry("996331", "SAC", "Event management services", "Entertainment", "Event Services", 18, "NOS"),
    _entry("997111", "SAC", "Maintenance and repair of motor vehicles", "Repair Services", "Vehicle Repair", 18, "NOS"),
    _entry("994611", "SAC", "Construction services of buildings", "Construction", "Building Construction", 12, "SQM"),
    _entry("998919", "SAC", "Other professional, technical and business services",
           "Professional Services", "Other Professional Services", 18, "HRS"),
]

_BY_CODE = {entry["code"]: entry for entry in COMMON_HSN_SAC_CODES}

UNIT_OF_MEASUREMENT_OPTIONS: dict[str, str] = {
    "NOS": "Numbers",
    "KGS": "Kilograms",
    "MTR": "Meters",
    "LTR": "Liters",
    "SQM": "Square Meters",
    "CUM": "Cubic Meters",
    "HRS": "Hours",
    "DAYS": "Days",
    "PAIRS": "Pairs",
    "SETS": "Sets",
    "KMS": "Kilometers",
    "TON": "Metric Tons",
    "GMS": "Grams",
    "ML": "Milliliters",
    "BOXES": "Boxes",
    "CARTONS": "Cartons",
    "PACKETS": "Packets",
    "BUNDLES": "Bundles",
    "ROLLS": "Rolls",
    "SHEETS": "Sheets",
}

GST_RATE_OPTIONS: dict[int, str] = {
    0: "Exempted",
    5: "Essential goods",
    12: "Standard goods",
    18: "Most goods/services",
    28: "Luxury items",
}


# ---------------------------------------------------------------------------
# Static catalogue lookups
# ---------------------------------------------------------------------------

def _matches(entry: dict[str, Any], term: str) -> bool:
    fields = (entry["code"], entry["description"], entry["category"], entry.get("sub_category") or "")
    return any(term in value.lower() for value in fields)


def search_hsn_sac_codes(query: str, type_: HsnSacType | None = None) -> list[dict[str, Any]]:
    """Case-insensitive substring search over code, description and categories."""
    term = (query or "").strip().lower()
    return [
        {**entry, "source": "static"}
        for entry in COMMON_HSN_SAC_CODES
        if (type_ is None or entry["type"] == type_) and _matches(entry, term)
    ]


def get_hsn_sac_by_code(code: str) -> dict[str, Any] | None:
    entry = _BY_CODE.get((code or "").strip())
    return dict(entry) if entry else None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@dataclass
class HsnSacValidation:
    is_valid: bool
    normalized_code: str
    errors: list[str] = field(default_factory=list)


def validate_hsn_sac_code(code: str, type_: HsnSacType) -> HsnSacValidation:
    """HSN codes are 4-8 digits; SAC codes are exactly 6 digits."""
    normalized = (code or "").strip().upper()
    errors: list[str] = []

    if not normalized:
        errors.append("HSN/SAC code cannot be empty")
    elif type_ == "HSN" and not _HSN_RE.match(normalized):
        errors.append("HSN code must be 4-8 digits")
    elif type_ == "SAC" and not _SAC_RE.match(normalized):
        errors.append("SAC code must be exactly 6 digits")

    return HsnSacValidation(is_valid=not errors, normalized_code=normalized, errors=errors)


# ---------------------------------------------------------------------------
# Merging database + static results
# ---------------------------------------------------------------------------

def hsn_sac_row_to_dict(row: Any) -> dict[str, Any]:
    """Convert an ``HsnSacCode`` ORM row to the catalogue dict shape."""
    return {
        "code": row.code,
        "type": row.type,
        "description": row.description,
        "category": row.category,
        "sub_category": row.sub_category,
        "gst_rate": float(row.gst_rate) if row.gst_rate is not None else None,
        "unit_of_measurement": row.unit_of_measurement,
        "source": "database",
    }


def merge_search_results(
    db_results: Iterable[dict[str, Any]],
    query: str,
    type_: HsnSacType | None = None,
    limit: int = 20,
) -> list[dict[str, Any]]:
    """Database matches first, then static matches; unique by code, at most ``limit``."""
    seen: set[str] = set()
    merged: list[dict[str, Any]] = []
    for entry in [*db_results, *search_hsn_sac_codes(query, type_)]:
        if entry["code"] in seen:
            continue
        seen.add(entry["code"])
        merged.append(entry)
        if len(merged) >= limit:
            break
    return merged


def build_item_suggestions(
    frequently_used: Iterable[Any],
    query: str,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """
    Item suggestions for the invoice form.

    Up to 70% of the slots go to the user's frequently used items (already
    ordered by usage), the rest are filled from the catalogue, skipping codes
    that are already suggested.
    """
    suggestions: list[dict[str, Any]] = []
    for item in list(frequently_used)[: int(limit * 0.7)]:
        suggestions.append(
            {
                "item_name": item.item_name,
                "hsn_sac_code": item.hsn_sac_code,
                "hsn_sac_type": item.hsn_sac_type,
                "default_rate": float(item.default_rate) if item.default_rate is not None else None,
                "default_gst_rate": float(item.default_gst_rate),
                "unit_of_measurement": item.unit_of_measurement,
                "category": item.category,
                "usage_count": item.usage_count,
                "source": "frequently_used",
            }
        )

    used_codes = {s["hsn_sac_code"] for s in suggestions if s["hsn_sac_code"]}
    for entry in search_hsn_sac_codes(query):
        if len(suggestions) >= limit:
            break
        if entry["code"] in used_codes:
            continue
        suggestions.append(
            {
                "item_name": entry["description"],
                "hsn_sac_code": entry["code"],
                "hsn_sac_type": entry["type"],
                "default_rate": None,
                "default_gst_rate": entry["gst_rate"],
                "unit_of_measurement": entry["unit_of_measurement"],
                "category": entry["category"],
                "usage_count": None,
                "source": "hsn_sac_database",
            }
        )

    return suggestions
