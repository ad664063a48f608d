"""Tests for the HSN/SAC catalogue, search merging and item suggestions."""

from decimal import Decimal
from types import SimpleNamespace

from invoicer.domain.services.hsn_sac import (
    COMMON_HSN_SAC_CODES,
    build_item_suggestions,
    get_hsn_sac_by_code,
    hsn_sac_row_to_dict,
    merge_search_results,
    search_hsn_sac_codes,
    validate_hsn_sac_code,
)


def _frequent(name, code, uses):
    return SimpleNamespace(
        item_name=name,
        hsn_sac_code=code,
        hsn_sac_type="SAC",
        default_rate=Decimal("1500"),
        default_gst_rate=Decimal("18"),
        unit_of_measurement="HRS",
        category="IT Services",
        usage_count=uses,
    )


class TestCatalogue:
    def test_codes_are_unique(self):
        codes = [entry["code"] for entry in COMMON_HSN_SAC_CODES]
        assert len(codes) == len(set(codes))

    def test_lookup_by_code(self):
        entry = get_hsn_sac_by_code(" 8471 ")
        assert entry["type"] == "HSN"
        assert entry["gst_rate"] == 18
        assert get_hsn_sac_by_code("0000") is None

    def test_lookup_returns_copy(self):
        get_hsn_sac_by_code("8471")["gst_rate"] = 99
        assert get_hsn_sac_by_code("8471")["gst_rate"] == 18

    def test_search_by_description(self):
        results = search_hsn_sac_codes("software")
        assert [r["code"] for r in results] == ["998214"]
        assert results[0]["source"] == "static"

    def test_search_filters_type(self):
        results = search_hsn_sac_codes("services", type_="SAC")
        assert results
        assert all(r["type"] == "SAC" for r in results)


class TestValidation:
    def test_hsn_lengths(self):
        assert validate_hsn_sac_code("8471", "HSN").is_valid
        assert validate_hsn_sac_code("84713010", "HSN").is_valid
        assert not validate_hsn_sac_code("847", "HSN").is_valid

    def test_sac_must_be_six_digits(self):
        assert validate_hsn_sac_code(" 998314 ", "SAC").normalized_code == "998314"
        result = validate_hsn_sac_code("99831", "SAC")
        assert not result.is_valid
        assert result.errors == ["SAC code must be exactly 6 digits"]

    def test_empty(self):
        assert validate_hsn_sac_code("", "HSN").errors == ["HSN/SAC code cannot be empty"]


class TestMerging:
    def test_database_first_and_deduplicated(self):
        row = SimpleNamespace(
            code="998213", type="SAC", description="Website building", category="IT Services",
            sub_category=None, gst_rate=Decimal("18.00"), unit_of_measurement="NOS",
        )
        merged = merge_search_results([hsn_sac_row_to_dict(row)], "web")
        assert merged[0]["source"] == "database"
        assert [m["code"] for m in merged].count("998213") == 1

    def test_limit(self):
        assert len(merge_search_results([], "", limit=5)) == 5


class TestSuggestions:
    def test_frequent_items_take_seventy_percent(self):
        frequent = [_frequent(f"Item {i}", f"99800{i}", 10 - i) for i in range(10)]
        suggestions = build_item_suggestions(frequent, "", limit=10)
        sources = [s["source"] for s in suggestions]
        assert sources.count("frequently_used") == 7
        assert sources.count("hsn_sac_database") == 3
        assert len(suggestions) == 10

    def test_catalogue_skips_codes_already_suggested(self):
        suggestions = build_item_suggestions([_frequent("Custom app", "998214", 3)], "software", limit=10)
        assert [s["hsn_sac_code"] for s in suggestions] == ["998214"]
        assert suggestions[0]["source"] == "frequently_used"
        assert suggestions[0]["default_rate"] == 1500.0
