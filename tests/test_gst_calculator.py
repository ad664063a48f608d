"""Tests for the GST tax calculator."""

from decimal import Decimal

import pytest

from invoicer.domain.services.gst_calculator import (
    LineItem,
    calculate_invoice_totals,
    calculate_line_item,
    process_invoice_items,
    round_money,
    summarize_by_hsn,
    to_decimal,
)


class TestLineItem:
    def test_intra_state_splits_evenly(self):
        result = calculate_line_item({"quantity": 2, "rate": 500, "gst_rate": 18}, is_inter_state=False)
        assert result.amount == Decimal("1000")
        assert result.cgst == Decimal("90")
        assert result.sgst == Decimal("90")
        assert result.igst == Decimal("0")
        assert result.total_amount == Decimal("1180")

    def test_inter_state_is_all_igst(self):
        result = calculate_line_item(LineItem(quantity=2, rate=500, gst_rate=18), is_inter_state=True)
        assert result.igst == Decimal("180")
        assert result.cgst == result.sgst == Decimal("0")
        assert result.total_amount == Decimal("1180")

    def test_zero_rate(self):
        result = calculate_line_item({"quantity": 3, "rate": 100, "gst_rate": 0}, is_inter_state=False)
        assert result.gst_amount == Decimal("0")
        assert result.total_amount == Decimal("300")

    def test_float_inputs_are_exact(self):
        result = calculate_line_item({"quantity": 0.1, "rate": 0.2, "gst_rate": 18}, is_inter_state=True)
        assert result.amount == Decimal("0.02")

    def test_pass_through_fields(self):
        item = LineItem(quantity=1, rate=10, gst_rate=5, description="Rice", hsn_sac_code="1006",
                        unit_of_measurement="KGS")
        result = calculate_line_item(item, is_inter_state=False)
        assert result.description == "Rice"
        assert result.hsn_sac_code == "1006"
        assert result.unit_of_measurement == "KGS"


class TestInvoiceTotals:
    def test_empty_list_is_all_zero(self):
        totals = calculate_invoice_totals([], is_inter_state=False)
        assert totals.subtotal == totals.cgst == totals.sgst == totals.igst == totals.total_amount == 0
        assert totals.items == []

    def test_aggregates(self, sample_items):
        totals = calculate_invoice_totals(sample_items, is_inter_state=False)
        assert totals.subtotal == Decimal("101500")
        assert totals.cgst == Decimal("9090")
        assert totals.sgst == Decimal("9090")
        assert totals.igst == Decimal("0")
        assert totals.total_amount == Decimal("119680")

    def test_total_equals_sum_of_items(self):
        items = [{"quantity": "3", "rate": "33.33", "gst_rate": "18"} for _ in range(7)]
        for inter in (True, False):
            totals = calculate_invoice_totals(items, inter)
            assert totals.total_amount == sum(i.total_amount for i in totals.items)
            assert totals.total_amount == totals.subtotal + totals.cgst + totals.sgst + totals.igst

    def test_intra_and_inter_have_same_tax(self, sample_items):
        intra = calculate_invoice_totals(sample_items, is_inter_state=False)
        inter = calculate_invoice_totals(sample_items, is_inter_state=True)
        assert intra.cgst + intra.sgst == inter.igst
        assert intra.total_amount == inter.total_amount

    def test_no_intermediate_rounding(self):
        # 1 x 0.05 at 5% -> tax 0.0025, halves of 0.00125 survive unrounded
        totals = calculate_invoice_totals([{"quantity": 1, "rate": "0.05", "gst_rate": 5}], False)
        assert totals.cgst == Decimal("0.00125")
        assert round_money(totals.total_amount) == Decimal("0.05")

    def test_to_dict_rounds(self):
        totals = calculate_invoice_totals([{"quantity": 1, "rate": "10.005", "gst_rate": 0}], True)
        assert totals.to_dict()["subtotal"] == Decimal("10.01")
        assert totals.to_dict(rounded=False)["subtotal"] == Decimal("10.005")


class TestHelpers:
    def test_to_decimal(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("") == Decimal("0")
        assert to_decimal(1.1) == Decimal("1.1")

    @pytest.mark.parametrize("value,expected", [("2.345", "2.35"), ("2.344", "2.34"), (0, "0.00")])
    def test_round_money_half_up(self, value, expected):
        assert round_money(value) == Decimal(expected)


class TestProcessInvoiceItems:
    def test_catalogue_overrides_rate_and_unit(self):
        totals = process_invoice_items(
            [{"description": "Rice", "quantity": 10, "rate": 50, "gst_rate": 18, "hsn_sac_code": "1006"}],
            is_inter_state=False,
        )
        item = totals.items[0]
        assert item.gst_rate == Decimal("5")
        assert item.unit_of_measurement == "KGS"
        assert item.item_category == "Agricultural Products"

    def test_missing_rate_defaults_to_18(self):
        totals = process_invoice_items([{"quantity": 1, "rate": 100}], is_inter_state=True)
        assert totals.items[0].gst_rate == Decimal("18")
        assert totals.igst == Decimal("18")

    def test_custom_lookup(self):
        lookup = {"999999": {"gst_rate": 12, "type": "SAC", "unit_of_measurement": "HRS"}}.get
        totals = process_invoice_items(
            [{"quantity": 2, "rate": 100, "hsn_sac_code": "999999"}], False, lookup=lookup
        )
        assert totals.items[0].gst_rate == Decimal("12")
        assert totals.items[0].hsn_sac_type == "SAC"
        assert totals.items[0].unit_of_measurement == "HRS"

    def test_unknown_code_keeps_item_values(self):
        totals = process_invoice_items(
            [{"quantity": 1, "rate": 100, "gst_rate": 28, "hsn_sac_code": "0000"}], False
        )
        assert totals.items[0].gst_rate == Decimal("28")


def test_summarize_by_hsn_groups_code_and_rate():
    totals = calculate_invoice_totals(
        [
            {"quantity": 1, "rate": 100, "gst_rate": 18, "hsn_sac_code": "8471"},
            {"quantity": 2, "rate": 100, "gst_rate": 18, "hsn_sac_code": "8471"},
            {"quantity": 1, "rate": 100, "gst_rate": 12, "hsn_sac_code": "8471"},
            {"quantity": 1, "rate": 50, "gst_rate": 5},
        ],
        is_inter_state=False,
    )
    summary = summarize_by_hsn(totals)
    assert len(summary) == 3
    first = summary[0]
    assert first["hsn_sac_code"] == "8471"
    assert first["taxable_amount"] == Decimal("300")
    assert first["total_tax"] == Decimal("54")
    assert summary[2]["hsn_sac_code"] == ""
