"""Tests for GSTIN / PAN / phone validation and state helpers."""

import pytest

from invoicer.domain.services.gstin_pan_validation import (
    format_phone_number,
    get_gst_type,
    is_inter_state,
    normalize_code,
    state_from_gstin,
    validate_email,
    validate_gst_number,
    validate_pan,
    validate_phone,
)


class TestGSTIN:
    @pytest.mark.parametrize("gstin", ["36AABCU9603R1ZM", "27AADCB2230M1ZP", "18AABCU9603R1ZM"])
    def test_valid(self, gstin):
        assert validate_gst_number(gstin) is True

    def test_lowercase_and_spaces_are_normalised(self):
        assert validate_gst_number("  36aabcu9603r1zm ") is True

    @pytest.mark.parametrize(
        "gstin",
        [None, "", "36AABCU9603R1Z", "36AABCU9603R0ZM", "36AABCU9603R1XM", "3XAABCU9603R1ZM"],
    )
    def test_invalid(self, gstin):
        assert validate_gst_number(gstin) is False


class TestPAN:
    def test_valid(self):
        assert validate_pan("AABCU9603R") is True
        assert validate_pan("aabcu9603r") is True

    @pytest.mark.parametrize("pan", [None, "", "AABCU9603", "1ABCU9603R", "AABCU96030"])
    def test_invalid(self, pan):
        assert validate_pan(pan) is False


class TestPhone:
    @pytest.mark.parametrize("phone", ["9876543210", "6000000000", " 7012345678 "])
    def test_valid(self, phone):
        assert validate_phone(phone) is True

    @pytest.mark.parametrize("phone", [None, "", "5876543210", "987654321", "+919876543210"])
    def test_invalid(self, phone):
        assert validate_phone(phone) is False

    def test_format(self):
        assert format_phone_number("9876543210") == "+91 98765 43210"
        assert format_phone_number("+91-98765-43210") == "+91 98765 43210"
        assert format_phone_number("12345") == "12345"


def test_validate_email():
    assert validate_email("a@b.in") is True
    assert validate_email("not-an-email") is False
    assert validate_email(None) is False


class TestJurisdiction:
    def test_same_state_ignores_case_and_spaces(self):
        assert get_gst_type("Assam", "assam ") == "intra"

    def test_different_state(self):
        assert get_gst_type("Assam", "Kerala") == "inter"
        assert is_inter_state("Assam", "Kerala") is True

    def test_state_from_gstin(self):
        assert state_from_gstin("18AABCU9603R1ZM") == "Assam"
        assert state_from_gstin("27aadcb2230m1zp") == "Maharashtra"
        assert state_from_gstin("99AABCU9603R1ZM") == ""
        assert state_from_gstin(None) == ""


def test_normalize_code():
    assert normalize_code(" abc ") == "ABC"
    assert normalize_code(None) == ""
