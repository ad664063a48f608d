"""Tests for rupee amounts in words (Indian numbering)."""

from decimal import Decimal

import pytest

from invoicer.domain.services.amount_words import integer_to_words, number_to_words


class TestNumberToWords:
    def test_zero(self):
        assert number_to_words(0) == "Zero Rupees Only"

    def test_hundred(self):
        assert number_to_words(100) == "One Hundred Rupees Only"

    def test_lakh(self):
        assert number_to_words(150000) == "One Lakh Fifty Thousand Rupees Only"

    def test_lakh_with_paise(self):
        assert number_to_words(1234567.89) == (
            "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees "
            "and Eighty Nine Paise Only"
        )

    def test_crore(self):
        assert number_to_words(25000000) == "Two Crore Fifty Lakh Rupees Only"

    def test_zero_groups_are_skipped(self):
        assert number_to_words(10000001) == "One Crore One Rupees Only"

    def test_teens_and_tens(self):
        assert number_to_words(19) == "Nineteen Rupees Only"
        assert number_to_words(40) == "Forty Rupees Only"
        assert number_to_words(999) == "Nine Hundred Ninety Nine Rupees Only"

    def test_paise_only(self):
        assert number_to_words(Decimal("0.50")) == "Zero Rupees and Fifty Paise Only"

    def test_paise_round_half_up(self):
        assert number_to_words("10.005") == "Ten Rupees and One Paise Only"

    def test_paise_carry_into_rupees(self):
        assert number_to_words("99.999") == "One Hundred Rupees Only"

    def test_more_than_999_crore(self):
        assert number_to_words(10_000_000_000) == "One Thousand Crore Rupees Only"

    @pytest.mark.parametrize("bad", [-1, "-0.01", float("inf"), float("nan")])
    def test_rejects_bad_input(self, bad):
        with pytest.raises(ValueError):
            number_to_words(bad)


def test_integer_to_words_below_thousand():
    assert integer_to_words(0) == ""
    assert integer_to_words(101) == "One Hundred One"
    assert integer_to_words(1000) == "One Thousand"
