"""
Tests for numeric string normalisation
"""

import pytest

from exact_money.errors import InvalidAmountError
from exact_money.number import normalise


class TestNormalise:
    """Test normalise() across common amount spellings"""

    def test_plain_literals(self):
        """Test plain decimal literals pass through"""
        assert normalise("123.45") == "123.45"
        assert normalise("-0.5") == "-0.5"
        assert normalise("+7") == "+7"
        assert normalise(".25") == ".25"
        assert normalise("  42  ") == "42"

    def test_exponent_literals(self):
        """Test scientific notation keeps its exponent"""
        assert normalise("1e5") == "1e5"
        assert normalise("1E-7") == "1E-7"
        assert normalise(" 2.5E+3 ") == "2.5E+3"

    def test_exponent_with_symbols_rejected(self):
        """Test an exponent mixed with symbols is not guessed at"""
        for value in ["1e5 €", "$2.5E+3"]:
            with pytest.raises(InvalidAmountError):
                normalise(value)

    def test_currency_symbols_removed(self):
        """Test symbols and codes are stripped"""
        assert normalise("$1,234.56") == "1234.56"
        assert normalise("€ 99,95") == "99.95"
        assert normalise("1.234,56 EUR") == "1234.56"

    def test_grouping(self):
        """Test grouping separators are dropped"""
        assert normalise("1,234") == "1234"
        assert normalise("1,234,567") == "1234567"
        assert normalise("1.234.567") == "1234567"
        assert normalise("1'000'000.50") == "1000000.50"
        assert normalise("1 000 000,50") == "1000000.50"
        assert normalise("1_000") == "1000"

    def test_decimal_comma(self):
        """Test a single comma with one or two digits is a decimal separator"""
        assert normalise("12,5") == "12.5"
        assert normalise("0,99") == "0.99"
        assert normalise(",5") == ".5"

    def test_invalid_values(self):
        """Test text without a number is rejected"""
        for value in ["", "   ", "abc", "-", "1-2", "1.2.3,4,5", None, 12]:
            with pytest.raises(InvalidAmountError):
                normalise(value)
