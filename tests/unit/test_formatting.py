"""
Unit Tests - Money Formatting
"""
from decimal import Decimal

import pytest

from dashboard.readmodel.formatting import format_currency, parse_currency, to_major_units


class TestFormatCurrency:
    """Tests for format_currency"""
    
    def test_zero(self):
        assert format_currency(0) == "$0.00"
    
    def test_cents(self):
        assert format_currency(150) == "$1.50"
        assert format_currency(5) == "$0.05"
    
    def test_negative_sign_before_symbol(self):
        assert format_currency(-150) == "-$1.50"
    
    def test_thousands_separator(self):
        assert format_currency(123456789) == "$1,234,567.89"
    
    def test_none_is_zero(self):
        """Null sums over no rows render as zero"""
        assert format_currency(None) == "$0.00"
    
    def test_driver_types(self):
        """SUM() may come back as Decimal or numeric text"""
        assert format_currency(Decimal("10000")) == "$100.00"
        assert format_currency("5000") == "$50.00"
    
    def test_other_currencies(self):
        assert format_currency(150, "EUR") == "€1.50"
        assert format_currency(150, "gbp") == "£1.50"
    
    def test_zero_decimal_currency(self):
        """Yen has no minor unit"""
        assert format_currency(150, "JPY") == "¥150"
        assert format_currency(123456, "JPY") == "¥123,456"
    
    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            format_currency(True)


class TestParseCurrency:
    """Tests for parse_currency"""
    
    @pytest.mark.parametrize("cents", [0, 1, 150, -150, 123456789, -99])
    def test_inverse_of_format(self, cents):
        assert parse_currency(format_currency(cents)) == cents
    
    @pytest.mark.parametrize("currency", ["EUR", "GBP", "JPY"])
    def test_inverse_of_format_other_currencies(self, currency):
        assert parse_currency(format_currency(-12345, currency), currency) == -12345
    
    def test_without_symbol(self):
        assert parse_currency("12.30") == 1230
        assert parse_currency("1,000") == 100000
    
    @pytest.mark.parametrize(
        "text",
        ["", "$", "-", "abc", "$1.234", "$NaN", "-$-1.50", "--$1.50", "$1,2,3", "¥1.5"],
    )
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_currency(text, "JPY" if text.startswith("¥") else "USD")


def test_to_major_units():
    assert to_major_units(15795) == 157.95
    assert to_major_units(0) == 0.0
    assert to_major_units(150, "JPY") == 150.0
