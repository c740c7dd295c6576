import pytest

from rankboard.reports.formatters import format_percent, format_price, market_display, trend_direction
from rankboard.reports.models import MarketQuote


@pytest.mark.parametrize("value, expected", [
    ("+1.2%", "up"),
    ("-0.4%", "down"),
    ("3.5", "up"),
    ("-", "down"),
    ("0.00%", "flat"),
    ("", "flat"),
    (None, "flat"),
    ("n/a", "flat"),
    (-2, "down"),
])
def test_trend_direction(value, expected):
    assert trend_direction(value) == expected


class TestFormatPrice:

    def test_empty(self):
        assert format_price(None) == "-"
        assert format_price("") == "-"

    def test_thousands(self):
        assert format_price("75000") == "75,000"
        assert format_price("75,000원") == "75,000"
        assert format_price("1234.5") == "1,234.5"

    def test_three_fraction_digits_at_most(self):
        assert format_price("1234.5678") == "1,234.568"
        assert format_price("0.25") == "0.25"
        assert format_price("100.000") == "100"

    def test_leading_number_is_read(self):
        assert format_price("1.2.3") == "1.2"
        assert trend_direction("1.2.3%") == "up"

    def test_non_numeric_passthrough(self):
        assert format_price("N/A") == "N/A"


class TestFormatPercent:

    def test_adds_sign(self):
        assert format_percent("1.5") == "1.5%"
        assert format_percent("+1.5%") == "+1.5%"

    def test_empty(self):
        assert format_percent(None) == "0%"
        assert format_percent("") == "0%"


class TestMarketDisplay:

    def test_zero_equivalents_blank(self):
        shown = market_display(MarketQuote())
        assert shown["value"] == ""
        assert shown["change_amount"] == ""
        assert shown["change"] == ""

    def test_values_shown_without_percent_sign(self):
        shown = market_display(MarketQuote("2,650.12", "+0.85%", "+22.31"))
        assert shown == {
            "value": "2,650.12",
            "change_amount": "+22.31",
            "change": "0.85%",
            "direction": "up",
        }

    @pytest.mark.parametrize("amount", ["0.00", "+0.00", "-0.00"])
    def test_zero_amounts(self, amount):
        assert market_display(MarketQuote("100", "1%", amount))["change_amount"] == ""

    def test_zero_value_string(self):
        assert market_display(MarketQuote("0", "0.00%", "1.00"))["value"] == ""
