import re

from rankboard.reports.models import MarketQuote

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

_EMPTY_VALUES = {"-", "0"}
_EMPTY_AMOUNTS = {"0.00", "+0.00", "-0.00"}
_EMPTY_CHANGES = {"0%", "0.00%"}


def _to_number(value) -> float | None:
    """Strips everything but digits, dots and minus, then reads the leading number."""
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", str(value)))
    return float(match.group(0)) if match else None


def trend_direction(value) -> str:
    """'up', 'down' or 'flat'. An explicit sign wins over the number."""
    if value is None or value == "":
        return "flat"
    text = str(value).strip()
    if text.startswith("+"):
        return "up"
    if text.startswith("-"):
        return "down"
    num = _to_number(text)
    if num is not None:
        if num > 0:
            return "up"
        if num < 0:
            return "down"
    return "flat"


def format_price(price) -> str:
    if not price:
        return "-"
    num = _to_number(price)
    if num is None:
        return str(price)
    # At most three fraction digits, trailing zeros dropped.
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def format_percent(value) -> str:
    if value is None or value == "":
        return "0%"
    text = str(value).strip()
    return text if "%" in text else f"{text}%"


def market_display(quote: MarketQuote) -> dict:
    """
    Display strings for one market card. Absent or zero-looking values come
    back as "" so the card stays blank instead of showing "0".
    """
    value = quote.value if quote.value and quote.value not in _EMPTY_VALUES else ""
    amount = quote.change_amount if quote.change_amount and quote.change_amount not in _EMPTY_AMOUNTS else ""
    if quote.change and quote.change not in _EMPTY_CHANGES:
        change = format_percent(quote.change).replace("+", "").replace("-", "")
    else:
        change = ""
    return {
        "value": value,
        "change_amount": amount,
        "change": change,
        "direction": trend_direction(quote.change),
    }
