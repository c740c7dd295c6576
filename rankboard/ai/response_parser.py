"""
Turns the model's response text into typed extraction data.

Parsing only fails when no JSON object can be recovered at all. Missing
fields fall back to empty lists and placeholder market values.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from rankboard.core.config import STOCK_LIST_LIMIT, THEME_LIST_LIMIT
from rankboard.core.errors import MalformedResponseError
from rankboard.reports.models import MarketQuote, MarketStatus, RankedEntry


@dataclass
class ExtractionResult:
    extracted_time: Optional[str] = None
    market_status: MarketStatus = field(default_factory=MarketStatus)
    realtime_stocks: Tuple[RankedEntry, ...] = ()
    cumulative_stocks: Tuple[RankedEntry, ...] = ()
    themes_by_rank: Tuple[RankedEntry, ...] = ()
    themes_by_change: Tuple[RankedEntry, ...] = ()


_FENCE = re.compile(r"```(?:json)?\s*(.+?)\s*```", re.DOTALL)
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def _json_candidates(text: str):
    """The reply as a whole, then its fenced blocks (last first), then the widest {...} span."""
    yield text
    yield from reversed(_FENCE.findall(text))
    span = _OBJECT_SPAN.search(text)
    if span:
        yield span.group(0)


def _recover_json(text: str):
    """First candidate that decodes, or None."""
    if not isinstance(text, str) or not text.strip():
        return None
    for candidate in _json_candidates(text.strip()):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


def _text(value) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _rank(value, position: int) -> int:
    if isinstance(value, bool):
        return position
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return position
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return position
    return position


def _entries(raw, limit: int, with_price: bool) -> Tuple[RankedEntry, ...]:
    if not isinstance(raw, list):
        return ()
    entries = []
    for idx, item in enumerate(raw[:limit]):
        if not isinstance(item, dict):
            continue
        entries.append(RankedEntry(
            rank=_rank(item.get("rank"), idx + 1),
            name=_text(item.get("name")) or "",
            change_percent=_text(item.get("changePercent")) or "",
            price=_text(item.get("price")) if with_price else None,
        ))
    return tuple(entries)


def _quote(raw: dict, market: str) -> MarketQuote:
    default = MarketQuote()
    return MarketQuote(
        value=_text(raw.get(market)) or default.value,
        change=_text(raw.get(f"{market}Change")) or default.change,
        change_amount=_text(raw.get(f"{market}ChangeAmount")) or default.change_amount,
    )


def _market_status(raw) -> MarketStatus:
    if not isinstance(raw, dict):
        return MarketStatus()
    return MarketStatus(kospi=_quote(raw, "kospi"), kosdaq=_quote(raw, "kosdaq"))


def parse_extraction(text: str) -> ExtractionResult:
    data = _recover_json(text)
    if data is None:
        raise MalformedResponseError("Response text is not valid JSON")
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

    extracted_time = _text(data.get("extractedTime"))
    return ExtractionResult(
        extracted_time=extracted_time.strip() if extracted_time and extracted_time.strip() else None,
        market_status=_market_status(data.get("marketStatus")),
        realtime_stocks=_entries(data.get("realtimeStocks"), STOCK_LIST_LIMIT, with_price=True),
        cumulative_stocks=_entries(data.get("cumulativeStocks"), STOCK_LIST_LIMIT, with_price=True),
        themes_by_rank=_entries(data.get("themesByRank"), THEME_LIST_LIMIT, with_price=False),
        themes_by_change=_entries(data.get("themesByChange"), THEME_LIST_LIMIT, with_price=False),
    )
