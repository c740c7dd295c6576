from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


CURRENT_TIMESTAMP = "current"
END_OF_DAY = "23:59"
DEFAULT_TITLE = "market report"


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    name: str
    change_percent: str
    price: Optional[str] = None


@dataclass(frozen=True)
class MarketQuote:
    value: str = "-"
    change: str = "0%"
    change_amount: str = "0.00"


@dataclass(frozen=True)
class MarketStatus:
    kospi: MarketQuote = field(default_factory=MarketQuote)
    kosdaq: MarketQuote = field(default_factory=MarketQuote)


@dataclass(frozen=True)
class Report:
    id: str
    date: str                 # YYYY-MM-DD
    title: str
    timestamp: str            # "hh:mm" or CURRENT_TIMESTAMP
    market_status: MarketStatus = field(default_factory=MarketStatus)
    realtime_stocks: Tuple[RankedEntry, ...] = ()
    cumulative_stocks: Tuple[RankedEntry, ...] = ()
    themes_by_rank: Tuple[RankedEntry, ...] = ()
    themes_by_change: Tuple[RankedEntry, ...] = ()

    @property
    def sort_time(self) -> str:
        """Zero-padded "hh:mm" so "9:15" sorts before "10:00"."""
        if self.timestamp == CURRENT_TIMESTAMP:
            return END_OF_DAY
        hour, sep, rest = self.timestamp.partition(":")
        if sep and hour.isdigit():
            return f"{hour.zfill(2)}:{rest}"
        return self.timestamp

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.date, self.sort_time)


def derive_title(extracted_time: Optional[str]) -> str:
    """
    Builds the tab label from the screenshot clock, e.g. "lunch (12:30)".
    An hour that cannot be read falls through to "close".
    """
    if not extracted_time:
        return DEFAULT_TITLE

    try:
        hour = int(extracted_time.split(":")[0])
    except ValueError:
        hour = None

    if hour is None:
        period = "close"
    elif hour < 12:
        period = "morning"
    elif hour < 14:
        period = "lunch"
    elif hour < 16:
        period = "afternoon"
    else:
        period = "close"
    return f"{period} ({extracted_time})"
