from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Callable, List, Optional

from pytz import timezone as pytz_timezone

from rankboard.core.config import MARKET_TIMEZONE

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def market_today(tz_name: str = MARKET_TIMEZONE) -> date:
    return datetime.now(pytz_timezone(tz_name)).date()


class DateNavigator:
    """Selected report date plus a month view that never allows future days."""

    def __init__(self, today_fn: Callable[[], date] = market_today):
        self.today_fn = today_fn
        today = today_fn()
        self.selected_date = today.isoformat()
        self.view_year = today.year
        self.view_month = today.month

    def change_month(self, offset: int):
        index = self.view_year * 12 + (self.view_month - 1) + offset
        self.view_year, month_index = divmod(index, 12)
        self.view_month = month_index + 1

    def month_grid(self) -> List[Optional[date]]:
        """Leading None blanks up to the first weekday (Sunday first), then each day."""
        first_weekday, days_in_month = calendar.monthrange(self.view_year, self.view_month)
        # calendar uses Monday=0; the grid starts on Sunday
        leading = (first_weekday + 1) % 7
        grid: List[Optional[date]] = [None] * leading
        grid.extend(date(self.view_year, self.view_month, d) for d in range(1, days_in_month + 1))
        return grid

    def is_selectable(self, day: Optional[date]) -> bool:
        return day is not None and day <= self.today_fn()

    def select(self, day: Optional[date]) -> bool:
        if not self.is_selectable(day):
            return False
        self.selected_date = day.isoformat()
        return True
