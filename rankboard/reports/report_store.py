"""
In-memory collection of analysis reports, partitioned by calendar date.

Invariants kept after every mutation:
  * reports are sorted by (date, time), with "current" treated as 23:59
  * the active id, when set, names a report that exists
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from rankboard.reports.models import Report

VIEW_REALTIME = "realtime"
VIEW_CUMULATIVE = "cumulative"
VIEW_MODES = (VIEW_REALTIME, VIEW_CUMULATIVE)


def default_view_mode(report: Report) -> str:
    """Realtime when the report has realtime rows, otherwise cumulative."""
    return VIEW_REALTIME if report.realtime_stocks else VIEW_CUMULATIVE


class ReportStore:
    def __init__(self):
        self._reports: List[Report] = []
        self.active_id: Optional[str] = None
        self.view_mode = VIEW_REALTIME
        self._subscribers: List[Callable[["ReportStore"], None]] = []

    def __len__(self):
        return len(self._reports)

    @property
    def reports(self) -> Tuple[Report, ...]:
        return tuple(self._reports)

    @property
    def active_report(self) -> Optional[Report]:
        return self.get(self.active_id) if self.active_id else None

    def get(self, report_id: str) -> Optional[Report]:
        for report in self._reports:
            if report.id == report_id:
                return report
        return None

    def filter_by_date(self, date: str) -> List[Report]:
        return [r for r in self._reports if r.date == date]

    def insert(self, report: Report):
        """Adds a report, re-sorts, and makes it the active one."""
        self._reports.append(report)
        self._reports.sort(key=lambda r: r.sort_key)
        self.active_id = report.id
        self.view_mode = default_view_mode(report)
        self._notify()

    def delete(self, report_id: str) -> bool:
        """
        Removes a report. If it was active, the last remaining report of the
        same date becomes active, or nothing if that date is now empty.
        """
        target = self.get(report_id)
        if target is None:
            return False

        self._reports = [r for r in self._reports if r.id != report_id]
        if self.active_id == report_id:
            same_day = self.filter_by_date(target.date)
            self.active_id = same_day[-1].id if same_day else None
        self._notify()
        return True

    def set_active(self, report_id: str):
        report = self.get(report_id)
        if report is None:
            raise KeyError(f"Unknown report: {report_id!r}")
        self.active_id = report_id
        self.view_mode = default_view_mode(report)
        self._notify()

    def set_view_mode(self, mode: str):
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode!r}")
        self.view_mode = mode
        self._notify()

    def subscribe(self, callback: Callable[["ReportStore"], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self)
