from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..attendance.service import AttendanceService
from ..core.constants import STATUS_COLORS
from ..core.exceptions import ValidationError
from .aggregator import Aggregator
from .model import AttendanceSummary, CalendarEntry, MonthCalendar

WINDOWS = ("today", "month", "year")


class ReportService:
    """Fixed and custom summary windows. Every window is the same
    `summarize(start, end)` call with different bounds."""

    def __init__(self, attendance: AttendanceService, *, aggregator: Optional[Aggregator] = None):
        self._attendance = attendance
        self._aggregator = aggregator or Aggregator()

    def summarize(
        self,
        employee_id: int,
        start: date,
        end: date,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceSummary:
        if start > end:
            raise ValidationError("Start date must not be after end date")
        records = self._attendance.get_history(employee_id, start, end, now=now)
        return self._aggregator.summarize(int(employee_id), start, end, records)

    def today(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceSummary:
        today = self._attendance.local_today(employee_id, now=now)
        return self.summarize(employee_id, today, today, now=now)

    def month_to_date(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceSummary:
        today = self._attendance.local_today(employee_id, now=now)
        return self.summarize(employee_id, today.replace(day=1), today, now=now)

    def year_to_date(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceSummary:
        today = self._attendance.local_today(employee_id, now=now)
        return self.summarize(employee_id, date(today.year, 1, 1), today, now=now)

    def window(self, employee_id: int, name: str, *, now: Optional[datetime] = None) -> AttendanceSummary:
        if name == "today":
            return self.today(employee_id, now=now)
        if name == "month":
            return self.month_to_date(employee_id, now=now)
        if name == "year":
            return self.year_to_date(employee_id, now=now)
        raise ValidationError(f"Unknown window {name!r}, expected one of {', '.join(WINDOWS)}")

    def month(self, employee_id: int, year: int, month: int, *, now: Optional[datetime] = None) -> AttendanceSummary:
        start, end = _month_bounds(year, month)
        return self.summarize(employee_id, start, end, now=now)

    def month_calendar(self, employee_id: int, year: int, month: int, *, now: Optional[datetime] = None) -> MonthCalendar:
        start, end = _month_bounds(year, month)
        records = self._attendance.get_history(employee_id, start, end, now=now)

        entries = []
        for r in sorted(records, key=lambda x: x.work_date):
            entries.append(
                CalendarEntry(
                    work_date=r.work_date,
                    status=r.status,
                    color=STATUS_COLORS.get(r.status.value, "#6b7280"),
                    total_work_hours=r.total_work_hours,
                    check_in=r.first_check_in.isoformat() if r.first_check_in else None,
                    check_out=r.last_check_out.isoformat() if r.last_check_out else None,
                    note=r.note,
                )
            )
        summary = self._aggregator.summarize(int(employee_id), start, end, records)
        return MonthCalendar(employee_id=int(employee_id), year=year, month=month, entries=entries, summary=summary)


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be within 1..12")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)
