from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.constants import DEFAULT_WEEKLY_OFF_DAYS
from .repository import HolidayCalendar, HolidayRepository


class WeeklyOffHolidayCalendar(HolidayCalendar):
    """Declared holidays plus recurring weekly off-days (weekday numbers, Monday=0)."""

    def __init__(self, holidays: HolidayRepository, *, weekly_off_days: Iterable[int] = DEFAULT_WEEKLY_OFF_DAYS):
        self._holidays = holidays
        self._weekly_off = frozenset(int(d) for d in weekly_off_days)

    def is_holiday(self, work_date: date) -> bool:
        if work_date.weekday() in self._weekly_off:
            return True
        return self._holidays.get_by_date(work_date) is not None
