from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Holiday


class HolidayRepository(Protocol):
    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError


class HolidayCalendar(Protocol):
    def is_holiday(self, work_date: date) -> bool:
        raise NotImplementedError
