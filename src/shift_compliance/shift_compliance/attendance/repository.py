from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSession


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_or_create(self, employee_id: int, work_date: date) -> AttendanceRecord:
        """Lazily create the day's record on first access."""
        raise NotImplementedError

    def add_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        raise NotImplementedError

    def close_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        raise NotImplementedError

    def save_derived(self, record: AttendanceRecord) -> None:
        """Persist status and derived totals only; sessions are left untouched."""
        raise NotImplementedError

    def list_range(
        self,
        employee_id: int,
        *,
        start_date: date,
        end_date: date,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
