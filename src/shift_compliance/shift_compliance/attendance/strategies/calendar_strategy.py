from __future__ import annotations

from datetime import datetime, tzinfo

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftConfig
from ..model import AttendanceRecord
from .base import StatusDecision, StatusStrategy


class HolidayStrategy(StatusStrategy):
    """Holiday wins over everything, check-ins included."""

    def decide(self, *, record: AttendanceRecord, shift: ShiftConfig, now: datetime, zone: tzinfo) -> StatusDecision:
        note = "Worked on a holiday" if record.sessions else None
        return StatusDecision(status=AttendanceStatus.HOLIDAY, note=note)


class LeaveStrategy(StatusStrategy):
    """Approved leave covers the day."""

    def decide(self, *, record: AttendanceRecord, shift: ShiftConfig, now: datetime, zone: tzinfo) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_LEAVE)
