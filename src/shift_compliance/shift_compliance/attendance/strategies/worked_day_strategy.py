from __future__ import annotations

from datetime import datetime, tzinfo

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftConfig
from ..calculator.base import WorkHoursCalculator
from ..calculator.standard_calculator import StandardWorkHoursCalculator
from ..model import AttendanceRecord
from .base import StatusDecision, StatusStrategy


class WorkedDayStrategy(StatusStrategy):
    """Sessions exist: on time vs late, then the half-day override."""

    def __init__(self, calculator: WorkHoursCalculator | None = None):
        self._calculator = calculator or StandardWorkHoursCalculator()

    def decide(self, *, record: AttendanceRecord, shift: ShiftConfig, now: datetime, zone: tzinfo) -> StatusDecision:
        first_in = record.first_check_in
        if first_in <= shift.late_after(record.work_date, zone):
            candidate = AttendanceStatus.PRESENT
        else:
            candidate = AttendanceStatus.LATE

        # Compared unrounded; the stored total is rounded to 2 decimals.
        worked_hours = self._calculator.worked_minutes(record.sessions) / 60
        if record.closed_sessions and worked_hours < shift.half_day_threshold_hours:
            note = "Checked in late" if candidate == AttendanceStatus.LATE else None
            return StatusDecision(status=AttendanceStatus.HALF_DAY, note=note)

        return StatusDecision(status=candidate)
