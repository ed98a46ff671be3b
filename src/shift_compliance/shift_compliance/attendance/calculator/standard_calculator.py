from __future__ import annotations

from datetime import date, tzinfo
from typing import Sequence

from ...shifts.model import ShiftConfig
from ..model import AttendanceSession
from .base import DayMetrics, WorkHoursCalculator


class StandardWorkHoursCalculator(WorkHoursCalculator):
    """Standard rule: sum of closed sessions; open sessions count once closed."""

    def worked_minutes(self, sessions: Sequence[AttendanceSession]) -> float:
        total = sum(s.duration_minutes for s in sessions if s.duration_minutes is not None)
        return max(total, 0.0)

    def day_metrics(
        self,
        sessions: Sequence[AttendanceSession],
        shift: ShiftConfig,
        *,
        work_date: date,
        zone: tzinfo,
    ) -> DayMetrics:
        hours = self.worked_minutes(sessions) / 60
        if not sessions:
            return DayMetrics(total_work_hours=0.0, late_minutes=0, early_departure_minutes=0, overtime_hours=0.0)

        first_in = min(s.start_time for s in sessions)
        late_minutes = 0
        if first_in > shift.late_after(work_date, zone):
            late_minutes = int((first_in - shift.starts_at(work_date, zone)).total_seconds() // 60)

        early_minutes = 0
        ends = [s.end_time for s in sessions if s.end_time is not None]
        if ends and not any(s.is_open for s in sessions):
            shift_end = shift.ends_at(work_date, zone)
            last_out = max(ends)
            if last_out < shift_end:
                early_minutes = int((shift_end - last_out).total_seconds() // 60)

        overtime = max(hours - shift.expected_working_hours, 0.0)
        return DayMetrics(
            total_work_hours=round(hours, 2),
            late_minutes=late_minutes,
            early_departure_minutes=early_minutes,
            overtime_hours=round(overtime, 2),
        )
