"""Rolls daily records up into window statistics. Pure, no I/O."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import WORKED_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceSummary

# Not part of the working-day denominator.
EXCLUDED_FROM_WORKING_DAYS = frozenset(
    {AttendanceStatus.HOLIDAY, AttendanceStatus.ON_LEAVE, AttendanceStatus.NO_RECORD}
)


class Aggregator:
    def summarize(self, employee_id: int, start: date, end: date, records: Iterable) -> AttendanceSummary:
        """Summary of `records` falling inside [start, end].

        rate = (PRESENT + LATE + HALF_DAY) / working days * 100, one decimal;
        working days exclude HOLIDAY, ON_LEAVE and NO_RECORD.
        """
        if start > end:
            raise ValidationError("Start date must not be after end date")

        in_window = [r for r in records if start <= r.work_date <= end and r.employee_id == employee_id]

        counts = {status: 0 for status in AttendanceStatus}
        for r in in_window:
            counts[r.status] += 1

        worked = [r for r in in_window if r.status in WORKED_STATUSES]
        working_days = sum(n for status, n in counts.items() if status not in EXCLUDED_FROM_WORKING_DAYS)

        rate = 0.0
        if working_days:
            rate = round(len(worked) / working_days * 100, 1)
            rate = min(max(rate, 0.0), 100.0)

        total_hours = sum(float(r.total_work_hours) for r in worked)
        average = round(total_hours / len(worked), 2) if worked else 0.0

        geo_tagged = [r for r in worked if r.sessions and r.sessions[0].location is not None]
        within = sum(1 for r in geo_tagged if r.sessions[0].is_within_geofence)
        compliance = round(within / len(geo_tagged) * 100, 1) if geo_tagged else 0.0

        return AttendanceSummary(
            employee_id=employee_id,
            period_start=start,
            period_end=end,
            counts=counts,
            working_days=working_days,
            attendance_rate=rate,
            average_work_hours=average,
            total_work_hours=round(total_hours, 2),
            geo_tagged_days=len(geo_tagged),
            geofence_compliance=compliance,
        )
