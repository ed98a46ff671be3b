from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceSummary:
    """Computed on demand for a window; never persisted."""

    employee_id: int
    period_start: date
    period_end: date
    counts: dict[AttendanceStatus, int]
    working_days: int
    attendance_rate: float
    average_work_hours: float
    total_work_hours: float
    geo_tagged_days: int = 0
    geofence_compliance: float = 0.0

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "counts": {status.value: n for status, n in self.counts.items()},
            "working_days": self.working_days,
            "attendance_rate": self.attendance_rate,
            "average_work_hours": self.average_work_hours,
            "total_work_hours": self.total_work_hours,
            "geo_tagged_days": self.geo_tagged_days,
            "geofence_compliance": self.geofence_compliance,
        }


@dataclass(frozen=True)
class CalendarEntry:
    work_date: date
    status: AttendanceStatus
    color: str
    total_work_hours: float = 0.0
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class MonthCalendar:
    employee_id: int
    year: int
    month: int
    entries: list[CalendarEntry] = field(default_factory=list)
    summary: Optional[AttendanceSummary] = None
