from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, CheckInMethod
from ..geofence.model import Location


@dataclass(frozen=True)
class AttendanceSession:
    """One check-in/check-out pair. `is_within_geofence` is fixed at check-in."""

    start_time: datetime
    method: CheckInMethod
    is_within_geofence: bool
    end_time: Optional[datetime] = None
    location: Optional[Location] = None
    checkout_location: Optional[Location] = None
    session_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def duration_minutes(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() / 60

    def close(self, end_time: datetime, location: Optional[Location] = None) -> "AttendanceSession":
        return replace(self, end_time=end_time, checkout_location=location)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    `status` and the derived totals are only ever written by the classifier
    path; sessions are kept in chronological (insertion) order.
    """

    employee_id: int
    work_date: date
    sessions: tuple[AttendanceSession, ...] = ()
    status: AttendanceStatus = AttendanceStatus.NO_RECORD
    total_work_hours: float = 0.0
    late_minutes: int = 0
    early_departure_minutes: int = 0
    overtime_hours: float = 0.0
    note: Optional[str] = None
    record_id: Optional[int] = None

    @property
    def open_session(self) -> Optional[AttendanceSession]:
        for s in self.sessions:
            if s.is_open:
                return s
        return None

    @property
    def closed_sessions(self) -> tuple[AttendanceSession, ...]:
        return tuple(s for s in self.sessions if not s.is_open)

    @property
    def first_check_in(self) -> Optional[datetime]:
        if not self.sessions:
            return None
        return min(s.start_time for s in self.sessions)

    @property
    def last_check_out(self) -> Optional[datetime]:
        ends = [s.end_time for s in self.sessions if s.end_time is not None]
        return max(ends) if ends else None

    def with_sessions(self, sessions: tuple[AttendanceSession, ...]) -> "AttendanceRecord":
        return replace(self, sessions=sessions)


@dataclass(frozen=True)
class DayFacts:
    """Calendar facts for one employee-day, fetched before classification."""

    on_leave: bool = False
    is_holiday: bool = False


@dataclass(frozen=True)
class OpenSessionView:
    """Read-model for the 'currently checked in' widget."""

    employee_id: int
    work_date: date
    check_in_time: datetime
    elapsed_minutes: int
    location: Optional[Location] = None
    is_within_geofence: bool = True
