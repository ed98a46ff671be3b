from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

from ..common.datetime_utils import at_local_time, parse_hhmm
from ..core.constants import DEFAULT_HALF_DAY_FRACTION
from ..core.exceptions import InvalidShiftConfig, ValidationError


@dataclass(frozen=True)
class ShiftConfig:
    """Domain value object: an employee's working shift.

    Same-day shifts only; `end` must be strictly after `start`.
    """

    start: time
    end: time
    grace_period_minutes: int
    expected_working_hours: float
    half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION

    def __post_init__(self) -> None:
        # Minute resolution.
        object.__setattr__(self, "start", self.start.replace(second=0, microsecond=0, tzinfo=None))
        object.__setattr__(self, "end", self.end.replace(second=0, microsecond=0, tzinfo=None))

        if self.end <= self.start:
            raise InvalidShiftConfig(f"Shift end {self.end:%H:%M} must be after start {self.start:%H:%M}")
        if self.grace_period_minutes is None or int(self.grace_period_minutes) < 0:
            raise InvalidShiftConfig("Grace period must be a non-negative number of minutes")
        if self.expected_working_hours is None or float(self.expected_working_hours) <= 0:
            raise InvalidShiftConfig("Expected working hours must be positive")
        if not (0 < float(self.half_day_fraction) <= 1):
            raise InvalidShiftConfig("Half-day fraction must be within (0, 1]")

        object.__setattr__(self, "grace_period_minutes", int(self.grace_period_minutes))
        object.__setattr__(self, "expected_working_hours", float(self.expected_working_hours))
        object.__setattr__(self, "half_day_fraction", float(self.half_day_fraction))

    @classmethod
    def create(
        cls,
        *,
        start: str,
        end: str,
        grace_period_minutes: int,
        expected_working_hours: float,
        half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION,
    ) -> "ShiftConfig":
        """Build from 'HH:MM' strings, as stored on the employee record."""
        try:
            start_t = parse_hhmm(start)
            end_t = parse_hhmm(end)
        except ValidationError as e:
            raise InvalidShiftConfig(str(e)) from e
        return cls(
            start=start_t,
            end=end_t,
            grace_period_minutes=grace_period_minutes,
            expected_working_hours=expected_working_hours,
            half_day_fraction=half_day_fraction,
        )

    @property
    def half_day_threshold_hours(self) -> float:
        return self.expected_working_hours * self.half_day_fraction

    @property
    def scheduled_hours(self) -> float:
        start = timedelta(hours=self.start.hour, minutes=self.start.minute)
        end = timedelta(hours=self.end.hour, minutes=self.end.minute)
        return (end - start).total_seconds() / 3600

    def starts_at(self, work_date: date, zone: tzinfo) -> datetime:
        return at_local_time(work_date, self.start, zone)

    def ends_at(self, work_date: date, zone: tzinfo) -> datetime:
        return at_local_time(work_date, self.end, zone)

    def late_after(self, work_date: date, zone: tzinfo) -> datetime:
        """Last instant a check-in still counts as on time."""
        return self.starts_at(work_date, zone) + timedelta(minutes=self.grace_period_minutes)
