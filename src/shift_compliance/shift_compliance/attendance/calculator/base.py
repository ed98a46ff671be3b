from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Sequence

from ...shifts.model import ShiftConfig
from ..model import AttendanceSession


@dataclass(frozen=True)
class DayMetrics:
    total_work_hours: float
    late_minutes: int
    early_departure_minutes: int
    overtime_hours: float


class WorkHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for work-hour rules)."""

    @abstractmethod
    def worked_minutes(self, sessions: Sequence[AttendanceSession]) -> float:
        raise NotImplementedError

    @abstractmethod
    def day_metrics(
        self,
        sessions: Sequence[AttendanceSession],
        shift: ShiftConfig,
        *,
        work_date: date,
        zone: tzinfo,
    ) -> DayMetrics:
        raise NotImplementedError
