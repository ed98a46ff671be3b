"""Derives the canonical daily status.

Pure and synchronous: every input, including the evaluation time, is passed
in. Calling it twice with the same inputs gives the same answer, which is what
makes retried classification safe.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone, tzinfo
from typing import Optional

from ..common.datetime_utils import ensure_aware
from ..core.enums import AttendanceStatus
from ..core.exceptions import MissingShiftConfig
from ..shifts.model import ShiftConfig
from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator
from .factory import StatusStrategyFactory
from .model import AttendanceRecord, DayFacts
from .strategies.base import StatusDecision


@dataclass
class StatusClassifier:
    factory: Optional[StatusStrategyFactory] = None
    calculator: Optional[WorkHoursCalculator] = None

    def __post_init__(self) -> None:
        self.calculator = self.calculator or StandardWorkHoursCalculator()
        self.factory = self.factory or StatusStrategyFactory(self.calculator)

    def decide(
        self,
        record: AttendanceRecord,
        shift: Optional[ShiftConfig],
        *,
        on_leave: bool,
        is_holiday: bool,
        now: datetime,
        zone: tzinfo = timezone.utc,
    ) -> StatusDecision:
        if shift is None:
            raise MissingShiftConfig(f"Employee {record.employee_id} has no shift configured")

        strategy = self.factory.for_record(record=record, facts=DayFacts(on_leave=on_leave, is_holiday=is_holiday))
        return strategy.decide(record=record, shift=shift, now=ensure_aware(now, zone), zone=zone)

    def classify(
        self,
        record: AttendanceRecord,
        shift: Optional[ShiftConfig],
        *,
        on_leave: bool,
        is_holiday: bool,
        now: datetime,
        zone: tzinfo = timezone.utc,
    ) -> AttendanceStatus:
        return self.decide(record, shift, on_leave=on_leave, is_holiday=is_holiday, now=now, zone=zone).status

    def apply(
        self,
        record: AttendanceRecord,
        shift: Optional[ShiftConfig],
        *,
        facts: DayFacts,
        now: datetime,
        zone: tzinfo = timezone.utc,
    ) -> AttendanceRecord:
        """Return `record` with status and derived totals recomputed."""
        decision = self.decide(
            record,
            shift,
            on_leave=facts.on_leave,
            is_holiday=facts.is_holiday,
            now=now,
            zone=zone,
        )
        metrics = self.calculator.day_metrics(record.sessions, shift, work_date=record.work_date, zone=zone)
        return replace(
            record,
            status=decision.status,
            note=decision.note,
            total_work_hours=metrics.total_work_hours,
            late_minutes=metrics.late_minutes,
            early_departure_minutes=metrics.early_departure_minutes,
            overtime_hours=metrics.overtime_hours,
        )
