from __future__ import annotations

from dataclasses import dataclass, field

from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator
from .model import AttendanceRecord, DayFacts
from .strategies.base import StatusStrategy
from .strategies.calendar_strategy import HolidayStrategy, LeaveStrategy
from .strategies.no_session_strategy import NoSessionStrategy
from .strategies.worked_day_strategy import WorkedDayStrategy


@dataclass
class StatusStrategyFactory:
    """Factory Pattern: choose the strategy for a day. Order matters:
    holiday, then leave, then whether anything was recorded."""

    calculator: WorkHoursCalculator = field(default_factory=StandardWorkHoursCalculator)

    def for_record(self, *, record: AttendanceRecord, facts: DayFacts) -> StatusStrategy:
        if facts.is_holiday:
            return HolidayStrategy()
        if facts.on_leave:
            return LeaveStrategy()
        if not record.sessions:
            return NoSessionStrategy()
        return WorkedDayStrategy(self.calculator)
