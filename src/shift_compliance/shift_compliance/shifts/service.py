from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import DEFAULT_HALF_DAY_FRACTION
from ..core.exceptions import MissingEmployee
from ..employees.repository import EmployeeDirectory
from .model import ShiftConfig
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    """HR-facing shift configuration. Invalid shifts are rejected here, before
    they can ever reach classification."""

    def __init__(
        self,
        shifts: ShiftRepository,
        employees: EmployeeDirectory,
        *,
        half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION,
    ):
        self._shifts = shifts
        self._employees = employees
        self._half_day_fraction = float(half_day_fraction)

    def configure(
        self,
        *,
        employee_id: int,
        start: str,
        end: str,
        grace_period_minutes: int,
        expected_working_hours: float,
        half_day_fraction: Optional[float] = None,
    ) -> ShiftConfig:
        if not self._employees.get_by_id(employee_id):
            raise MissingEmployee(f"Employee {employee_id} not found")

        shift = ShiftConfig.create(
            start=start,
            end=end,
            grace_period_minutes=grace_period_minutes,
            expected_working_hours=expected_working_hours,
            half_day_fraction=self._half_day_fraction if half_day_fraction is None else half_day_fraction,
        )
        self._shifts.save_for_employee(employee_id, shift)
        logger.info(
            "Shift for employee %s set to %s-%s (grace %s min, %sh)",
            employee_id,
            shift.start.strftime("%H:%M"),
            shift.end.strftime("%H:%M"),
            shift.grace_period_minutes,
            shift.expected_working_hours,
        )
        return shift

    def get(self, employee_id: int) -> Optional[ShiftConfig]:
        return self._shifts.get_for_employee(employee_id)
