from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_HALF_DAY_FRACTION, DEFAULT_TIMEZONE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..shifts.mysql_shift_repository import shift_from_row
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    """Employees with their shift columns; unset timezones fall back to the configured default."""

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        default_timezone: str = DEFAULT_TIMEZONE,
        half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION,
    ):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone
        self._half_day_fraction = half_day_fraction

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, timezone, is_active,
                       shift_start, shift_end, grace_minutes, working_hours, half_day_fraction
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                timezone=r.get("timezone") or self._default_timezone,
                is_active=bool(r.get("is_active", 1)),
                shift=shift_from_row(r, default_fraction=self._half_day_fraction),
            )

