from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.constants import DEFAULT_HALF_DAY_FRACTION
from ..core.exceptions import MissingEmployee
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import ShiftConfig
from .repository import ShiftRepository


def shift_from_row(r: Dict[str, Any], *, default_fraction: float = DEFAULT_HALF_DAY_FRACTION) -> Optional[ShiftConfig]:
    """Build a ShiftConfig from the employee's shift columns; None if unset."""
    start = normalize_mysql_time(r.get("shift_start"))
    end = normalize_mysql_time(r.get("shift_end"))
    if start is None or end is None or r.get("working_hours") is None:
        return None
    return ShiftConfig(
        start=start,
        end=end,
        grace_period_minutes=int(r.get("grace_minutes") or 0),
        expected_working_hours=float(r["working_hours"]),
        half_day_fraction=float(r.get("half_day_fraction") or default_fraction),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION):
        self._conn_factory = conn_factory
        self._half_day_fraction = half_day_fraction

    def get_for_employee(self, employee_id: int) -> Optional[ShiftConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_start, shift_end, grace_minutes, working_hours, half_day_fraction
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                raise MissingEmployee(f"Employee {employee_id} not found")
            return shift_from_row(r, default_fraction=self._half_day_fraction)

    def save_for_employee(self, employee_id: int, shift: ShiftConfig) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            # rowcount only counts changed rows, so check existence explicitly.
            cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s", (int(employee_id),))
            if not fetchone(cur):
                raise MissingEmployee(f"Employee {employee_id} not found")
            cur.execute(
                """
                UPDATE employees
                SET shift_start=%s, shift_end=%s, grace_minutes=%s, working_hours=%s, half_day_fraction=%s
                WHERE employee_id=%s
                """,
                (
                    shift.start,
                    shift.end,
                    shift.grace_period_minutes,
                    shift.expected_working_hours,
                    shift.half_day_fraction,
                    int(employee_id),
                ),
            )
