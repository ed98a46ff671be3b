from __future__ import annotations

from datetime import date
from typing import Any, Dict

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveLedger


def _request_from_row(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=RequestStatus(r["status"]),
        leave_type=r.get("leave_type"),
    )


class MySQLLeaveLedger(LeaveLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_approved_leave(self, employee_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, leave_type, start_date, end_date, status
                FROM leave_requests
                WHERE employee_id=%s AND %s BETWEEN start_date AND end_date
                """,
                (int(employee_id), work_date),
            )
            return any(_request_from_row(r).covers(work_date) for r in fetchall(cur))

    def balance(self, employee_id: int) -> LeaveBalance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT total, taken, remaining
                FROM leave_balances
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return LeaveBalance.empty()
            return LeaveBalance(total=int(r["total"]), taken=int(r["taken"]), remaining=int(r["remaining"]))
