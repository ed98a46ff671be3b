from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import LeaveBalance


class LeaveLedger(Protocol):
    """Read-only view of the leave collaborator.

    Approval, rejection and accrual are owned elsewhere; the engine never
    writes balances.
    """

    def has_approved_leave(self, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def balance(self, employee_id: int) -> LeaveBalance:
        raise NotImplementedError
