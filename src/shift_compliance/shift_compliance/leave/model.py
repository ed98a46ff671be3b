from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveBalance:
    """Leave quota snapshot. `remaining == total - taken` always holds."""

    total: int
    taken: int
    remaining: int

    def __post_init__(self) -> None:
        if min(self.total, self.taken, self.remaining) < 0:
            raise ValidationError("Leave balance values must be non-negative")
        if self.remaining != self.total - self.taken:
            raise ValidationError(
                f"Inconsistent leave balance: remaining {self.remaining} != {self.total} - {self.taken}"
            )

    @classmethod
    def empty(cls) -> "LeaveBalance":
        return cls(total=0, taken=0, remaining=0)


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    status: RequestStatus
    leave_type: Optional[str] = None

    def covers(self, work_date: date) -> bool:
        return self.status == RequestStatus.APPROVED and self.start_date <= work_date <= self.end_date
