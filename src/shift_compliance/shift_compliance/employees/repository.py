from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeDirectory(Protocol):
    """Read-only employee lookup (owned by the HR collaborator)."""

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
