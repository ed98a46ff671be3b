from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftConfig


class ShiftRepository(Protocol):
    """Current shift per employee. No history: an update applies prospectively."""

    def get_for_employee(self, employee_id: int) -> Optional[ShiftConfig]:
        raise NotImplementedError

    def save_for_employee(self, employee_id: int, shift: ShiftConfig) -> None:
        raise NotImplementedError
