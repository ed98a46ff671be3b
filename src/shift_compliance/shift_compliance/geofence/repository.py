from __future__ import annotations

from typing import Protocol, Sequence

from .model import GeofenceZone


class GeofenceRepository(Protocol):
    def list_for_employee(self, employee_id: int) -> Sequence[GeofenceZone]:
        """Active zones applicable to the employee (global zones included)."""
        raise NotImplementedError
