from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from ..common.datetime_utils import get_zone
from ..core.constants import DEFAULT_TIMEZONE
from ..shifts.model import ShiftConfig


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of an employee record the engine reads.

    `shift` is None when HR has not configured one yet; classification treats
    that as a configuration error rather than falling back to a default.
    """

    employee_id: int
    full_name: str
    shift: Optional[ShiftConfig]
    timezone: str = DEFAULT_TIMEZONE
    is_active: bool = True

    @property
    def zone(self) -> tzinfo:
        return get_zone(self.timezone)
