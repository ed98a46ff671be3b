from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftConfig
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class StatusStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day gets its status."""

    @abstractmethod
    def decide(
        self,
        *,
        record: AttendanceRecord,
        shift: ShiftConfig,
        now: datetime,
        zone: tzinfo,
    ) -> StatusDecision:
        raise NotImplementedError
