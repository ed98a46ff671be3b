from __future__ import annotations

from datetime import datetime, tzinfo

from ...common.datetime_utils import local_date
from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftConfig
from ..model import AttendanceRecord
from .base import StatusDecision, StatusStrategy


class NoSessionStrategy(StatusStrategy):
    """Nothing recorded: a past day is an absence, today or later is not yet evaluable."""

    def decide(self, *, record: AttendanceRecord, shift: ShiftConfig, now: datetime, zone: tzinfo) -> StatusDecision:
        if record.work_date < local_date(now, zone):
            return StatusDecision(status=AttendanceStatus.ABSENT)
        return StatusDecision(status=AttendanceStatus.NO_RECORD)
