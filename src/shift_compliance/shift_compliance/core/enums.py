from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Canonical daily status. Only the status classifier produces these."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"
    HOLIDAY = "HOLIDAY"
    NO_RECORD = "NO_RECORD"


class CheckInMethod(str, Enum):
    MANUAL = "MANUAL"
    QR = "QR"
    GEOFENCED = "GEOFENCED"


class RequestStatus(str, Enum):
    """Leave request workflow state (owned by the leave collaborator)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


WORKED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY})
