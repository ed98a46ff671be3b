from __future__ import annotations

import hmac
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import CheckInMethod
from ..core.exceptions import AlreadyCheckedIn, NoOpenSession, ValidationError
from ..geocoding.reverse import NullGeocoder, ReverseGeocoder
from ..geofence.model import Location
from ..geofence.repository import GeofenceRepository
from ..geofence.validator import GeofenceValidator
from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator
from .locks import DayLockRegistry
from .model import AttendanceRecord, AttendanceSession
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class SessionTracker:
    """Records check-in/check-out pairs for an employee-day.

    At most one session per employee-day is open at a time; both operations
    run under the day lock so a concurrent second check-in observes the first.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        locks: DayLockRegistry,
        validator: Optional[GeofenceValidator] = None,
        zones: Optional[GeofenceRepository] = None,
        geocoder: Optional[ReverseGeocoder] = None,
        calculator: Optional[WorkHoursCalculator] = None,
        qr_token: Optional[str] = None,
    ):
        self._attendance = attendance
        self._locks = locks
        self._validator = validator or GeofenceValidator()
        self._zones = zones
        self._geocoder = geocoder or NullGeocoder()
        self._calculator = calculator or StandardWorkHoursCalculator()
        self._qr_token = qr_token

    def check_in(
        self,
        employee_id: int,
        work_date: date,
        *,
        now: datetime,
        location: Optional[Location] = None,
        method: CheckInMethod = CheckInMethod.MANUAL,
        qr_token: Optional[str] = None,
    ) -> AttendanceSession:
        self._validate_method(method, location=location, qr_token=qr_token)

        with self._locks.hold(employee_id, work_date):
            record = self._attendance.get_or_create(employee_id, work_date)
            if record.open_session is not None:
                raise AlreadyCheckedIn("Already checked in, check out first")

            zones = self._zones.list_for_employee(employee_id) if self._zones else ()
            match = self._validator.match(location.point if location else None, zones)
            if zones and not match.is_within:
                logger.info("Employee %s checked in outside every geofence on %s", employee_id, work_date)

            session = AttendanceSession(
                start_time=now,
                method=method,
                is_within_geofence=match.is_within,
                location=self._with_address(location),
            )
            record = self._attendance.add_session(record, session)

        logger.info("Employee %s checked in at %s (%s)", employee_id, now.isoformat(), method.value)
        return record.open_session or session

    def check_out(
        self,
        employee_id: int,
        work_date: date,
        *,
        now: datetime,
        location: Optional[Location] = None,
    ) -> AttendanceSession:
        with self._locks.hold(employee_id, work_date):
            record = self._attendance.get_or_create(employee_id, work_date)
            open_session = record.open_session
            if open_session is None:
                raise NoOpenSession("No open session to check out from, check in first")
            if now < open_session.start_time:
                raise ValidationError("Check-out time cannot be before check-in time")

            closed = open_session.close(now, self._with_address(location))
            record = self._attendance.close_session(record, closed)
            record = self.refresh_totals(record)

        logger.info("Employee %s checked out at %s", employee_id, now.isoformat())
        return _find_session(record, closed.start_time) or closed

    def refresh_totals(self, record: AttendanceRecord) -> AttendanceRecord:
        """Recompute total work hours from closed sessions and persist it."""
        hours = round(self._calculator.worked_minutes(record.sessions) / 60, 2)
        if hours != record.total_work_hours:
            record = replace(record, total_work_hours=hours)
            self._attendance.save_derived(record)
        return record

    def _validate_method(
        self,
        method: CheckInMethod,
        *,
        location: Optional[Location],
        qr_token: Optional[str],
    ) -> None:
        if method == CheckInMethod.QR:
            if not qr_token:
                raise ValidationError("QR check-in requires the scanned code")
            if self._qr_token is None or not hmac.compare_digest(str(qr_token), str(self._qr_token)):
                raise ValidationError("Invalid QR code")
        elif method == CheckInMethod.GEOFENCED and location is None:
            raise ValidationError("Geofenced check-in requires a location")

    def _with_address(self, location: Optional[Location]) -> Optional[Location]:
        if location is None or location.address:
            return location
        address = self._geocoder.lookup(location.point)
        return replace(location, address=address) if address else location


def _find_session(record: AttendanceRecord, start_time: datetime) -> Optional[AttendanceSession]:
    for s in record.sessions:
        if s.start_time == start_time:
            return s
    return None
