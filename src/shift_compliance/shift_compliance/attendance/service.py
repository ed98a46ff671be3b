from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import ensure_aware, local_date, now_utc
from ..core.constants import MAX_RANGE_DAYS
from ..core.enums import AttendanceStatus, CheckInMethod
from ..core.exceptions import DomainError, MissingEmployee, MissingShiftConfig, UpstreamUnavailable, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeDirectory
from ..geofence.model import Location
from ..holidays.repository import HolidayCalendar
from ..leave.model import LeaveBalance
from ..leave.repository import LeaveLedger
from .classifier import StatusClassifier
from .locks import DayLockRegistry
from .model import AttendanceRecord, DayFacts, OpenSessionView
from .repository import AttendanceRepository
from .tracker import SessionTracker

logger = logging.getLogger(__name__)


class AttendanceService:
    """Orchestration layer: resolves the employee, fetches calendar facts,
    runs the tracker and the classifier, and persists derived fields.

    All I/O happens here; the classifier and the aggregator stay pure.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        leave: LeaveLedger,
        holidays: HolidayCalendar,
        *,
        tracker: SessionTracker,
        locks: DayLockRegistry,
        classifier: Optional[StatusClassifier] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leave = leave
        self._holidays = holidays
        self._tracker = tracker
        self._locks = locks
        self._classifier = classifier or StatusClassifier()
        self._clock = clock

    # -- mutations -------------------------------------------------------

    def check_in(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[Location] = None,
        method: CheckInMethod = CheckInMethod.MANUAL,
        qr_token: Optional[str] = None,
    ) -> AttendanceRecord:
        employee = self._trackable_employee(employee_id)
        now = self._now(now, employee)
        work_date = local_date(now, employee.zone)

        with self._locks.hold(employee.employee_id, work_date):
            self._tracker.check_in(
                employee.employee_id,
                work_date,
                now=now,
                location=location,
                method=method,
                qr_token=qr_token,
            )
            return self._classify_after_tracking(employee, work_date, now=now, action="Check-in")

    def check_out(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[Location] = None,
    ) -> AttendanceRecord:
        employee = self._trackable_employee(employee_id)
        now = self._now(now, employee)
        work_date = local_date(now, employee.zone)

        with self._locks.hold(employee.employee_id, work_date):
            self._tracker.check_out(employee.employee_id, work_date, now=now, location=location)
            return self._classify_after_tracking(employee, work_date, now=now, action="Check-out")

    def classify_day(self, employee_id: int, work_date: date, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """(Re-)classify one employee-day. Safe to retry: unchanged inputs give an unchanged record."""
        employee = self._employee(employee_id)
        now = self._now(now, employee)
        with self._locks.hold(employee.employee_id, work_date):
            return self._classify_locked(employee, work_date, now=now)

    # -- queries ---------------------------------------------------------

    def get_record(self, employee_id: int, work_date: date, *, now: Optional[datetime] = None) -> AttendanceRecord:
        return self.classify_day(employee_id, work_date, now=now)

    def get_history(
        self,
        employee_id: int,
        start: date,
        end: date,
        *,
        status: Optional[AttendanceStatus] = None,
        now: Optional[datetime] = None,
    ) -> list[AttendanceRecord]:
        """One record per day in [start, end], newest first.

        Days up to today are materialised and classified on the way (a past day
        nobody checked in on becomes ABSENT); future days are classified in
        memory only and come back as NO_RECORD or a calendar status.
        """
        if start > end:
            raise ValidationError("Start date must not be after end date")
        if (end - start).days + 1 > MAX_RANGE_DAYS:
            raise ValidationError(f"Date range must not exceed {MAX_RANGE_DAYS} days")

        employee = self._employee(employee_id)
        now = self._now(now, employee)
        today = local_date(now, employee.zone)

        existing = {
            r.work_date: r
            for r in self._attendance.list_range(employee.employee_id, start_date=start, end_date=end)
        }

        records: list[AttendanceRecord] = []
        day = end
        while day >= start:
            if day <= today or day in existing:
                with self._locks.hold(employee.employee_id, day):
                    record = self._classify_locked(employee, day, now=now)
            else:
                record = self._classify_detached(employee, AttendanceRecord(employee.employee_id, day), now=now)
            if status is None or record.status == status:
                records.append(record)
            day -= timedelta(days=1)
        return records

    def open_session(self, employee_id: int, *, now: Optional[datetime] = None) -> Optional[OpenSessionView]:
        employee = self._employee(employee_id)
        now = self._now(now, employee)
        work_date = local_date(now, employee.zone)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, work_date)
        session = record.open_session if record else None
        if session is None:
            return None
        return OpenSessionView(
            employee_id=employee.employee_id,
            work_date=work_date,
            check_in_time=session.start_time,
            elapsed_minutes=int((now - session.start_time).total_seconds() // 60),
            location=session.location,
            is_within_geofence=session.is_within_geofence,
        )

    def leave_balance(self, employee_id: int) -> LeaveBalance:
        employee = self._employee(employee_id)
        try:
            return self._leave.balance(employee.employee_id)
        except DomainError:
            raise
        except Exception as e:
            raise UpstreamUnavailable(f"Leave service unavailable: {e}") from e

    def history_window(self, employee_id: int, *, days: int, now: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        """Last `days` days up to today."""
        today = self.local_today(employee_id, now=now)
        return self.get_history(employee_id, today - timedelta(days=max(days, 1) - 1), today, now=now)

    def local_today(self, employee_id: int, *, now: Optional[datetime] = None) -> date:
        employee = self._employee(employee_id)
        return local_date(self._now(now, employee), employee.zone)

    # -- internals -------------------------------------------------------

    def _employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise MissingEmployee(f"Employee {employee_id} not found")
        return employee

    def _trackable_employee(self, employee_id: int) -> Employee:
        """Reject check-in/check-out before anything is recorded."""
        employee = self._employee(employee_id)
        if not employee.is_active:
            raise ValidationError(f"Employee {employee_id} is inactive")
        if employee.shift is None:
            raise MissingShiftConfig(f"Employee {employee_id} has no shift configured")
        return employee

    def _now(self, now: Optional[datetime], employee: Employee) -> datetime:
        return ensure_aware(now or self._clock(), employee.zone)

    def _facts(self, employee_id: int, work_date: date) -> DayFacts:
        try:
            return DayFacts(
                is_holiday=bool(self._holidays.is_holiday(work_date)),
                on_leave=bool(self._leave.has_approved_leave(employee_id, work_date)),
            )
        except DomainError:
            raise
        except Exception as e:
            raise UpstreamUnavailable(f"Leave/holiday lookup failed for {work_date}: {e}") from e

    def _classify_detached(self, employee: Employee, record: AttendanceRecord, *, now: datetime) -> AttendanceRecord:
        facts = self._facts(employee.employee_id, record.work_date)
        return self._classifier.apply(record, employee.shift, facts=facts, now=now, zone=employee.zone)

    def _classify_locked(self, employee: Employee, work_date: date, *, now: datetime) -> AttendanceRecord:
        """Read-modify-write of the derived fields. Caller holds the day lock."""
        record = self._attendance.get_or_create(employee.employee_id, work_date)
        try:
            classified = self._classify_detached(employee, record, now=now)
        except UpstreamUnavailable as e:
            logger.warning("Employee %s, %s left unresolved: %s", employee.employee_id, work_date, e)
            # Totals are still known; only the status cannot be decided.
            pending = replace(
                self._tracker.refresh_totals(record),
                status=AttendanceStatus.NO_RECORD,
                note="Classification pending",
            )
            if pending != record:
                self._attendance.save_derived(pending)
            raise

        if classified != record:
            self._attendance.save_derived(classified)
            if classified.status != record.status:
                logger.info(
                    "Employee %s, %s: %s -> %s",
                    employee.employee_id,
                    work_date,
                    record.status.value,
                    classified.status.value,
                )
        return classified

    def _classify_after_tracking(self, employee: Employee, work_date: date, *, now: datetime, action: str) -> AttendanceRecord:
        try:
            return self._classify_locked(employee, work_date, now=now)
        except UpstreamUnavailable as e:
            raise UpstreamUnavailable(f"{action} recorded, status pending: {e}") from e
