from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

import pytest

from shift_compliance.attendance.model import AttendanceRecord, AttendanceSession
from shift_compliance.container import EngineOptions, wire
from shift_compliance.core.enums import AttendanceStatus
from shift_compliance.core.exceptions import AlreadyCheckedIn, MissingEmployee
from shift_compliance.employees.model import Employee
from shift_compliance.geocoding.reverse import NullGeocoder
from shift_compliance.geofence.model import GeofenceZone
from shift_compliance.holidays.model import Holiday
from shift_compliance.leave.model import LeaveBalance
from shift_compliance.shifts.model import ShiftConfig

TEST_QR_TOKEN = "TEST_QR"


class InMemoryAttendance:
    """Mirrors the MySQL repository, including the one-open-session constraint."""

    def __init__(self):
        self._records: dict[tuple[int, date], AttendanceRecord] = {}
        self._guard = threading.Lock()
        self._record_id = 0
        self._session_id = 0
        self.saves = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._records.get((employee_id, work_date))

    def get_or_create(self, employee_id: int, work_date: date) -> AttendanceRecord:
        with self._guard:
            key = (employee_id, work_date)
            if key not in self._records:
                self._record_id += 1
                self._records[key] = AttendanceRecord(employee_id, work_date, record_id=self._record_id)
            return self._records[key]

    def add_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        with self._guard:
            key = (record.employee_id, record.work_date)
            current = self._records[key]
            if current.open_session is not None:
                raise AlreadyCheckedIn("An attendance session is already open for this day")
            self._session_id += 1
            stored = current.with_sessions(current.sessions + (replace(session, session_id=self._session_id),))
            self._records[key] = stored
            return stored

    def close_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        with self._guard:
            key = (record.employee_id, record.work_date)
            current = self._records[key]
            sessions = tuple(session if s.session_id == session.session_id else s for s in current.sessions)
            stored = current.with_sessions(sessions)
            self._records[key] = stored
            return stored

    def save_derived(self, record: AttendanceRecord) -> None:
        with self._guard:
            key = (record.employee_id, record.work_date)
            current = self._records.get(key) or record
            self._records[key] = replace(
                current,
                status=record.status,
                total_work_hours=record.total_work_hours,
                late_minutes=record.late_minutes,
                early_departure_minutes=record.early_departure_minutes,
                overtime_hours=record.overtime_hours,
                note=record.note,
            )
            self.saves += 1

    def list_range(
        self,
        employee_id: int,
        *,
        start_date: date,
        end_date: date,
        status: Optional[AttendanceStatus] = None,
    ):
        items = [
            r
            for (emp, d), r in self._records.items()
            if emp == employee_id and start_date <= d <= end_date and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)


@dataclass
class InMemoryShifts:
    directory: InMemoryEmployees

    def get_for_employee(self, employee_id: int) -> Optional[ShiftConfig]:
        employee = self.directory.get_by_id(employee_id)
        if not employee:
            raise MissingEmployee(f"Employee {employee_id} not found")
        return employee.shift

    def save_for_employee(self, employee_id: int, shift: ShiftConfig) -> None:
        employee = self.directory.get_by_id(employee_id)
        if not employee:
            raise MissingEmployee(f"Employee {employee_id} not found")
        self.directory.employees[employee_id] = replace(employee, shift=shift)


@dataclass
class FakeLeave:
    approved: set[tuple[int, date]] = field(default_factory=set)
    balances: dict[int, LeaveBalance] = field(default_factory=dict)
    fail: bool = False

    def has_approved_leave(self, employee_id: int, work_date: date) -> bool:
        if self.fail:
            raise ConnectionError("leave service down")
        return (employee_id, work_date) in self.approved

    def balance(self, employee_id: int) -> LeaveBalance:
        if self.fail:
            raise ConnectionError("leave service down")
        return self.balances.get(employee_id, LeaveBalance.empty())


@dataclass
class FakeHolidays:
    dates: set[date] = field(default_factory=set)
    fail: bool = False

    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        if self.fail:
            raise ConnectionError("holiday calendar down")
        return Holiday(holiday_date) if holiday_date in self.dates else None


@dataclass
class FakeZones:
    zones: list[GeofenceZone] = field(default_factory=list)

    def list_for_employee(self, employee_id: int):
        return list(self.zones)


def standard_shift() -> ShiftConfig:
    return ShiftConfig.create(start="09:00", end="17:00", grace_period_minutes=15, expected_working_hours=8)


@pytest.fixture
def shift() -> ShiftConfig:
    return standard_shift()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            1: Employee(employee_id=1, full_name="Ada Lovelace", shift=standard_shift()),
            2: Employee(employee_id=2, full_name="Ravi Kumar", shift=standard_shift(), timezone="Asia/Kolkata"),
            3: Employee(employee_id=3, full_name="No Shift", shift=None),
            4: Employee(employee_id=4, full_name="Former Staff", shift=standard_shift(), is_active=False),
        }
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leave() -> FakeLeave:
    return FakeLeave()


@pytest.fixture
def holidays() -> FakeHolidays:
    return FakeHolidays()


@pytest.fixture
def zones() -> FakeZones:
    return FakeZones()


@pytest.fixture
def container(attendance_repo, employees, leave, holidays, zones):
    return wire(
        attendance_repo=attendance_repo,
        employees_repo=employees,
        shifts_repo=InMemoryShifts(employees),
        leave_ledger=leave,
        holidays_repo=holidays,
        geofence_repo=zones,
        options=EngineOptions(qr_token=TEST_QR_TOKEN, weekly_off_days=()),
        geocoder=NullGeocoder(),
    )
