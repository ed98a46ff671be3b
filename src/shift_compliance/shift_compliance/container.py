from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.calculator.standard_calculator import StandardWorkHoursCalculator
from .attendance.classifier import StatusClassifier
from .attendance.locks import DayLockRegistry
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.tracker import SessionTracker
from .core.constants import (
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_HALF_DAY_FRACTION,
    DEFAULT_TIMEZONE,
    DEFAULT_WEEKLY_OFF_DAYS,
)
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .geocoding.reverse import NominatimGeocoder, NullGeocoder, ReverseGeocoder
from .geofence.mysql_geofence_repository import MySQLGeofenceRepository
from .geofence.repository import GeofenceRepository
from .geofence.validator import GeofenceValidator
from .holidays.calendar import WeeklyOffHolidayCalendar
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .leave.mysql_leave_repository import MySQLLeaveLedger
from .leave.repository import LeaveLedger
from .reports.service import ReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class EngineOptions:
    qr_token: Optional[str] = None
    geofence_radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS
    half_day_fraction: float = DEFAULT_HALF_DAY_FRACTION
    weekly_off_days: Iterable[int] = DEFAULT_WEEKLY_OFF_DAYS
    geocoder_url: str = ""
    default_timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_settings(cls, settings) -> "EngineOptions":
        return cls(
            qr_token=getattr(settings, "QR_TOKEN", None),
            geofence_radius_meters=float(getattr(settings, "DEFAULT_GEOFENCE_RADIUS_METERS", DEFAULT_GEOFENCE_RADIUS_METERS)),
            half_day_fraction=float(getattr(settings, "HALF_DAY_FRACTION", DEFAULT_HALF_DAY_FRACTION)),
            weekly_off_days=tuple(getattr(settings, "WEEKLY_OFF_DAYS", DEFAULT_WEEKLY_OFF_DAYS)),
            geocoder_url=str(getattr(settings, "GEOCODER_URL", "") or ""),
            default_timezone=str(getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)),
        )


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    employees_repo: EmployeeDirectory
    shifts_repo: ShiftRepository
    leave_ledger: LeaveLedger
    holidays_repo: HolidayRepository
    geofence_repo: GeofenceRepository

    locks: DayLockRegistry
    tracker: SessionTracker
    attendance_service: AttendanceService
    report_service: ReportService
    shift_service: ShiftService
    options: EngineOptions


def wire(
    *,
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeDirectory,
    shifts_repo: ShiftRepository,
    leave_ledger: LeaveLedger,
    holidays_repo: HolidayRepository,
    geofence_repo: GeofenceRepository,
    options: EngineOptions = EngineOptions(),
    geocoder: Optional[ReverseGeocoder] = None,
) -> Container:
    """Assemble the services on top of any repository implementations."""
    if geocoder is None:
        geocoder = NominatimGeocoder(options.geocoder_url) if options.geocoder_url else NullGeocoder()

    locks = DayLockRegistry()
    calculator = StandardWorkHoursCalculator()
    tracker = SessionTracker(
        attendance_repo,
        locks=locks,
        validator=GeofenceValidator(default_radius_meters=options.geofence_radius_meters),
        zones=geofence_repo,
        geocoder=geocoder,
        calculator=calculator,
        qr_token=options.qr_token,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        leave_ledger,
        WeeklyOffHolidayCalendar(holidays_repo, weekly_off_days=options.weekly_off_days),
        tracker=tracker,
        locks=locks,
        classifier=StatusClassifier(calculator=calculator),
    )

    return Container(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        leave_ledger=leave_ledger,
        holidays_repo=holidays_repo,
        geofence_repo=geofence_repo,
        locks=locks,
        tracker=tracker,
        attendance_service=attendance_service,
        report_service=ReportService(attendance_service),
        shift_service=ShiftService(shifts_repo, employees_repo, half_day_fraction=options.half_day_fraction),
        options=options,
    )


def build_container(*, db_config: dict, options: EngineOptions = EngineOptions()) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeDirectory(
            conn,
            default_timezone=options.default_timezone,
            half_day_fraction=options.half_day_fraction,
        ),
        shifts_repo=MySQLShiftRepository(conn, half_day_fraction=options.half_day_fraction),
        leave_ledger=MySQLLeaveLedger(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        geofence_repo=MySQLGeofenceRepository(conn),
        options=options,
    )
