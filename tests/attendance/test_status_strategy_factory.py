from datetime import date, datetime, timezone

from shift_compliance.attendance.factory import StatusStrategyFactory
from shift_compliance.attendance.model import AttendanceRecord, AttendanceSession, DayFacts
from shift_compliance.attendance.strategies.calendar_strategy import HolidayStrategy, LeaveStrategy
from shift_compliance.attendance.strategies.no_session_strategy import NoSessionStrategy
from shift_compliance.attendance.strategies.worked_day_strategy import WorkedDayStrategy
from shift_compliance.core.enums import CheckInMethod


def _worked_record() -> AttendanceRecord:
    session = AttendanceSession(
        start_time=datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc),
        method=CheckInMethod.MANUAL,
        is_within_geofence=True,
    )
    return AttendanceRecord(employee_id=1, work_date=date(2026, 3, 10), sessions=(session,))


def test_factory_holiday_first():
    factory = StatusStrategyFactory()
    strategy = factory.for_record(record=_worked_record(), facts=DayFacts(on_leave=True, is_holiday=True))

    assert isinstance(strategy, HolidayStrategy)


def test_factory_leave_before_sessions():
    factory = StatusStrategyFactory()
    strategy = factory.for_record(record=_worked_record(), facts=DayFacts(on_leave=True))

    assert isinstance(strategy, LeaveStrategy)


def test_factory_no_sessions():
    factory = StatusStrategyFactory()
    strategy = factory.for_record(record=AttendanceRecord(employee_id=1, work_date=date(2026, 3, 10)), facts=DayFacts())

    assert isinstance(strategy, NoSessionStrategy)


def test_factory_worked_day():
    factory = StatusStrategyFactory()
    strategy = factory.for_record(record=_worked_record(), facts=DayFacts())

    assert isinstance(strategy, WorkedDayStrategy)
