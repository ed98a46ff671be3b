from datetime import date, datetime, timezone

from shift_compliance.attendance.calculator.standard_calculator import StandardWorkHoursCalculator
from shift_compliance.attendance.model import AttendanceSession
from shift_compliance.core.enums import CheckInMethod

DAY = date(2026, 3, 10)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, tzinfo=timezone.utc)


def _session(start, end=None):
    return AttendanceSession(start_time=start, end_time=end, method=CheckInMethod.MANUAL, is_within_geofence=True)


def test_open_sessions_do_not_count():
    calc = StandardWorkHoursCalculator()

    minutes = calc.worked_minutes([_session(_at(9, 0), _at(12, 0)), _session(_at(13, 0))])

    assert minutes == 180


def test_late_minutes_count_from_shift_start(shift):
    calc = StandardWorkHoursCalculator()

    metrics = calc.day_metrics([_session(_at(9, 40), _at(17, 0))], shift, work_date=DAY, zone=timezone.utc)

    assert metrics.late_minutes == 40
    assert metrics.total_work_hours == 7.33


def test_no_late_minutes_within_grace(shift):
    calc = StandardWorkHoursCalculator()

    metrics = calc.day_metrics([_session(_at(9, 14), _at(17, 0))], shift, work_date=DAY, zone=timezone.utc)

    assert metrics.late_minutes == 0


def test_early_departure_only_when_nothing_is_open(shift):
    calc = StandardWorkHoursCalculator()

    closed = calc.day_metrics([_session(_at(9, 0), _at(16, 30))], shift, work_date=DAY, zone=timezone.utc)
    still_in = calc.day_metrics(
        [_session(_at(9, 0), _at(12, 0)), _session(_at(13, 0))], shift, work_date=DAY, zone=timezone.utc
    )

    assert closed.early_departure_minutes == 30
    assert still_in.early_departure_minutes == 0


def test_overtime_beyond_expected_hours(shift):
    calc = StandardWorkHoursCalculator()

    metrics = calc.day_metrics([_session(_at(8, 0), _at(18, 30))], shift, work_date=DAY, zone=timezone.utc)

    assert metrics.total_work_hours == 10.5
    assert metrics.overtime_hours == 2.5


def test_empty_day_metrics(shift):
    calc = StandardWorkHoursCalculator()

    metrics = calc.day_metrics([], shift, work_date=DAY, zone=timezone.utc)

    assert metrics.total_work_hours == 0.0
    assert metrics.late_minutes == 0
