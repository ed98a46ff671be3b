from datetime import date, datetime, timedelta, timezone

import pytest

from shift_compliance.attendance.model import AttendanceRecord, AttendanceSession
from shift_compliance.core.enums import AttendanceStatus, CheckInMethod
from shift_compliance.core.exceptions import ValidationError
from shift_compliance.geofence.model import GeoPoint, Location
from shift_compliance.reports.aggregator import Aggregator

START = date(2026, 4, 1)
END = date(2026, 4, 30)


def _month(*statuses: AttendanceStatus, hours: float = 8.0) -> list[AttendanceRecord]:
    return [
        AttendanceRecord(employee_id=1, work_date=START + timedelta(days=i), status=s, total_work_hours=hours)
        for i, s in enumerate(statuses)
    ]


def test_holidays_and_leave_are_not_working_days():
    P, L, HD = AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY
    H, V = AttendanceStatus.HOLIDAY, AttendanceStatus.ON_LEAVE
    records = _month(*([P] * 20 + [L] * 2 + [HD] + [V] * 2 + [H] * 5))

    summary = Aggregator().summarize(1, START, END, records)

    assert len(records) == 30
    # 30 days less 5 holidays and 2 leave days; HALF_DAY counts as attended.
    assert summary.working_days == 23
    assert summary.attendance_rate == 100.0
    assert summary.counts[AttendanceStatus.PRESENT] == 20
    assert summary.counts[AttendanceStatus.LATE] == 2
    assert summary.counts[AttendanceStatus.HALF_DAY] == 1
    assert summary.counts[AttendanceStatus.HOLIDAY] == 5
    assert summary.counts[AttendanceStatus.ON_LEAVE] == 2


def test_rate_with_absences_rounds_to_one_decimal():
    P, A, HD = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.HALF_DAY
    records = _month(*([P] * 20 + [HD] + [A] * 2))

    summary = Aggregator().summarize(1, START, END, records)

    assert summary.working_days == 23
    assert summary.attendance_rate == 91.3


def test_no_working_days_gives_zero_rate_and_average():
    records = _month(AttendanceStatus.HOLIDAY, AttendanceStatus.NO_RECORD)

    summary = Aggregator().summarize(1, START, END, records)

    assert summary.working_days == 0
    assert summary.attendance_rate == 0.0
    assert summary.average_work_hours == 0.0


def test_average_covers_worked_days_only():
    records = _month(AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT, hours=6.0)

    summary = Aggregator().summarize(1, START, END, records)

    assert summary.average_work_hours == 6.0
    assert summary.total_work_hours == 12.0
    assert 0.0 <= summary.attendance_rate <= 100.0


def test_records_outside_window_or_for_others_are_ignored():
    records = _month(AttendanceStatus.PRESENT, AttendanceStatus.ABSENT)
    records.append(AttendanceRecord(employee_id=1, work_date=date(2026, 5, 1), status=AttendanceStatus.ABSENT))
    records.append(AttendanceRecord(employee_id=2, work_date=START, status=AttendanceStatus.ABSENT))

    summary = Aggregator().summarize(1, START, END, records)

    assert summary.working_days == 2
    assert summary.attendance_rate == 50.0


def test_geofence_compliance_uses_first_session():
    def session(within: bool) -> AttendanceSession:
        return AttendanceSession(
            start_time=datetime(2026, 4, 1, 9, 0, tzinfo=timezone.utc),
            method=CheckInMethod.GEOFENCED,
            is_within_geofence=within,
            location=Location(point=GeoPoint(10.0, 106.0)),
        )

    records = [
        AttendanceRecord(1, date(2026, 4, 1), sessions=(session(True),), status=AttendanceStatus.PRESENT),
        AttendanceRecord(1, date(2026, 4, 2), sessions=(session(False), session(True)), status=AttendanceStatus.LATE),
        AttendanceRecord(1, date(2026, 4, 3), status=AttendanceStatus.ABSENT),
    ]

    summary = Aggregator().summarize(1, START, END, records)

    assert summary.geo_tagged_days == 2
    assert summary.geofence_compliance == 50.0


def test_inverted_window_is_rejected():
    with pytest.raises(ValidationError):
        Aggregator().summarize(1, END, START, [])
