from datetime import date, datetime, timezone

import pytest

from shift_compliance.core.enums import AttendanceStatus
from shift_compliance.core.exceptions import ValidationError

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def worked_today(container):
    container.attendance_service.check_in(1, now=_at(9, 0))
    container.attendance_service.check_out(1, now=_at(17, 0))
    return container


def test_today_window(worked_today):
    summary = worked_today.report_service.window(1, "today", now=NOW)

    assert summary.period_start == summary.period_end == date(2026, 3, 10)
    assert summary.attendance_rate == 100.0
    assert summary.average_work_hours == 8.0


def test_month_to_date_counts_unrecorded_past_days_as_absent(worked_today):
    summary = worked_today.report_service.window(1, "month", now=NOW)

    assert summary.period_start == date(2026, 3, 1)
    assert summary.working_days == 10
    assert summary.counts[AttendanceStatus.ABSENT] == 9
    assert summary.attendance_rate == 10.0


def test_year_to_date_bounds(worked_today):
    summary = worked_today.report_service.year_to_date(1, now=NOW)

    assert summary.period_start == date(2026, 1, 1)
    assert summary.period_end == date(2026, 3, 10)


def test_unknown_window(container):
    with pytest.raises(ValidationError):
        container.report_service.window(1, "week", now=NOW)


def test_month_calendar_lists_every_day(worked_today):
    cal = worked_today.report_service.month_calendar(1, 2026, 3, now=NOW)

    assert len(cal.entries) == 31
    assert cal.entries[0].work_date == date(2026, 3, 1)
    assert cal.entries[9].status == AttendanceStatus.PRESENT
    assert cal.entries[9].check_in == _at(9, 0).isoformat()
    assert cal.entries[-1].status == AttendanceStatus.NO_RECORD
    assert cal.summary.working_days == 10


def test_month_bounds_are_validated(container):
    with pytest.raises(ValidationError):
        container.report_service.month(1, 2026, 13, now=NOW)


def test_summary_range_is_capped(container, attendance_repo):
    with pytest.raises(ValidationError):
        container.report_service.summarize(1, date(1900, 1, 1), date(2026, 3, 10), now=NOW)

    assert attendance_repo.list_range(1, start_date=date(1900, 1, 1), end_date=date(2026, 3, 10)) == []
