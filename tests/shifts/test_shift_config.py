from datetime import time

import pytest

from shift_compliance.core.exceptions import InvalidShiftConfig, MissingEmployee
from shift_compliance.shifts.model import ShiftConfig
from shift_compliance.shifts.service import ShiftService


def test_create_from_strings(shift):
    assert shift.start == time(9, 0)
    assert shift.end == time(17, 0)
    assert shift.half_day_threshold_hours == 4.0
    assert shift.scheduled_hours == 8.0


def test_times_are_truncated_to_minutes():
    shift = ShiftConfig(start=time(9, 0, 42), end=time(17, 0, 5), grace_period_minutes=0, expected_working_hours=8)

    assert shift.start == time(9, 0)
    assert shift.end == time(17, 0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start": "17:00", "end": "09:00", "grace_period_minutes": 15, "expected_working_hours": 8},
        {"start": "09:00", "end": "09:00", "grace_period_minutes": 15, "expected_working_hours": 8},
        {"start": "09:00", "end": "17:00", "grace_period_minutes": -1, "expected_working_hours": 8},
        {"start": "09:00", "end": "17:00", "grace_period_minutes": 15, "expected_working_hours": 0},
        {"start": "09:00", "end": "17:00", "grace_period_minutes": 15, "expected_working_hours": 8, "half_day_fraction": 0},
        {"start": "25:00", "end": "17:00", "grace_period_minutes": 15, "expected_working_hours": 8},
    ],
)
def test_invalid_shift_is_rejected(kwargs):
    with pytest.raises(InvalidShiftConfig):
        ShiftConfig.create(**kwargs)


def test_custom_half_day_fraction():
    shift = ShiftConfig.create(
        start="08:00", end="16:00", grace_period_minutes=10, expected_working_hours=8, half_day_fraction=0.6
    )

    assert shift.half_day_threshold_hours == pytest.approx(4.8)


def test_service_configures_employee_shift(container):
    service = container.shift_service

    saved = service.configure(
        employee_id=3, start="08:30", end="17:30", grace_period_minutes=10, expected_working_hours=8
    )

    assert service.get(3) == saved
    assert saved.half_day_fraction == 0.5


def test_service_rejects_unknown_employee_and_bad_shift(container):
    service = container.shift_service

    with pytest.raises(MissingEmployee):
        service.configure(employee_id=99, start="09:00", end="17:00", grace_period_minutes=0, expected_working_hours=8)
    with pytest.raises(InvalidShiftConfig):
        service.configure(employee_id=1, start="18:00", end="17:00", grace_period_minutes=0, expected_working_hours=8)


def test_service_reads_shift_through_repository(container):
    service = container.shift_service

    assert service.get(1).grace_period_minutes == 15
    assert service.get(3) is None
    with pytest.raises(MissingEmployee):
        service.get(99)
