import threading
from datetime import date, datetime, timezone

import pytest

from shift_compliance.attendance.locks import DayLockRegistry
from shift_compliance.attendance.tracker import SessionTracker
from shift_compliance.core.enums import CheckInMethod
from shift_compliance.core.exceptions import AlreadyCheckedIn, NoOpenSession, ValidationError
from shift_compliance.geofence.model import GeofenceZone, GeoPoint, Location
from shift_compliance.geofence.validator import GeofenceValidator

DAY = date(2026, 3, 10)
OFFICE = GeoPoint(latitude=10.7769, longitude=106.7009)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, tzinfo=timezone.utc)


class StaticGeocoder:
    def __init__(self, address):
        self.address = address
        self.calls = 0

    def lookup(self, point):
        self.calls += 1
        return self.address


@pytest.fixture
def tracker(attendance_repo, zones):
    return SessionTracker(
        attendance_repo,
        locks=DayLockRegistry(),
        validator=GeofenceValidator(),
        zones=zones,
        qr_token="OFFICE",
    )


def test_check_in_then_check_out_closes_session(tracker, attendance_repo):
    tracker.check_in(1, DAY, now=_at(9, 0))
    session = tracker.check_out(1, DAY, now=_at(17, 0))

    record = attendance_repo.get_for_employee_and_date(1, DAY)
    assert session.end_time == _at(17, 0)
    assert record.open_session is None
    assert record.total_work_hours == 8.0


def test_second_check_in_while_open_is_rejected(tracker, attendance_repo):
    tracker.check_in(1, DAY, now=_at(9, 0))

    with pytest.raises(AlreadyCheckedIn):
        tracker.check_in(1, DAY, now=_at(9, 5))

    assert len(attendance_repo.get_for_employee_and_date(1, DAY).sessions) == 1


def test_check_out_without_open_session(tracker):
    with pytest.raises(NoOpenSession):
        tracker.check_out(1, DAY, now=_at(17, 0))


def test_check_out_before_check_in_is_rejected(tracker):
    tracker.check_in(1, DAY, now=_at(9, 0))

    with pytest.raises(ValidationError):
        tracker.check_out(1, DAY, now=_at(8, 59))


def test_multiple_sessions_per_day(tracker, attendance_repo):
    tracker.check_in(1, DAY, now=_at(9, 0))
    tracker.check_out(1, DAY, now=_at(12, 0))
    tracker.check_in(1, DAY, now=_at(13, 0))
    tracker.check_out(1, DAY, now=_at(15, 30))

    record = attendance_repo.get_for_employee_and_date(1, DAY)
    assert [s.start_time for s in record.sessions] == [_at(9, 0), _at(13, 0)]
    assert record.total_work_hours == 5.5


def test_qr_check_in_requires_matching_token(tracker):
    with pytest.raises(ValidationError):
        tracker.check_in(1, DAY, now=_at(9, 0), method=CheckInMethod.QR)
    with pytest.raises(ValidationError):
        tracker.check_in(1, DAY, now=_at(9, 0), method=CheckInMethod.QR, qr_token="WRONG")

    session = tracker.check_in(1, DAY, now=_at(9, 0), method=CheckInMethod.QR, qr_token="OFFICE")

    assert session.method == CheckInMethod.QR


def test_geofenced_check_in_requires_location(tracker):
    with pytest.raises(ValidationError):
        tracker.check_in(1, DAY, now=_at(9, 0), method=CheckInMethod.GEOFENCED)


def test_no_zones_means_within_geofence(tracker):
    session = tracker.check_in(1, DAY, now=_at(9, 0), location=Location(point=OFFICE))

    assert session.is_within_geofence is True


def test_outside_zone_is_recorded_and_flagged(tracker, zones):
    zones.zones.append(GeofenceZone(zone_id=1, name="HQ", center=OFFICE, radius_meters=100))
    far = Location(point=GeoPoint(latitude=10.80, longitude=106.70))

    session = tracker.check_in(1, DAY, now=_at(9, 0), location=far, method=CheckInMethod.GEOFENCED)

    assert session.is_within_geofence is False


def test_geofence_flag_is_fixed_at_check_in(tracker, zones, attendance_repo):
    zones.zones.append(GeofenceZone(zone_id=1, name="HQ", center=OFFICE, radius_meters=100))

    tracker.check_in(1, DAY, now=_at(9, 0), location=Location(point=OFFICE))
    tracker.check_out(1, DAY, now=_at(17, 0), location=Location(point=GeoPoint(latitude=11.5, longitude=107.0)))

    session = attendance_repo.get_for_employee_and_date(1, DAY).sessions[0]
    assert session.is_within_geofence is True
    assert session.checkout_location.point.latitude == 11.5


def test_missing_address_is_filled_by_geocoder(attendance_repo):
    geocoder = StaticGeocoder("1 Le Loi, District 1")
    tracker = SessionTracker(attendance_repo, locks=DayLockRegistry(), geocoder=geocoder)

    session = tracker.check_in(1, DAY, now=_at(9, 0), location=Location(point=OFFICE))
    given = tracker.check_out(1, DAY, now=_at(10, 0), location=Location(point=OFFICE, address="Lobby"))

    assert session.location.address == "1 Le Loi, District 1"
    assert given.checkout_location.address == "Lobby"
    assert geocoder.calls == 1


def test_concurrent_check_ins_yield_exactly_one_session(tracker, attendance_repo):
    workers = 8
    barrier = threading.Barrier(workers)
    outcomes = []
    outcomes_lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            tracker.check_in(1, DAY, now=_at(9, 0))
            result = "ok"
        except AlreadyCheckedIn:
            result = "rejected"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("rejected") == workers - 1
    assert len(attendance_repo.get_for_employee_and_date(1, DAY).sessions) == 1
