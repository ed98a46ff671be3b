from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import AttendanceStatus, CheckInMethod
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_utc_naive, is_duplicate_key, to_utc_naive
from ..geofence.model import GeoPoint, Location
from .model import AttendanceRecord, AttendanceSession
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    record_id, employee_id, work_date, status, total_work_hours,
    late_minutes, early_departure_minutes, overtime_hours, note
"""

_SESSION_COLUMNS = """
    session_id, record_id, start_time, end_time, method, is_within_geofence,
    latitude, longitude, accuracy_meters, address,
    out_latitude, out_longitude, out_accuracy_meters, out_address
"""


def _location(lat: Any, lon: Any, accuracy: Any, address: Any) -> Optional[Location]:
    if lat is None or lon is None:
        return None
    return Location(
        point=GeoPoint(latitude=float(lat), longitude=float(lon)),
        accuracy_meters=float(accuracy) if accuracy is not None else None,
        address=address,
    )


def _location_params(location: Optional[Location]) -> tuple:
    if location is None:
        return (None, None, None, None)
    return (location.point.latitude, location.point.longitude, location.accuracy_meters, location.address)


def _session_from_row(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        start_time=from_utc_naive(r["start_time"]),
        end_time=from_utc_naive(r.get("end_time")),
        method=CheckInMethod(r["method"]),
        is_within_geofence=bool(r["is_within_geofence"]),
        location=_location(r.get("latitude"), r.get("longitude"), r.get("accuracy_meters"), r.get("address")),
        checkout_location=_location(
            r.get("out_latitude"), r.get("out_longitude"), r.get("out_accuracy_meters"), r.get("out_address")
        ),
    )


def _record_from_row(r: Dict[str, Any], sessions: Sequence[AttendanceSession]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        sessions=tuple(sessions),
        status=AttendanceStatus(r["status"]),
        total_work_hours=float(r.get("total_work_hours") or 0),
        late_minutes=int(r.get("late_minutes") or 0),
        early_departure_minutes=int(r.get("early_departure_minutes") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _sessions_for(self, cur, record_ids: List[int]) -> Dict[int, List[AttendanceSession]]:
        by_record: Dict[int, List[AttendanceSession]] = {rid: [] for rid in record_ids}
        if not record_ids:
            return by_record
        placeholders = ",".join(["%s"] * len(record_ids))
        cur.execute(
            f"""
            SELECT {_SESSION_COLUMNS}
            FROM attendance_sessions
            WHERE record_id IN ({placeholders})
            ORDER BY start_time, session_id
            """,
            tuple(record_ids),
        )
        for r in fetchall(cur):
            by_record[int(r["record_id"])].append(_session_from_row(r))
        return by_record

    def _load(self, cur, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE employee_id=%s AND work_date=%s
            """,
            (int(employee_id), work_date),
        )
        r = fetchone(cur)
        if not r:
            return None
        sessions = self._sessions_for(cur, [int(r["record_id"])])
        return _record_from_row(r, sessions[int(r["record_id"])])

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, employee_id, work_date)

    def get_or_create(self, employee_id: int, work_date: date) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # Unique (employee_id, work_date) makes concurrent creation a no-op.
            cur.execute(
                """
                INSERT IGNORE INTO attendance_records(employee_id, work_date, status)
                VALUES(%s,%s,%s)
                """,
                (int(employee_id), work_date, AttendanceStatus.NO_RECORD.value),
            )
            return self._load(cur, employee_id, work_date)

    def add_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(
                        record_id, start_time, end_time, method, is_within_geofence,
                        latitude, longitude, accuracy_meters, address
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.record_id,
                        to_utc_naive(session.start_time),
                        to_utc_naive(session.end_time),
                        session.method.value,
                        int(session.is_within_geofence),
                        *_location_params(session.location),
                    ),
                )
            except mysql_errors.IntegrityError as e:
                if not is_duplicate_key(e):
                    raise
                # uq_open_session: another request opened a session first.
                raise AlreadyCheckedIn("An attendance session is already open for this day") from e
            return self._load(cur, record.employee_id, record.work_date)

    def close_session(self, record: AttendanceRecord, session: AttendanceSession) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET end_time=%s, out_latitude=%s, out_longitude=%s, out_accuracy_meters=%s, out_address=%s
                WHERE session_id=%s AND end_time IS NULL
                """,
                (to_utc_naive(session.end_time), *_location_params(session.checkout_location), session.session_id),
            )
            return self._load(cur, record.employee_id, record.work_date)

    def save_derived(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, total_work_hours=%s, late_minutes=%s,
                    early_departure_minutes=%s, overtime_hours=%s, note=%s
                WHERE employee_id=%s AND work_date=%s
                """,
                (
                    record.status.value,
                    record.total_work_hours,
                    record.late_minutes,
                    record.early_departure_minutes,
                    record.overtime_hours,
                    record.note,
                    record.employee_id,
                    record.work_date,
                ),
            )

    def list_range(
        self,
        employee_id: int,
        *,
        start_date: date,
        end_date: date,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s", "work_date BETWEEN %s AND %s"]
        params: list[object] = [int(employee_id), start_date, end_date]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            sessions = self._sessions_for(cur, [int(r["record_id"]) for r in rows])
            return [_record_from_row(r, sessions[int(r["record_id"])]) for r in rows]
