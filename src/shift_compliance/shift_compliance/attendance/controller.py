from __future__ import annotations

import io
from typing import Any, Optional

import qrcode
from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import format_hours, parse_iso_date
from ..common.validators import optional_float
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import AttendanceStatus, CheckInMethod
from ..core.exceptions import ValidationError
from ..container import Container
from ..geofence.model import GeoPoint, Location
from .model import AttendanceRecord, AttendanceSession, OpenSessionView


def location_to_dict(location: Optional[Location]) -> Optional[dict]:
    if location is None:
        return None
    return {
        "latitude": location.point.latitude,
        "longitude": location.point.longitude,
        "accuracy": location.accuracy_meters,
        "address": location.address,
    }


def session_to_dict(s: AttendanceSession) -> dict:
    return {
        "start_time": s.start_time.isoformat(),
        "end_time": s.end_time.isoformat() if s.end_time else None,
        "method": s.method.value,
        "is_within_geofence": s.is_within_geofence,
        "location": location_to_dict(s.location),
        "checkout_location": location_to_dict(s.checkout_location),
        "duration_minutes": round(s.duration_minutes, 1) if s.duration_minutes is not None else None,
    }


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "employee_id": r.employee_id,
        "date": r.work_date.isoformat(),
        "status": r.status.value,
        "total_work_hours": r.total_work_hours,
        "formatted_work_hours": format_hours(r.total_work_hours),
        "late_minutes": r.late_minutes,
        "early_departure_minutes": r.early_departure_minutes,
        "overtime_hours": r.overtime_hours,
        "note": r.note,
        "sessions": [session_to_dict(s) for s in r.sessions],
    }


def open_session_to_dict(v: OpenSessionView) -> dict:
    return {
        "employee_id": v.employee_id,
        "date": v.work_date.isoformat(),
        "check_in_time": v.check_in_time.isoformat(),
        "elapsed_minutes": v.elapsed_minutes,
        "is_within_geofence": v.is_within_geofence,
        "location": location_to_dict(v.location),
    }


def parse_location(payload: dict[str, Any]) -> Optional[Location]:
    lat = optional_float(payload.get("latitude"), "latitude")
    lon = optional_float(payload.get("longitude"), "longitude")
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise ValidationError("Both latitude and longitude are required")
    return Location(
        point=GeoPoint(latitude=lat, longitude=lon),
        accuracy_meters=optional_float(payload.get("accuracy"), "accuracy"),
        address=(payload.get("address") or None),
    )


def parse_method(value: Any) -> CheckInMethod:
    if value in (None, ""):
        return CheckInMethod.MANUAL
    try:
        return CheckInMethod(str(value).upper())
    except ValueError as e:
        allowed = ", ".join(m.value for m in CheckInMethod)
        raise ValidationError(f"Unknown check-in method {value!r}, expected one of {allowed}") from e


def parse_status(value: Optional[str]) -> Optional[AttendanceStatus]:
    if not value:
        return None
    try:
        return AttendanceStatus(value.upper())
    except ValueError as e:
        raise ValidationError(f"Unknown status {value!r}") from e


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/employees/<int:employee_id>/check-in", methods=["POST"], endpoint="check_in")
    def check_in(employee_id: int):
        data = request.get_json(silent=True) or {}
        record = service.check_in(
            employee_id,
            location=parse_location(data),
            method=parse_method(data.get("method")),
            qr_token=(data.get("qr_code") or "").strip() or None,
        )
        return jsonify({"success": True, "message": "Check-in successful", "attendance": record_to_dict(record)}), 201

    @app.route("/api/employees/<int:employee_id>/check-out", methods=["POST"], endpoint="check_out")
    def check_out(employee_id: int):
        data = request.get_json(silent=True) or {}
        record = service.check_out(employee_id, location=parse_location(data))
        return jsonify({"success": True, "message": "Check-out successful", "attendance": record_to_dict(record)})

    @app.route("/api/employees/<int:employee_id>/attendance/open", methods=["GET"], endpoint="open_session")
    def open_session(employee_id: int):
        view = service.open_session(employee_id)
        if view is None:
            return jsonify({"success": True, "checked_in": False})
        return jsonify({"success": True, "checked_in": True, "session": open_session_to_dict(view)})

    @app.route("/api/employees/<int:employee_id>/attendance/<work_date>", methods=["GET"], endpoint="get_record")
    def get_record(employee_id: int, work_date: str):
        record = service.get_record(employee_id, parse_iso_date(work_date))
        return jsonify({"success": True, "attendance": record_to_dict(record)})

    @app.route(
        "/api/employees/<int:employee_id>/attendance/<work_date>/classify",
        methods=["POST"],
        endpoint="classify_day",
    )
    def classify_day(employee_id: int, work_date: str):
        record = service.classify_day(employee_id, parse_iso_date(work_date))
        return jsonify({"success": True, "attendance": record_to_dict(record)})

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="get_history")
    def get_history(employee_id: int):
        status = parse_status(request.args.get("status"))
        start = request.args.get("start")
        end = request.args.get("end")
        if start and end:
            records = service.get_history(employee_id, parse_iso_date(start), parse_iso_date(end), status=status)
        elif start or end:
            raise ValidationError("Both start and end are required")
        else:
            records = [
                r
                for r in service.history_window(employee_id, days=DEFAULT_HISTORY_DAYS)
                if status is None or r.status == status
            ]
        return jsonify({"success": True, "attendance": [record_to_dict(r) for r in records]})

    @app.route("/api/employees/<int:employee_id>/leave-balance", methods=["GET"], endpoint="leave_balance")
    def leave_balance(employee_id: int):
        balance = service.leave_balance(employee_id)
        return jsonify(
            {
                "success": True,
                "leave_balance": {"total": balance.total, "taken": balance.taken, "remaining": balance.remaining},
            }
        )

    @app.route("/api/qr/image", methods=["GET"], endpoint="qr_image")
    def qr_image():
        token = container.options.qr_token
        if not token:
            raise ValidationError("QR check-in is not configured")

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(token)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return send_file(buf, mimetype="image/png")
