from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container
from .model import MonthCalendar


def calendar_to_dict(cal: MonthCalendar) -> dict:
    return {
        "employee_id": cal.employee_id,
        "year": cal.year,
        "month": cal.month,
        "entries": [
            {
                "date": e.work_date.isoformat(),
                "status": e.status.value,
                "color": e.color,
                "total_work_hours": e.total_work_hours,
                "check_in": e.check_in,
                "check_out": e.check_out,
                "note": e.note,
            }
            for e in cal.entries
        ],
        "summary": cal.summary.as_dict() if cal.summary else None,
    }


def _int_arg(name: str) -> int:
    value = request.args.get(name)
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Query parameter {name!r} must be an integer") from e


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/employees/<int:employee_id>/summary", methods=["GET"], endpoint="summary")
    def summary(employee_id: int):
        start = request.args.get("start")
        end = request.args.get("end")
        if start or end:
            if not (start and end):
                raise ValidationError("Both start and end are required")
            result = reports.summarize(employee_id, parse_iso_date(start), parse_iso_date(end))
        else:
            result = reports.window(employee_id, request.args.get("window", "month"))
        return jsonify({"success": True, "summary": result.as_dict()})

    @app.route("/api/employees/<int:employee_id>/calendar", methods=["GET"], endpoint="calendar")
    def month_calendar(employee_id: int):
        cal = reports.month_calendar(employee_id, _int_arg("year"), _int_arg("month"))
        return jsonify({"success": True, "calendar": calendar_to_dict(cal)})
