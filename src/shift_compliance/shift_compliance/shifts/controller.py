from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import InvalidShiftConfig
from .model import ShiftConfig


def shift_to_dict(shift: Optional[ShiftConfig]) -> Optional[dict]:
    if shift is None:
        return None
    return {
        "start": shift.start.strftime("%H:%M"),
        "end": shift.end.strftime("%H:%M"),
        "grace_period_minutes": shift.grace_period_minutes,
        "expected_working_hours": shift.expected_working_hours,
        "half_day_fraction": shift.half_day_fraction,
    }


def register(app: Flask, container: Container) -> None:
    shifts = container.shift_service

    @app.route("/api/employees/<int:employee_id>/shift", methods=["GET"], endpoint="get_shift")
    def get_shift(employee_id: int):
        return jsonify({"success": True, "shift": shift_to_dict(shifts.get(employee_id))})

    @app.route("/api/employees/<int:employee_id>/shift", methods=["PUT"], endpoint="configure_shift")
    def configure_shift(employee_id: int):
        data = request.get_json(silent=True) or {}
        try:
            shift = shifts.configure(
                employee_id=employee_id,
                start=str(data.get("start", "")),
                end=str(data.get("end", "")),
                grace_period_minutes=int(data.get("grace_period_minutes", 0)),
                expected_working_hours=float(data.get("expected_working_hours", 0)),
                half_day_fraction=(
                    float(data["half_day_fraction"]) if data.get("half_day_fraction") is not None else None
                ),
            )
        except (TypeError, ValueError) as e:
            raise InvalidShiftConfig(f"Invalid shift payload: {e}") from e
        return jsonify({"success": True, "shift": shift_to_dict(shift)})
