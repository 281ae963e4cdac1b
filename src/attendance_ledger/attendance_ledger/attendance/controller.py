from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import error_response
from ..common.validators import parse_iso_date
from ..core.exceptions import DomainError, StoreError, ValidationError
from ..container import Container
from ..roster.controller import student_json
from .service import DaySheet


def sheet_json(sheet: DaySheet) -> dict:
    return {
        "date": sheet.date.isoformat(),
        "rows": [
            {"student": student_json(r.student), "status": r.effective.label} for r in sheet.rows
        ],
        "tally": {
            "present": sheet.tally.present,
            "absent": sheet.tally.absent,
            "late": sheet.tally.late,
            "pending": sheet.tally.pending,
        },
    }


def register(app: Flask, container: Container) -> None:
    def _date_from(value):
        return parse_iso_date(value) if value else today_local()

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_today")
    @app.route("/api/attendance/<date_str>", methods=["GET"], endpoint="attendance_for_date")
    def attendance_for_date(date_str: str | None = None):
        try:
            sheet = container.attendance_service.day_sheet(_date_from(date_str))
        except (DomainError, StoreError) as e:
            return error_response(e)
        return jsonify({"success": True, "sheet": sheet_json(sheet)})

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            try:
                student_id = int(data.get("student_id"))
            except (TypeError, ValueError):
                raise ValidationError("student_id is required")
            sheet = container.attendance_service.mark_student(
                student_id, _date_from(data.get("date")), data.get("status")
            )
        except (DomainError, StoreError) as e:
            return error_response(e)
        return jsonify({"success": True, "sheet": sheet_json(sheet)})

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin_by_roll")
    def checkin_by_roll():
        data = request.get_json(silent=True) or {}
        try:
            result = container.attendance_service.check_in(data.get("roll", ""), _date_from(data.get("date")))
        except (DomainError, StoreError) as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "message": f"Marked PRESENT: {result.student.name}",
                "student": student_json(result.student),
                "ambiguous": result.ambiguous,
                "sheet": sheet_json(result.sheet),
            }
        )
