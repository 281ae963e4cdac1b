from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..core.exceptions import DomainError, StoreError
from ..container import Container
from .model import Student


def student_json(s: Student) -> dict:
    return {
        "id": s.id,
        "name": s.name,
        "roll_num": s.roll_num,
        "status": s.status.value,
        "created_at": s.created_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    def _roster_payload(students, message: str):
        return jsonify({"success": True, "message": message, "students": [student_json(s) for s in students]})

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        try:
            page = container.roster_service.browse(request.args.get("q", ""))
        except (DomainError, StoreError) as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "query": page.query,
                "students": [student_json(s) for s in page.students],
                "counts": {
                    "total": page.counts.total,
                    "active": page.counts.active,
                    "inactive": page.counts.inactive,
                },
            }
        )

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    def add_student():
        data = request.get_json(silent=True) or {}
        try:
            students = container.roster_service.register(
                name=data.get("name", ""),
                roll_num=data.get("roll_num", ""),
                status=data.get("status") or "active",
            )
        except (DomainError, StoreError) as e:
            return error_response(e)
        return _roster_payload(students, "New student added."), 201

    @app.route("/api/students/<int:student_id>", methods=["PUT", "PATCH"], endpoint="edit_student")
    def edit_student(student_id: int):
        data = request.get_json(silent=True) or {}
        try:
            students = container.roster_service.edit(
                student_id,
                name=data.get("name"),
                roll_num=data.get("roll_num"),
                status=data.get("status"),
            )
        except (DomainError, StoreError) as e:
            return error_response(e)
        return _roster_payload(students, "Student updated successfully.")

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: int):
        try:
            students = container.roster_service.remove(student_id)
        except (DomainError, StoreError) as e:
            return error_response(e)
        return _roster_payload(students, "Student record deleted")
