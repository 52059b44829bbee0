from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import role_required
from ..common.http import request_payload
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    student_required = role_required(container.access_guard, Role.STUDENT)

    @app.route("/api/students/register", methods=["POST"], endpoint="student_register")
    def student_register():
        result = container.identity_service.register(Role.STUDENT, request_payload())
        return jsonify({"message": "Student registered successfully", **result.to_dict()}), 201

    @app.route("/api/students/login", methods=["POST"], endpoint="student_login")
    def student_login():
        data = request_payload()
        result = container.identity_service.login(Role.STUDENT, data.get("email"), data.get("password"))
        return jsonify({"message": "Login successful", **result.to_dict()})

    @app.route("/api/students/profile", endpoint="student_profile")
    @student_required
    def student_profile():
        return jsonify({"message": "Student profile retrieved successfully", "student": g.actor.public_view()})

    @app.route("/api/students/attendance", endpoint="student_attendance")
    @student_required
    def student_attendance():
        student = g.actor
        view = container.attendance_service.history_for_student(
            student,
            subject=request.args.get("subject"),
            date_from=request.args.get("date_from"),
            date_to=request.args.get("date_to"),
        )
        return jsonify(
            {
                "message": "Attendance records retrieved successfully",
                "student": {"id": student.student_id, "name": student.name},
                "filters": view.filters.to_dict(),
                "subjects": list(view.subjects),
                "attendance": [r.to_dict() for r in view.records],
                "statistics": view.statistics.to_dict(),
            }
        )
