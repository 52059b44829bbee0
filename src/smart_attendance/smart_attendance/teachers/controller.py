from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import role_required
from ..common.http import request_payload
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    teacher_required = role_required(container.access_guard, Role.TEACHER)

    @app.route("/api/teachers/register", methods=["POST"], endpoint="teacher_register")
    def teacher_register():
        result = container.identity_service.register(Role.TEACHER, request_payload())
        return jsonify({"message": "Teacher registered successfully", **result.to_dict()}), 201

    @app.route("/api/teachers/login", methods=["POST"], endpoint="teacher_login")
    def teacher_login():
        data = request_payload()
        result = container.identity_service.login(Role.TEACHER, data.get("email"), data.get("password"))
        return jsonify({"message": "Login successful", **result.to_dict()})

    @app.route("/api/teachers/profile", endpoint="teacher_profile")
    @teacher_required
    def teacher_profile():
        return jsonify({"message": "Teacher profile retrieved successfully", "teacher": g.actor.public_view()})

    @app.route("/api/teachers/students", endpoint="teacher_students")
    @teacher_required
    def teacher_students():
        return jsonify(
            {
                "message": "Students retrieved successfully",
                "students": container.student_service.list_roster(),
            }
        )

    @app.route("/api/teachers/attendance-summary", endpoint="teacher_attendance_summary")
    @teacher_required
    def teacher_attendance_summary():
        summary = container.attendance_service.summarize_for_teacher()
        return jsonify(
            {
                "message": "Attendance summary retrieved successfully",
                "summary": [row.to_dict() for row in summary],
            }
        )

    @app.route("/api/teachers/attendance-records", endpoint="teacher_attendance_records")
    @teacher_required
    def teacher_attendance_records():
        teacher = g.actor
        view = container.attendance_service.list_for_teacher(
            teacher,
            date_from=request.args.get("date_from"),
            date_to=request.args.get("date_to"),
            student_id=request.args.get("student_id"),
        )
        return jsonify(
            {
                "message": "Attendance records retrieved successfully",
                "teacher": {"id": teacher.teacher_id, "name": teacher.name, "subject": teacher.subject},
                "filters": view.filters.to_dict(),
                "records": [r.to_dict() for r in view.records],
                "statistics": view.statistics.to_dict(),
            }
        )

    @app.route("/api/teachers/attendance", methods=["POST"], endpoint="teacher_mark_attendance")
    @teacher_required
    def teacher_mark_attendance():
        teacher = g.actor
        data = request_payload()
        result = container.attendance_service.mark_attendance(
            teacher,
            student_id=data.get("student_id"),
            attendance_date=data.get("date"),
            status=data.get("status"),
        )
        return jsonify(
            {
                "message": result.message,
                "attendance": {**result.record.to_dict(), "student_name": result.student_name},
                "marked_by": {"teacher_id": teacher.teacher_id, "teacher_name": teacher.name},
            }
        )
