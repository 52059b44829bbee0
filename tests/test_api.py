from __future__ import annotations

import pytest
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge


def _register_teacher(client, email="alice@school.test", subject="Math"):
    resp = client.post(
        "/api/teachers/register",
        json={"name": "Alice", "email": email, "password": "pw123", "subject": subject},
    )
    assert resp.status_code == 201
    return resp.get_json()


def _register_student(client, name="Bob", email="bob@school.test"):
    resp = client.post(
        "/api/students/register",
        json={"name": name, "email": email, "password": "pw123", "branch": "CSE", "year": 2},
    )
    assert resp.status_code == 201
    return resp.get_json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def teacher_token(client):
    return _register_teacher(client)["token"]


@pytest.fixture
def student(client):
    return _register_student(client)


def test_index_lists_endpoints(client):
    body = client.get("/").get_json()

    assert body["endpoints"]["teachers"]["markAttendance"] == "POST /api/teachers/attendance"


def test_unknown_route_and_method(client):
    assert client.get("/api/nowhere").get_json() == {"error": "Route not found"}
    resp = client.delete("/api/students/profile")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Route not found"}


def test_register_response_strips_password(client):
    body = _register_student(client)

    assert body["message"] == "Student registered successfully"
    assert body["student"]["year"] == 2
    assert "password" not in body["student"] and "password_hash" not in body["student"]


def test_register_duplicate_and_missing_fields(client, student):
    dup = client.post(
        "/api/students/register",
        json={"name": "Bob", "email": "bob@school.test", "password": "x", "branch": "CSE", "year": 2},
    )
    missing = client.post("/api/teachers/register", json={"name": "A"})

    assert dup.status_code == 400
    assert dup.get_json() == {"error": "Student with this email already exists"}
    assert missing.status_code == 400


def test_register_accepts_form_body(client):
    resp = client.post(
        "/api/teachers/register",
        data={"name": "Alice", "email": "alice@school.test", "password": "pw123", "subject": "Math"},
    )

    assert resp.status_code == 201


def test_login_failures_are_byte_identical(client, student):
    wrong_password = client.post("/api/students/login", json={"email": "bob@school.test", "password": "bad"})
    unknown_email = client.post("/api/students/login", json={"email": "ghost@school.test", "password": "pw123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.data == unknown_email.data


def test_login_then_profile(client, student):
    login = client.post("/api/students/login", json={"email": "bob@school.test", "password": "pw123"}).get_json()

    profile = client.get("/api/students/profile", headers=_auth(login["token"]))

    assert profile.status_code == 200
    assert profile.get_json()["student"]["email"] == "bob@school.test"


def test_attendance_without_token(client):
    resp = client.get("/api/students/attendance")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Access denied. No token provided."}


def test_attendance_with_empty_bearer_header(client):
    resp = client.get("/api/students/attendance", headers={"Authorization": "Bearer "})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Access denied. No token provided."}


def test_teacher_token_on_student_route_is_forbidden(client, teacher_token):
    resp = client.get("/api/students/attendance", headers=_auth(teacher_token))

    assert resp.status_code == 403
    assert resp.get_json() == {"error": "Access denied. Student token required."}


def test_invalid_token(client):
    resp = client.get("/api/teachers/profile", headers=_auth("garbage"))

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token."}


def test_mark_remark_and_student_history(client, teacher_token, student):
    student_id = student["student"]["id"]
    payload = {"student_id": student_id, "date": "2024-01-10", "status": "present"}

    first = client.post("/api/teachers/attendance", json=payload, headers=_auth(teacher_token))
    second = client.post(
        "/api/teachers/attendance", json={**payload, "status": "LATE"}, headers=_auth(teacher_token)
    )

    assert first.get_json()["message"] == "Attendance marked successfully"
    body = second.get_json()
    assert body["message"] == "Attendance updated successfully"
    assert body["attendance"]["status"] == "late"
    assert body["attendance"]["student_name"] == "Bob"
    assert body["marked_by"]["teacher_name"] == "Alice"

    history = client.get(
        "/api/students/attendance?date_from=2024-01-10&date_to=2024-01-10",
        headers=_auth(student["token"]),
    ).get_json()
    assert len(history["attendance"]) == 1
    assert history["attendance"][0]["subject"] == "Math"
    assert history["attendance"][0]["status"] == "late"
    assert history["attendance"][0]["teacher_name"] == "Alice"
    assert history["subjects"] == ["Math"]
    assert history["statistics"] == {"total": 1, "present": 0, "absent": 0, "late": 1, "percentage": 0.0}
    assert history["filters"] == {"subject": None, "date_from": "2024-01-10", "date_to": "2024-01-10"}


def test_mark_attendance_errors(client, teacher_token, student):
    bad_status = client.post(
        "/api/teachers/attendance",
        json={"student_id": student["student"]["id"], "date": "2024-01-10", "status": "gone"},
        headers=_auth(teacher_token),
    )
    missing_student = client.post(
        "/api/teachers/attendance",
        json={"student_id": 999, "date": "2024-01-10", "status": "present"},
        headers=_auth(teacher_token),
    )

    assert bad_status.status_code == 400
    assert bad_status.get_json() == {"error": "Status must be one of: present, absent, late"}
    assert missing_student.status_code == 404
    assert missing_student.get_json() == {"error": "Student not found"}


def test_students_can_not_mark_attendance(client, student):
    resp = client.post(
        "/api/teachers/attendance",
        json={"student_id": student["student"]["id"], "date": "2024-01-10", "status": "present"},
        headers=_auth(student["token"]),
    )

    assert resp.status_code == 403


def test_roster_summary_and_records(client, teacher_token, student):
    other = _register_student(client, name="Amy", email="amy@school.test")
    client.post(
        "/api/teachers/attendance",
        json={"student_id": student["student"]["id"], "date": "2024-01-10", "status": "present"},
        headers=_auth(teacher_token),
    )

    roster = client.get("/api/teachers/students", headers=_auth(teacher_token)).get_json()
    summary = client.get("/api/teachers/attendance-summary", headers=_auth(teacher_token)).get_json()
    records = client.get(
        f"/api/teachers/attendance-records?student_id={student['student']['id']}",
        headers=_auth(teacher_token),
    ).get_json()

    assert [s["name"] for s in roster["students"]] == ["Amy", "Bob"]
    assert [(r["name"], r["present"]) for r in summary["summary"]] == [("Amy", 0), ("Bob", 1)]
    assert summary["summary"][0]["student_id"] == other["student"]["id"]
    assert len(records["records"]) == 1
    assert records["records"][0]["student_name"] == "Bob"
    assert records["statistics"]["percentage"] == 100.0


def test_records_reject_malformed_dates(client, teacher_token):
    resp = client.get("/api/teachers/attendance-records?date_from=01-10-2024", headers=_auth(teacher_token))

    assert resp.status_code == 400


def test_unexpected_errors_are_generic_500(client, app, teacher_token, monkeypatch):
    container = app.extensions["smart_attendance"]

    def boom():
        raise RuntimeError("connection refused by db-host:3306")

    monkeypatch.setattr(container.attendance_service, "summarize_for_teacher", boom)

    resp = client.get("/api/teachers/attendance-summary", headers=_auth(teacher_token))

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_http_errors_keep_their_status(app, client):
    def bad_request():
        raise BadRequest("Malformed request body")

    def too_large():
        raise RequestEntityTooLarge()

    app.add_url_rule("/api/bad-request", endpoint="bad_request", view_func=bad_request)
    app.add_url_rule("/api/too-large", endpoint="too_large", view_func=too_large)

    bad = client.get("/api/bad-request")
    large = client.get("/api/too-large")

    assert bad.status_code == 400
    assert bad.get_json() == {"error": "Malformed request body"}
    assert large.status_code == 413
    assert large.get_json()["error"] == RequestEntityTooLarge.description
