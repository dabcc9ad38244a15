from __future__ import annotations

from datetime import date, datetime

import pytest

from college_erp.attendance.model import AttendanceRecord
from college_erp.config import testing as settings
from college_erp.container import build_container
from college_erp.core.enums import AttendanceStatus, PaymentMethod
from college_erp.fees.model import FeeAssignment, Payment
from college_erp.grades.model import MarkRecord
from college_erp.main import create_app
from college_erp.store.memory_store import InMemoryRecordStore


def _store() -> InMemoryRecordStore:
    attendance = [
        AttendanceRecord(1, 1 if d % 2 else 2, date(2024, 9, d), AttendanceStatus.ABSENT if d > 18 else AttendanceStatus.PRESENT)
        for d in range(1, 21)
    ]
    attendance.append(AttendanceRecord(1, 1, date(2024, 10, 1), AttendanceStatus.ABSENT))
    marks = [
        MarkRecord(1, 1, "Final", 72, 100, 1, "2024-25", credits=4),
        MarkRecord(1, 2, "Final", 65, 100, 1, "2024-25", credits=3),
        MarkRecord(1, 3, "Final", 30, 100, 2, "2024-25", credits=3),
    ]
    fees = [
        FeeAssignment(
            fee_id=1,
            student_id=1,
            fee_structure_id=1,
            total_amount=5000,
            academic_year="2024-25",
            semester=1,
            payments=(Payment(2500, datetime(2024, 9, 1), PaymentMethod.ONLINE, "TX1"),),
        )
    ]
    return InMemoryRecordStore(attendance=attendance, marks=marks, fees=fees)


@pytest.fixture
def client():
    container = build_container(store=_store(), api_tokens=settings.API_TOKENS)
    app = create_app(settings_module="college_erp.config.testing", container=container)
    return app.test_client()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_missing_or_unknown_token_is_401(client):
    assert client.get("/api/students/1/summary").status_code == 401
    assert client.get("/api/students/1/summary", headers=_auth("nope")).status_code == 401


def test_student_summary(client):
    resp = client.get("/api/students/1/summary", headers=_auth("student-token"))

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["attendance"]["total"] == 21
    assert data["attendance"]["percentage"] == 86
    assert data["attendance"]["good_standing"] is True
    assert data["grades"]["backlog_count"] == 1
    assert data["fees"]["due"] == 2500
    assert data["pending_leaves"] == 0


def test_student_cannot_read_another_student(client):
    assert client.get("/api/students/1/summary", headers=_auth("other-student-token")).status_code == 403


def test_attendance_filters(client):
    resp = client.get("/api/students/1/attendance?month=2024-09", headers=_auth("parent-token"))

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["summary"]["total"] == 20
    assert body["summary"]["percentage"] == 90
    assert [s["subject_id"] for s in body["data"]["subjects"]] == [1, 2]
    assert all(d["date"].startswith("2024-09-") for d in body["daily_trend"])

    resp = client.get("/api/students/1/attendance?subject_id=2&start=2024-09-01&end=2024-09-10", headers=_auth("admin-token"))
    assert resp.get_json()["summary"]["total"] == 5


def test_attendance_bad_query_is_400(client):
    resp = client.get("/api/students/1/attendance?subject_id=abc", headers=_auth("admin-token"))

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_grades_by_semester(client):
    resp = client.get("/api/students/1/grades?semester=1", headers=_auth("student-token"))

    body = resp.get_json()
    assert body["data"]["cgpa"] == 8.57  # (9*4 + 8*3) / 7
    assert body["data"]["backlog_count"] == 0
    assert body["distribution"] == {"A": 1, "B+": 1}


def test_fees(client):
    body = client.get("/api/students/1/fees?academic_year=2024-25", headers=_auth("student-token")).get_json()

    assert body["data"]["paid"] == 2500
    assert body["data"]["assignments"][0]["status"] == "Partial"
    assert body["overdue"] == []
    assert body["monthly_collection"] == [{"month": "2024-09", "amount": 2500.0, "count": 1}]


def test_ward_summaries(client):
    resp = client.get("/api/parents/wards/summary", headers=_auth("parent-token"))

    assert resp.status_code == 200
    assert [s["student_id"] for s in resp.get_json()["data"]] == [1]
    assert client.get("/api/parents/wards/summary", headers=_auth("student-token")).status_code == 403


def test_leave_workflow(client):
    resp = client.post(
        "/api/leaves",
        json={"leave_type": "Sick Leave", "from_date": "2024-10-01", "to_date": "2024-10-02", "reason": "Fever"},
        headers=_auth("student-token"),
    )
    assert resp.status_code == 201
    leave_id = resp.get_json()["data"]["leave_id"]

    pending = client.get("/api/leaves/pending", headers=_auth("admin-token")).get_json()
    assert pending["count"] == 1

    assert client.get("/api/students/1/summary", headers=_auth("parent-token")).get_json()["data"]["pending_leaves"] == 1

    assert client.post(f"/api/leaves/{leave_id}/approve", json={}, headers=_auth("student-token")).status_code == 403
    resp = client.post(f"/api/leaves/{leave_id}/approve", json={"remarks": "ok"}, headers=_auth("admin-token"))
    assert resp.get_json()["data"]["status"] == "Approved"

    assert client.post(f"/api/leaves/{leave_id}/reject", json={}, headers=_auth("admin-token")).status_code == 400
    assert client.post(f"/api/leaves/{leave_id}/cancel", headers=_auth("student-token")).status_code == 400

    mine = client.get("/api/leaves/mine", headers=_auth("parent-token")).get_json()
    assert mine["summary"]["approved"] == 1
    assert mine["summary"]["approved_days"] == 2


def test_leave_validation_and_not_found(client):
    bad_dates = client.post(
        "/api/leaves",
        json={"leave_type": "Sick Leave", "from_date": "01/10/2024", "to_date": "2024-10-02", "reason": "Fever"},
        headers=_auth("student-token"),
    )
    assert bad_dates.status_code == 400

    missing = client.post("/api/leaves/99/approve", json={}, headers=_auth("admin-token"))
    assert missing.status_code == 404


def test_parent_cancels_ward_leave(client):
    leave_id = client.post(
        "/api/leaves",
        json={"student_id": 1, "leave_type": "Emergency Leave", "from_date": "2024-10-05", "to_date": "2024-10-05", "reason": "Travel"},
        headers=_auth("parent-token"),
    ).get_json()["data"]["leave_id"]

    resp = client.post(f"/api/leaves/{leave_id}/cancel", headers=_auth("parent-token"))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "Cancelled"
