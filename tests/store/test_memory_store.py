from __future__ import annotations

from datetime import date, datetime

import pytest

from college_erp.attendance.model import AttendanceRecord
from college_erp.core.enums import AttendanceStatus, LeaveStatus, LeaveType, PaymentMethod
from college_erp.core.exceptions import ValidationError
from college_erp.fees.model import FeeAssignment, Payment
from college_erp.grades.model import MarkRecord
from college_erp.store.memory_store import InMemoryRecordStore


def _att(student_id, subject_id, day, status=AttendanceStatus.PRESENT, lecture=1):
    return AttendanceRecord(student_id, subject_id, date(2024, 9, day), status, lecture_number=lecture)


def test_attendance_is_scoped_and_filtered():
    store = InMemoryRecordStore(
        attendance=[_att(1, 1, 1), _att(1, 2, 2), _att(1, 1, 10), _att(2, 1, 1)],
    )

    assert len(store.list_attendance(1)) == 3
    assert [r.date.day for r in store.list_attendance(1, subject_id=1)] == [10, 1]
    assert [r.date.day for r in store.list_attendance(1, start=date(2024, 9, 2), end=date(2024, 9, 9))] == [2]


def test_duplicate_attendance_is_rejected():
    store = InMemoryRecordStore(attendance=[_att(1, 1, 1)])

    with pytest.raises(ValidationError):
        store.add_attendance(_att(1, 1, 1, AttendanceStatus.ABSENT))
    store.add_attendance(_att(1, 1, 1, lecture=2))

    assert len(store.list_attendance(1)) == 2


def test_correct_attendance_replaces_existing_record():
    store = InMemoryRecordStore(attendance=[_att(1, 1, 1)])

    store.correct_attendance(_att(1, 1, 1, AttendanceStatus.LATE))

    assert store.list_attendance(1)[0].status == AttendanceStatus.LATE
    with pytest.raises(ValidationError):
        store.correct_attendance(_att(1, 1, 2))


def test_marks_filters():
    store = InMemoryRecordStore(
        marks=[
            MarkRecord(1, 1, "Final", 80, 100, 1, "2023-24", credits=4),
            MarkRecord(1, 2, "Final", 70, 100, 2, "2024-25", credits=4),
        ]
    )
    store.add_mark(MarkRecord(2, 1, "Final", 50, 100, 1, "2023-24", credits=4))

    assert len(store.list_marks(1)) == 2
    assert [m.subject_id for m in store.list_marks(1, semester=2)] == [2]
    assert [m.subject_id for m in store.list_marks(1, academic_year="2023-24")] == [1]


def test_payments_are_appended_to_fee():
    store = InMemoryRecordStore()
    store.add_fee(FeeAssignment(1, 1, 1, 5000, "2024-25", 1))

    store.add_payment(1, Payment(1000, datetime(2024, 9, 1), PaymentMethod.CASH, "R1"))
    store.add_payment(1, Payment(500, datetime(2024, 9, 2), PaymentMethod.UPI, "R2"))

    fee = store.list_fees(1)[0]
    assert [p.amount for p in fee.payments] == [1000, 500]
    assert store.list_fees(1, academic_year="2023-24") == []
    with pytest.raises(ValidationError):
        store.add_payment(9, Payment(1, datetime(2024, 9, 1), PaymentMethod.CASH, "X"))


def test_leave_decision_is_single_shot():
    store = InMemoryRecordStore()
    leave_id = store.create_leave(
        student_id=1,
        applicant_id=2,
        leave_type=LeaveType.CASUAL,
        from_date=date(2024, 10, 1),
        to_date=date(2024, 10, 2),
        reason="Family function",
    )

    assert leave_id == 1
    assert store.decide_leave(leave_id=leave_id, status=LeaveStatus.APPROVED, reviewed_by=1)
    assert not store.decide_leave(leave_id=leave_id, status=LeaveStatus.REJECTED, reviewed_by=1)
    assert store.get_leave(leave_id=leave_id).status == LeaveStatus.APPROVED
    assert not store.decide_leave(leave_id=42, status=LeaveStatus.APPROVED, reviewed_by=1)


def test_list_leaves_limit_and_status():
    store = InMemoryRecordStore()
    ids = [
        store.create_leave(
            student_id=1,
            applicant_id=2,
            leave_type=LeaveType.OTHER,
            from_date=date(2024, 10, d),
            to_date=date(2024, 10, d),
            reason="r",
        )
        for d in (1, 2, 3)
    ]
    store.decide_leave(leave_id=ids[0], status=LeaveStatus.REJECTED, reviewed_by=1)

    assert len(store.list_leaves(student_id=1, limit=2)) == 2
    assert {l.leave_id for l in store.list_leaves(status=LeaveStatus.PENDING)} == {ids[1], ids[2]}
    assert store.list_leaves(student_id=2) == []
