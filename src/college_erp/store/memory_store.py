from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..fees.model import FeeAssignment, Payment
from ..grades.model import MarkRecord
from ..leaves.model import LeaveApplication
from .repository import RecordStore


class InMemoryRecordStore(RecordStore):
    """Process-local store for demos and tests."""

    def __init__(
        self,
        *,
        attendance: Iterable[AttendanceRecord] = (),
        marks: Iterable[MarkRecord] = (),
        fees: Iterable[FeeAssignment] = (),
        leaves: Iterable[LeaveApplication] = (),
    ):
        self._lock = threading.Lock()
        self._attendance: dict[tuple[int, int, date, int], AttendanceRecord] = {}
        self._marks: list[MarkRecord] = list(marks)
        self._fees: dict[int, FeeAssignment] = {f.fee_id: f for f in fees}
        self._leaves: dict[int, LeaveApplication] = {l.leave_id: l for l in leaves}
        self._next_leave_id = max(self._leaves, default=0) + 1
        for r in attendance:
            self.add_attendance(r)

    # Seeding helpers (not part of RecordStore)
    def add_attendance(self, record: AttendanceRecord) -> None:
        key = (record.student_id, record.subject_id, record.date, record.lecture_number)
        with self._lock:
            if key in self._attendance:
                raise ValidationError(
                    f"Attendance already marked for student {record.student_id} on {record.date}"
                )
            self._attendance[key] = record

    def correct_attendance(self, record: AttendanceRecord) -> None:
        key = (record.student_id, record.subject_id, record.date, record.lecture_number)
        with self._lock:
            if key not in self._attendance:
                raise ValidationError("Attendance record not found")
            self._attendance[key] = record

    def add_mark(self, record: MarkRecord) -> None:
        with self._lock:
            self._marks.append(record)

    def add_fee(self, assignment: FeeAssignment) -> None:
        with self._lock:
            self._fees[assignment.fee_id] = assignment

    def add_payment(self, fee_id: int, payment: Payment) -> None:
        with self._lock:
            fee = self._fees.get(fee_id)
            if fee is None:
                raise ValidationError("Fee record not found")
            self._fees[fee_id] = replace(fee, payments=fee.payments + (payment,))

    # RecordStore
    def list_attendance(
        self,
        student_id: int,
        *,
        subject_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._attendance.values() if r.student_id == student_id]
        if subject_id is not None:
            items = [r for r in items if r.subject_id == subject_id]
        if start is not None:
            items = [r for r in items if r.date >= start]
        if end is not None:
            items = [r for r in items if r.date <= end]
        items.sort(key=lambda r: (r.date, r.subject_id, r.lecture_number), reverse=True)
        return items

    def list_marks(
        self,
        student_id: int,
        *,
        semester: Optional[int] = None,
        academic_year: Optional[str] = None,
    ) -> Sequence[MarkRecord]:
        with self._lock:
            items = [m for m in self._marks if m.student_id == student_id]
        if semester is not None:
            items = [m for m in items if m.semester == semester]
        if academic_year is not None:
            items = [m for m in items if m.academic_year == academic_year]
        return items

    def list_fees(self, student_id: int, *, academic_year: Optional[str] = None) -> Sequence[FeeAssignment]:
        with self._lock:
            items = [f for f in self._fees.values() if f.student_id == student_id]
        if academic_year is not None:
            items = [f for f in items if f.academic_year == academic_year]
        return items

    def create_leave(
        self,
        *,
        student_id: int,
        applicant_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> int:
        with self._lock:
            leave_id = self._next_leave_id
            self._next_leave_id += 1
            self._leaves[leave_id] = LeaveApplication(
                leave_id=leave_id,
                student_id=int(student_id),
                applicant_id=int(applicant_id),
                leave_type=leave_type,
                from_date=from_date,
                to_date=to_date,
                reason=reason,
                status=LeaveStatus.PENDING,
                created_at=now_local(),
            )
            return leave_id

    def get_leave(self, *, leave_id: int) -> Optional[LeaveApplication]:
        with self._lock:
            return self._leaves.get(int(leave_id))

    def list_leaves(
        self,
        *,
        student_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        with self._lock:
            items = list(self._leaves.values())
        if student_id is not None:
            items = [l for l in items if l.student_id == int(student_id)]
        if status is not None:
            items = [l for l in items if l.status == status]
        items.sort(key=lambda l: (l.created_at, l.leave_id), reverse=True)
        return items[: int(limit)]

    def decide_leave(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: Optional[int],
        remarks: Optional[str] = None,
    ) -> bool:
        with self._lock:
            leave = self._leaves.get(int(leave_id))
            if not leave or leave.status != LeaveStatus.PENDING:
                return False
            self._leaves[int(leave_id)] = replace(
                leave,
                status=status,
                reviewed_by=reviewed_by,
                reviewed_at=now_local(),
                review_remarks=remarks,
            )
            return True
