from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, attendance_from_row
from ..core.enums import LeaveStatus, LeaveType, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..fees.model import FeeAssignment, Payment
from ..grades.model import MarkRecord
from ..leaves.model import LeaveApplication
from .repository import RecordStore

logger = logging.getLogger(__name__)

_LEAVE_COLUMNS = """
    leave_id, student_id, applicant_id, leave_type, from_date, to_date, reason,
    status, created_at, reviewed_by, reviewed_at, review_remarks
"""


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance(
        self,
        student_id: int,
        *,
        subject_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s"]
        params: list[object] = [int(student_id)]
        if subject_id is not None:
            clauses.append("subject_id=%s")
            params.append(int(subject_id))
        if start is not None:
            clauses.append("att_date>=%s")
            params.append(start)
        if end is not None:
            clauses.append("att_date<=%s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, subject_id, att_date, lecture_number, status, remarks
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY att_date DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        out: list[AttendanceRecord] = []
        for r in rows:
            try:
                out.append(attendance_from_row(r))
            except ValueError:
                logger.debug("Skipping attendance row with unknown status: %r", r)
        return out

    def list_marks(
        self,
        student_id: int,
        *,
        semester: Optional[int] = None,
        academic_year: Optional[str] = None,
    ) -> Sequence[MarkRecord]:
        clauses = ["m.student_id=%s"]
        params: list[object] = [int(student_id)]
        if semester is not None:
            clauses.append("m.semester=%s")
            params.append(int(semester))
        if academic_year is not None:
            clauses.append("m.academic_year=%s")
            params.append(academic_year)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT m.student_id, m.subject_id, m.exam_type, m.marks_obtained, m.max_marks,
                       m.semester, m.academic_year, m.attempt_number, s.credits
                FROM marks m
                JOIN subjects s ON s.subject_id = m.subject_id
                WHERE {" AND ".join(clauses)}
                ORDER BY m.semester, m.subject_id, m.attempt_number
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [MarkRecord.from_mapping(r) for r in rows]

    def list_fees(self, student_id: int, *, academic_year: Optional[str] = None) -> Sequence[FeeAssignment]:
        clauses = ["student_id=%s"]
        params: list[object] = [int(student_id)]
        if academic_year is not None:
            clauses.append("academic_year=%s")
            params.append(academic_year)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT fee_id, student_id, fee_structure_id, academic_year, semester, total_amount, due_date
                FROM fee_assignments
                WHERE {" AND ".join(clauses)}
                ORDER BY academic_year DESC, semester DESC
                """,
                tuple(params),
            )
            fee_rows = fetchall(cur)

            payments: dict[int, list[Payment]] = {}
            fee_ids = [int(r["fee_id"]) for r in fee_rows]
            if fee_ids:
                cur.execute(
                    f"""
                    SELECT fee_id, amount, payment_date, method, transaction_id
                    FROM payments
                    WHERE fee_id IN ({in_clause(fee_ids)})
                    ORDER BY payment_date
                    """,
                    tuple(fee_ids),
                )
                for p in fetchall(cur):
                    payments.setdefault(int(p["fee_id"]), []).append(
                        Payment(
                            amount=float(p["amount"]),
                            date=p["payment_date"],
                            method=PaymentMethod(p["method"]),
                            transaction_id=str(p["transaction_id"]),
                        )
                    )

        return [
            FeeAssignment(
                fee_id=int(r["fee_id"]),
                student_id=int(r["student_id"]),
                fee_structure_id=int(r["fee_structure_id"]),
                total_amount=float(r["total_amount"]),
                academic_year=str(r["academic_year"]),
                semester=int(r["semester"]),
                due_date=r.get("due_date"),
                payments=tuple(payments.get(int(r["fee_id"]), ())),
            )
            for r in fee_rows
        ]

    # -------- Leave applications --------
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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(student_id, applicant_id, leave_type, from_date, to_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(student_id),
                    int(applicant_id),
                    leave_type.value,
                    from_date,
                    to_date,
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LEAVE_COLUMNS} FROM leave_applications WHERE leave_id=%s",
                (int(leave_id),),
            )
            r = fetchone(cur)
        return _to_leave(r) if r else None

    def list_leaves(
        self,
        *,
        student_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        clauses = ["1=1"]
        params: list[object] = []
        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LEAVE_COLUMNS}
                FROM leave_applications
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            rows = fetchall(cur)
        return [_to_leave(r) for r in rows]

    def decide_leave(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: Optional[int],
        remarks: Optional[str] = None,
    ) -> bool:
        # status guard in WHERE keeps the Pending -> terminal transition single-shot
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET status=%s, reviewed_by=%s, reviewed_at=NOW(), review_remarks=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, reviewed_by, remarks, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount == 1


def _to_leave(r: dict) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["leave_id"]),
        student_id=int(r["student_id"]),
        applicant_id=int(r["applicant_id"]),
        leave_type=LeaveType(r["leave_type"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        review_remarks=r.get("review_remarks"),
    )
