from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import LeaveStatus, LeaveType
from ..fees.model import FeeAssignment
from ..grades.model import MarkRecord
from ..leaves.model import LeaveApplication


class RecordStore(Protocol):
    """Repository interface for the records the aggregators consume.

    Note (DIP): services and the summary facade depend on this interface, not
    on a concrete database. Reads are always scoped to one student.
    """

    def list_attendance(
        self,
        student_id: int,
        *,
        subject_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_marks(
        self,
        student_id: int,
        *,
        semester: Optional[int] = None,
        academic_year: Optional[str] = None,
    ) -> Sequence[MarkRecord]:
        raise NotImplementedError

    def list_fees(
        self,
        student_id: int,
        *,
        academic_year: Optional[str] = None,
    ) -> Sequence[FeeAssignment]:
        """Fee assignments with their payment history attached."""

        raise NotImplementedError

    # Leave applications
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
        raise NotImplementedError

    def get_leave(self, *, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        student_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def decide_leave(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: Optional[int],
        remarks: Optional[str] = None,
    ) -> bool:
        """Move a Pending application to ``status``. False if it is no longer Pending."""

        raise NotImplementedError
