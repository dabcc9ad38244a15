from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveApplication:
    leave_id: int
    student_id: int
    applicant_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    review_remarks: Optional[str] = None

    @property
    def number_of_days(self) -> int:
        return inclusive_days(self.from_date, self.to_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "leave_id": self.leave_id,
            "student_id": self.student_id,
            "applicant_id": self.applicant_id,
            "leave_type": self.leave_type.value,
            "from_date": self.from_date.isoformat(),
            "to_date": self.to_date.isoformat(),
            "number_of_days": self.number_of_days,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "review_remarks": self.review_remarks,
        }


@dataclass(frozen=True)
class LeaveSummary:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    cancelled: int = 0
    approved_days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "pending": self.pending,
            "approved": self.approved,
            "rejected": self.rejected,
            "cancelled": self.cancelled,
            "approved_days": self.approved_days,
        }


def summarize_leaves(leaves) -> LeaveSummary:
    counts = {s: 0 for s in LeaveStatus}
    approved_days = 0
    total = 0
    for leave in leaves:
        total += 1
        counts[leave.status] = counts.get(leave.status, 0) + 1
        if leave.status == LeaveStatus.APPROVED:
            approved_days += leave.number_of_days
    return LeaveSummary(
        total=total,
        pending=counts[LeaveStatus.PENDING],
        approved=counts[LeaveStatus.APPROVED],
        rejected=counts[LeaveStatus.REJECTED],
        cancelled=counts[LeaveStatus.CANCELLED],
        approved_days=approved_days,
    )
