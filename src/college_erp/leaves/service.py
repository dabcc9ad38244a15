from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..auth.context import AuthContext
from ..common.validators import require_enum, require_non_empty
from ..core.constants import DEFAULT_LEAVE_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..store.repository import RecordStore
from .model import LeaveApplication, LeaveSummary, summarize_leaves


class LeaveService:
    """Use case: student leave applications and their one-time review."""

    def __init__(self, store: RecordStore):
        self._store = store

    def apply(
        self,
        auth: AuthContext,
        *,
        student_id: int,
        leave_type: str,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> int:
        if not auth.can_act_for_student(int(student_id)):
            raise AuthorizationError("Only the student or a linked parent can apply for leave")

        kind = require_enum(LeaveType, leave_type, "leave type")
        if to_date < from_date:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(reason, "Reason")

        return self._store.create_leave(
            student_id=int(student_id),
            applicant_id=int(auth.user_id),
            leave_type=kind,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
        )

    def approve(self, auth: AuthContext, *, leave_id: int, remarks: str = "") -> LeaveApplication:
        return self._review(auth, leave_id=leave_id, status=LeaveStatus.APPROVED, remarks=remarks)

    def reject(self, auth: AuthContext, *, leave_id: int, remarks: str = "") -> LeaveApplication:
        return self._review(auth, leave_id=leave_id, status=LeaveStatus.REJECTED, remarks=remarks)

    def cancel(self, auth: AuthContext, *, leave_id: int) -> LeaveApplication:
        leave = self._get(leave_id)
        if not auth.can_act_for_student(leave.student_id):
            raise AuthorizationError("Not authorized to cancel this application")
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Only pending applications can be cancelled")

        ok = self._store.decide_leave(
            leave_id=leave.leave_id,
            status=LeaveStatus.CANCELLED,
            reviewed_by=None,
        )
        if not ok:
            raise ValidationError("Leave application has already been reviewed")
        return self._get(leave_id)

    def list_for_student(
        self,
        auth: AuthContext,
        *,
        student_id: int,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveApplication]:
        auth.require_view(int(student_id))
        return self._store.list_leaves(student_id=int(student_id), status=status, limit=DEFAULT_LEAVE_LIST_LIMIT)

    def list_pending(self, auth: AuthContext) -> Sequence[LeaveApplication]:
        if auth.role != Role.ADMIN:
            raise AuthorizationError("Not allowed")
        return self._store.list_leaves(status=LeaveStatus.PENDING, limit=DEFAULT_LEAVE_LIST_LIMIT)

    def list_mine(self, auth: AuthContext) -> Sequence[LeaveApplication]:
        """Applications of the caller: a student's own, or every linked ward's for a parent."""
        if auth.role == Role.STUDENT and auth.student_id is not None:
            student_ids = [auth.student_id]
        elif auth.role == Role.PARENT:
            student_ids = sorted(auth.ward_ids)
        else:
            student_ids = []
        return [l for sid in student_ids for l in self.list_for_student(auth, student_id=sid)]

    def summarize_mine(self, auth: AuthContext) -> tuple[Sequence[LeaveApplication], LeaveSummary]:
        leaves = self.list_mine(auth)
        return leaves, summarize_leaves(leaves)

    def _review(self, auth: AuthContext, *, leave_id: int, status: LeaveStatus, remarks: str) -> LeaveApplication:
        if auth.role != Role.ADMIN:
            raise AuthorizationError("Only an administrator can review leave applications")

        leave = self._get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave application has already been reviewed")

        ok = self._store.decide_leave(
            leave_id=leave.leave_id,
            status=status,
            reviewed_by=int(auth.user_id),
            remarks=(remarks or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Leave application has already been reviewed")
        return self._get(leave_id)

    def _get(self, leave_id: int) -> LeaveApplication:
        leave = self._store.get_leave(leave_id=int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")
        return leave
