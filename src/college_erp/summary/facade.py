from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.model import AttendanceSummary
from ..auth.context import AuthContext
from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError
from ..fees.aggregator import FeeAggregator
from ..fees.model import FeeSummary
from ..grades.aggregator import GradeAggregator
from ..grades.model import GradeSummary
from ..store.repository import RecordStore
from .model import StudentSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SummaryFacade:
    """Composes the aggregators into one per-student dashboard summary.

    Each section is fetched independently. If the store fails for one section
    that section falls back to its zero default and the rest still render.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        attendance: Optional[AttendanceAggregator] = None,
        grades: Optional[GradeAggregator] = None,
        fees: Optional[FeeAggregator] = None,
    ):
        self._store = store
        self._attendance = attendance or AttendanceAggregator()
        self._grades = grades or GradeAggregator()
        self._fees = fees or FeeAggregator()

    def build_student_summary(
        self,
        auth: AuthContext,
        student_id: int,
        *,
        now: Optional[datetime] = None,
    ) -> StudentSummary:
        auth.require_view(int(student_id))
        return self._compose(int(student_id), now=now or now_local())

    def build_ward_summaries(self, auth: AuthContext, *, now: Optional[datetime] = None) -> list[StudentSummary]:
        if auth.role != Role.PARENT:
            raise AuthorizationError("Only parent accounts have linked wards")
        now = now or now_local()
        return [self._compose(ward_id, now=now) for ward_id in sorted(auth.ward_ids)]

    def _compose(self, student_id: int, *, now: datetime) -> StudentSummary:
        degraded: list[str] = []

        def section(name: str, compute: Callable[[], T], default: T) -> T:
            try:
                return compute()
            except Exception:
                logger.warning("Summary section %r failed for student %s; using defaults", name, student_id, exc_info=True)
                degraded.append(name)
                return default

        attendance = section(
            "attendance",
            lambda: self._attendance.summarize(self._store.list_attendance(student_id)),
            AttendanceSummary(),
        )
        grades = section(
            "grades",
            lambda: self._grades.summarize(self._store.list_marks(student_id)),
            GradeSummary(),
        )
        fees = section(
            "fees",
            lambda: self._fees.summarize(self._store.list_fees(student_id), now=now),
            FeeSummary(),
        )
        pending_leaves = section(
            "leaves",
            lambda: len(self._store.list_leaves(student_id=student_id, status=LeaveStatus.PENDING)),
            0,
        )

        return StudentSummary(
            student_id=student_id,
            attendance=attendance,
            grades=grades,
            fees=fees,
            pending_leaves=pending_leaves,
            degraded=tuple(degraded),
        )
