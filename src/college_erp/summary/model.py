from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..attendance.model import AttendanceSummary
from ..fees.model import FeeSummary
from ..grades.model import GradeSummary


@dataclass(frozen=True)
class StudentSummary:
    """Single dashboard payload shared by the student, parent, teacher and admin views.

    ``degraded`` names the sections that fell back to zero defaults because
    their data could not be fetched.
    """

    student_id: int
    attendance: AttendanceSummary = field(default_factory=AttendanceSummary)
    grades: GradeSummary = field(default_factory=GradeSummary)
    fees: FeeSummary = field(default_factory=FeeSummary)
    pending_leaves: int = 0
    degraded: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "student_id": self.student_id,
            "attendance": self.attendance.to_dict(),
            "grades": self.grades.to_dict(),
            "fees": self.fees.to_dict(),
            "pending_leaves": self.pending_leaves,
            "degraded": list(self.degraded),
        }
