from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.numbers import to_number
from ..core.enums import MarkStatus


@dataclass(frozen=True)
class MarkRecord:
    """Domain entity: marks for one (student, subject, exam type, attempt).

    ``grade`` is optional input; status is never taken from input and is
    always derived by the grading policy.
    """

    student_id: int
    subject_id: int
    exam_type: str
    marks_obtained: Optional[float]
    max_marks: Optional[float]
    semester: int
    academic_year: str
    credits: float = 0
    grade: Optional[str] = None
    attempt_number: int = 1

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "MarkRecord":
        """Normalize a raw row; accepts legacy ``obtainedMarks``/``marksObtained`` keys."""
        obtained = row.get("marks_obtained")
        if obtained is None:
            obtained = row.get("obtainedMarks", row.get("marksObtained"))
        max_marks = row.get("max_marks", row.get("maxMarks"))
        credits = row.get("credits")
        if credits is None and isinstance(row.get("subject"), Mapping):
            credits = row["subject"].get("credits")

        return cls(
            student_id=int(row.get("student_id", row.get("studentId", 0)) or 0),
            subject_id=int(row.get("subject_id", row.get("subjectId", 0)) or 0),
            exam_type=str(row.get("exam_type", row.get("examType", "")) or ""),
            marks_obtained=to_number(obtained),
            max_marks=to_number(max_marks),
            semester=int(row.get("semester") or 0),
            academic_year=str(row.get("academic_year", row.get("academicYear", "")) or ""),
            credits=to_number(credits) or 0,
            grade=(row.get("grade") or None),
            attempt_number=int(row.get("attempt_number", row.get("attemptNumber", 1)) or 1),
        )


@dataclass(frozen=True)
class EvaluatedMark:
    """A mark record with its derived grade, status and grade points."""

    record: MarkRecord
    percentage: Optional[float]
    grade: str
    status: MarkStatus
    grade_points: float

    @property
    def is_backlog(self) -> bool:
        return self.status == MarkStatus.FAIL


@dataclass(frozen=True)
class SemesterSummary:
    semester: int
    sgpa: Optional[float]
    credits: float
    passed_count: int
    backlog_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "semester": self.semester,
            "sgpa": self.sgpa,
            "credits": self.credits,
            "passed_count": self.passed_count,
            "backlog_count": self.backlog_count,
        }


@dataclass(frozen=True)
class GradeSummary:
    """``cgpa`` is None ("N/A") when no credits were recorded."""

    cgpa: Optional[float] = None
    total_credits: float = 0
    backlog_count: int = 0
    passed_count: int = 0
    semesters: tuple[SemesterSummary, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "cgpa": self.cgpa,
            "total_credits": self.total_credits,
            "backlog_count": self.backlog_count,
            "passed_count": self.passed_count,
            "semesters": [s.to_dict() for s in self.semesters],
        }
