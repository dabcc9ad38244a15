from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for (student, subject, date, lecture)."""

    student_id: int
    subject_id: int
    date: date
    status: AttendanceStatus
    lecture_number: int = 1
    remarks: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    leave: int = 0
    percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "leave": self.leave,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class SubjectAttendanceSummary:
    """Read-model: attendance summary for one subject."""

    subject_id: int
    summary: AttendanceSummary

    def to_dict(self) -> dict[str, Any]:
        return {"subject_id": self.subject_id, **self.summary.to_dict()}


@dataclass(frozen=True)
class AttendanceBreakdown:
    subjects: list[SubjectAttendanceSummary]
    overall: AttendanceSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "subjects": [s.to_dict() for s in self.subjects],
            "overall": self.overall.to_dict(),
        }


@dataclass(frozen=True)
class DailyAttendance:
    """One day of an attendance trend."""

    date: date
    total: int
    present: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "total": self.total,
            "present": self.present,
            "percentage": self.percentage,
        }


def attendance_from_row(row: Mapping[str, Any]) -> AttendanceRecord:
    """Normalize a raw store row (snake_case, legacy camelCase or the ``att_date`` column).

    Raises ValueError for a status outside AttendanceStatus.
    """
    return AttendanceRecord(
        student_id=int(row.get("student_id", row.get("studentId"))),
        subject_id=int(row.get("subject_id", row.get("subjectId"))),
        date=row.get("date", row.get("att_date")),
        status=AttendanceStatus(row["status"]),
        lecture_number=int(row.get("lecture_number") or row.get("lectureNumber") or 1),
        remarks=row.get("remarks"),
    )
