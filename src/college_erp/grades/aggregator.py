from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.numbers import clamp, round_half_up
from ..core.constants import GPA_DECIMALS, MAX_GRADE_POINT
from ..core.enums import MarkStatus
from .model import EvaluatedMark, GradeSummary, MarkRecord, SemesterSummary
from .policy.base import GradingPolicy
from .policy.standard_policy import StandardGradingPolicy

logger = logging.getLogger(__name__)


class GradeAggregator:
    """Computes SGPA/CGPA and pass/backlog counts from mark records.

    Every record is additive: a subject retaken after a failure contributes
    its credits once per record.
    """

    def __init__(self, *, policy: Optional[GradingPolicy] = None):
        self._policy = policy or StandardGradingPolicy()

    @property
    def policy(self) -> GradingPolicy:
        return self._policy

    def evaluate(self, record: MarkRecord) -> Optional[EvaluatedMark]:
        """Derive grade, status and grade points. None for a record that cannot be graded."""
        credits = record.credits or 0
        if credits < 0:
            logger.debug("Skipping mark with negative credits: %r", record)
            return None

        pct: Optional[float] = None
        if record.max_marks and record.max_marks > 0 and record.marks_obtained is not None:
            pct = clamp(record.marks_obtained / record.max_marks * 100, 0.0, 100.0)

        supplied = (record.grade or "").strip().upper() or None
        if supplied and self._policy.knows_grade(supplied):
            grade = supplied
        elif pct is not None:
            grade = self._policy.grade_for(pct)
        elif supplied:
            # unknown letter with no marks to fall back on: graded as 0 points
            grade = supplied
        else:
            logger.debug("Skipping mark without usable marks or grade: %r", record)
            return None

        if pct is not None:
            passed = self._policy.is_pass(pct)
        else:
            passed = self._policy.points_for(grade) > 0

        return EvaluatedMark(
            record=record,
            percentage=pct,
            grade=grade,
            status=MarkStatus.PASS if passed else MarkStatus.FAIL,
            grade_points=self._policy.points_for(grade),
        )

    def evaluate_all(self, records: Iterable[MarkRecord]) -> list[EvaluatedMark]:
        out: list[EvaluatedMark] = []
        for r in records:
            evaluated = self.evaluate(r)
            if evaluated is not None:
                out.append(evaluated)
        return out

    def summarize(self, records: Iterable[MarkRecord]) -> GradeSummary:
        evaluated = self.evaluate_all(records)

        by_semester: dict[int, list[EvaluatedMark]] = {}
        for e in evaluated:
            by_semester.setdefault(e.record.semester, []).append(e)

        semesters = tuple(self._semester_summary(sem, items) for sem, items in sorted(by_semester.items()))
        backlogs = sum(1 for e in evaluated if e.is_backlog)

        return GradeSummary(
            cgpa=_weighted_gpa(evaluated),
            total_credits=_total_credits(evaluated),
            backlog_count=backlogs,
            passed_count=len(evaluated) - backlogs,
            semesters=semesters,
        )

    def sgpa(self, records: Iterable[MarkRecord], semester: int) -> Optional[float]:
        """Credit-weighted GPA of one semester; None when it has no credits."""
        subset = [r for r in records if r.semester == semester]
        return self.summarize(subset).cgpa

    def backlogs(self, records: Iterable[MarkRecord]) -> list[EvaluatedMark]:
        return [e for e in self.evaluate_all(records) if e.is_backlog]

    def grade_distribution(self, records: Iterable[MarkRecord]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for e in self.evaluate_all(records):
            counts[e.grade] = counts.get(e.grade, 0) + 1
        return dict(sorted(counts.items()))

    @staticmethod
    def _semester_summary(semester: int, items: list[EvaluatedMark]) -> SemesterSummary:
        backlogs = sum(1 for e in items if e.is_backlog)
        return SemesterSummary(
            semester=semester,
            sgpa=_weighted_gpa(items),
            credits=_total_credits(items),
            passed_count=len(items) - backlogs,
            backlog_count=backlogs,
        )


def _total_credits(items: Iterable[EvaluatedMark]) -> float:
    return sum((e.record.credits or 0) for e in items)


def _weighted_gpa(items: list[EvaluatedMark]) -> Optional[float]:
    credits = _total_credits(items)
    if credits <= 0:
        return None
    weighted = sum(e.grade_points * (e.record.credits or 0) for e in items)
    return clamp(round_half_up(weighted / credits, GPA_DECIMALS), 0.0, float(MAX_GRADE_POINT))
