from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ...core.constants import DEFAULT_PASS_PERCENTAGE, FAIL_GRADE, GRADE_POINTS, GRADE_THRESHOLDS
from .base import GradingPolicy


class StandardGradingPolicy(GradingPolicy):
    """Standard rule: letter grade by percentage floor, 10-point grade table.

    The lowest passing grade (D) starts at the pass percentage and anything
    below the pass mark is F, so a derived grade and a derived status never
    disagree.
    """

    def __init__(
        self,
        *,
        pass_percentage: float = DEFAULT_PASS_PERCENTAGE,
        thresholds: Optional[Sequence[tuple[str, float]]] = None,
        grade_points: Optional[Mapping[str, float]] = None,
    ):
        self._pass_percentage = float(pass_percentage)
        table = list(thresholds or GRADE_THRESHOLDS)
        if thresholds is None:
            # keep D pinned to the configured pass mark
            table = [(g, self._pass_percentage if g == "D" else floor) for g, floor in table]
        self._thresholds = tuple(sorted(table, key=lambda t: t[1], reverse=True))
        self._points = dict(grade_points or GRADE_POINTS)

    @property
    def pass_percentage(self) -> float:
        return self._pass_percentage

    def grade_for(self, percentage: float) -> str:
        if percentage < self._pass_percentage:
            return FAIL_GRADE
        for grade, floor in self._thresholds:
            if percentage >= floor:
                return grade
        return FAIL_GRADE

    def points_for(self, grade: str) -> float:
        return float(self._points.get(grade, 0))

    def knows_grade(self, grade: str) -> bool:
        return grade in self._points
