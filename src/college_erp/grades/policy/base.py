from __future__ import annotations

from abc import ABC, abstractmethod


class GradingPolicy(ABC):
    """Policy interface (Strategy Pattern for grading rules)."""

    @property
    @abstractmethod
    def pass_percentage(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def grade_for(self, percentage: float) -> str:
        raise NotImplementedError

    @abstractmethod
    def points_for(self, grade: str) -> float:
        """Grade point for a letter grade; 0 for grades the table does not know."""
        raise NotImplementedError

    @abstractmethod
    def knows_grade(self, grade: str) -> bool:
        raise NotImplementedError

    def is_pass(self, percentage: float) -> bool:
        return percentage >= self.pass_percentage
