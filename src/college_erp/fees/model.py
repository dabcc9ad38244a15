from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import FeeStatus, PaymentMethod


@dataclass(frozen=True)
class Payment:
    amount: float
    date: datetime
    method: PaymentMethod
    transaction_id: str


@dataclass(frozen=True)
class FeeAssignment:
    """Domain entity: a fee structure assigned to a student, with its payment history.

    No stored paid/due/status: those are always
    recomputed from ``payments`` by the FeeAggregator.
    """

    fee_id: int
    student_id: int
    fee_structure_id: int
    total_amount: float
    academic_year: str
    semester: int
    due_date: Optional[date] = None
    payments: tuple[Payment, ...] = ()


@dataclass(frozen=True)
class FeeBreakdown:
    fee_id: int
    academic_year: str
    semester: int
    total_amount: float
    paid_amount: float
    due_amount: float
    status: FeeStatus
    progress: float
    due_date: Optional[date] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fee_id": self.fee_id,
            "academic_year": self.academic_year,
            "semester": self.semester,
            "total_amount": self.total_amount,
            "paid_amount": self.paid_amount,
            "due_amount": self.due_amount,
            "status": self.status.value,
            "progress": self.progress,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }


@dataclass(frozen=True)
class FeeSummary:
    total: float = 0
    paid: float = 0
    due: float = 0
    progress: float = 0
    overdue_count: int = 0
    paid_count: int = 0
    partial_count: int = 0
    pending_count: int = 0
    assignments: tuple[FeeBreakdown, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "paid": self.paid,
            "due": self.due,
            "progress": self.progress,
            "overdue_count": self.overdue_count,
            "paid_count": self.paid_count,
            "partial_count": self.partial_count,
            "pending_count": self.pending_count,
            "assignments": [a.to_dict() for a in self.assignments],
        }


@dataclass(frozen=True)
class MonthlyCollection:
    """Payments received in one calendar month ("YYYY-MM")."""

    month: str
    amount: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"month": self.month, "amount": self.amount, "count": self.count}
