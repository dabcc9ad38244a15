from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.numbers import percentage, to_number
from ..core.enums import FeeStatus
from .model import FeeAssignment, FeeBreakdown, FeeSummary, MonthlyCollection

logger = logging.getLogger(__name__)

PROGRESS_DECIMALS = 2


class FeeAggregator:
    """Computes paid/due balances and a derived status for fee assignments."""

    def assess(self, assignment: FeeAssignment, *, now: Optional[datetime] = None) -> Optional[FeeBreakdown]:
        """Breakdown for one assignment; None when the assignment is malformed."""
        total = to_number(assignment.total_amount)
        if total is None or total < 0:
            logger.debug("Skipping fee assignment with invalid total: %r", assignment)
            return None

        paid = 0.0
        for p in assignment.payments:
            amount = to_number(getattr(p, "amount", None))
            if amount is None:
                logger.debug("Skipping payment without a usable amount on fee %s: %r", assignment.fee_id, p)
                continue
            paid += amount

        due = max(0.0, total - paid)
        status = self.status_for(
            paid=paid,
            due=due,
            due_date=assignment.due_date,
            now=now or now_local(),
        )

        return FeeBreakdown(
            fee_id=assignment.fee_id,
            academic_year=assignment.academic_year,
            semester=assignment.semester,
            total_amount=total,
            paid_amount=paid,
            due_amount=due,
            status=status,
            progress=percentage(paid, total, digits=PROGRESS_DECIMALS) if total > 0 else 100.0,
            due_date=assignment.due_date,
        )

    @staticmethod
    def status_for(*, paid: float, due: float, due_date: Optional[date], now: datetime) -> FeeStatus:
        if due <= 0:
            return FeeStatus.PAID
        if due_date is not None and _as_date(now) > _as_date(due_date):
            return FeeStatus.OVERDUE
        if paid > 0:
            return FeeStatus.PARTIAL
        return FeeStatus.PENDING

    def summarize(
        self,
        assignments: Iterable[FeeAssignment],
        *,
        now: Optional[datetime] = None,
        academic_year: Optional[str] = None,
        semester: Optional[int] = None,
    ) -> FeeSummary:
        now = now or now_local()
        rows: list[FeeBreakdown] = []
        for a in assignments:
            if academic_year is not None and a.academic_year != academic_year:
                continue
            if semester is not None and a.semester != semester:
                continue
            b = self.assess(a, now=now)
            if b is not None:
                rows.append(b)

        counts = {s: 0 for s in FeeStatus}
        for b in rows:
            counts[b.status] += 1

        total = sum(b.total_amount for b in rows)
        paid = sum(b.paid_amount for b in rows)
        return FeeSummary(
            total=total,
            paid=paid,
            due=sum(b.due_amount for b in rows),
            progress=percentage(paid, total, digits=PROGRESS_DECIMALS),
            overdue_count=counts[FeeStatus.OVERDUE],
            paid_count=counts[FeeStatus.PAID],
            partial_count=counts[FeeStatus.PARTIAL],
            pending_count=counts[FeeStatus.PENDING],
            assignments=tuple(rows),
        )

    def overdue(self, assignments: Iterable[FeeAssignment], *, now: Optional[datetime] = None) -> list[FeeBreakdown]:
        """Overdue breakdowns, earliest due date first."""
        now = now or now_local()
        rows = [b for b in (self.assess(a, now=now) for a in assignments) if b and b.status == FeeStatus.OVERDUE]
        rows.sort(key=lambda b: (_as_date(b.due_date), b.fee_id))
        return rows

    def monthly_collection(self, assignments: Iterable[FeeAssignment]) -> list[MonthlyCollection]:
        """Payments grouped by the month they were received, oldest month first."""
        by_month: dict[str, list[float]] = {}
        for a in assignments:
            for p in a.payments:
                amount = to_number(getattr(p, "amount", None))
                paid_on = getattr(p, "date", None)
                if amount is None or not isinstance(paid_on, date):
                    logger.debug("Skipping payment without amount or date on fee %s: %r", a.fee_id, p)
                    continue
                by_month.setdefault(paid_on.strftime("%Y-%m"), []).append(amount)

        return [
            MonthlyCollection(month=month, amount=sum(amounts), count=len(amounts))
            for month, amounts in sorted(by_month.items())
        ]


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value
