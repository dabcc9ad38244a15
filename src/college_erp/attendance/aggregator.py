from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..common.numbers import percentage
from ..core.constants import GOOD_STANDING_PERCENTAGE
from ..core.enums import AttendanceStatus
from .model import (
    AttendanceBreakdown,
    AttendanceRecord,
    AttendanceSummary,
    DailyAttendance,
    SubjectAttendanceSummary,
)

logger = logging.getLogger(__name__)

TREND_DECIMALS = 2

ATTENDED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


class AttendanceAggregator:
    """Turns attendance records into presence counts and a percentage.

    Late counts as attended. The aggregator reports the raw percentage and
    leaves any good-standing comparison to the caller (see ``is_good_standing``).
    Stateless: safe to share between concurrent requests.
    """

    def summarize(self, records: Iterable[AttendanceRecord]) -> AttendanceSummary:
        total = present = absent = late = leave = 0
        for r in records:
            total += 1
            status = getattr(r, "status", None)
            if status in ATTENDED_STATUSES:
                present += 1
            if status == AttendanceStatus.LATE:
                late += 1
            elif status == AttendanceStatus.ABSENT:
                absent += 1
            elif status == AttendanceStatus.LEAVE:
                leave += 1

        return AttendanceSummary(
            total=total,
            present=present,
            absent=absent,
            late=late,
            leave=leave,
            percentage=int(percentage(present, total)),
        )

    def summarize_by_subject(self, records: Iterable[AttendanceRecord]) -> AttendanceBreakdown:
        by_subject: dict[int, list[AttendanceRecord]] = {}
        all_records: list[AttendanceRecord] = []
        for r in records:
            by_subject.setdefault(r.subject_id, []).append(r)
            all_records.append(r)

        subjects = [
            SubjectAttendanceSummary(subject_id=subject_id, summary=self.summarize(items))
            for subject_id, items in sorted(by_subject.items())
        ]
        return AttendanceBreakdown(subjects=subjects, overall=self.summarize(all_records))

    @staticmethod
    def filter_records(
        records: Iterable[AttendanceRecord],
        *,
        subject_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        month: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Narrow records by subject and by an explicit date range or a "YYYY-MM" month.

        An explicit start/end range takes precedence over ``month``. Records
        without a date are dropped whenever a date bound applies.
        """
        if start is None and end is None and month:
            bounds = month_bounds(month)
            if bounds:
                start, end = bounds

        out: list[AttendanceRecord] = []
        for r in records:
            if subject_id is not None and r.subject_id != subject_id:
                continue
            if start is not None or end is not None:
                day = _record_date(r)
                if day is None:
                    logger.debug("Skipping attendance record without a date: %r", r)
                    continue
                if start is not None and day < start:
                    continue
                if end is not None and day > end:
                    continue
            out.append(r)
        return out

    def daily_trend(self, records: Iterable[AttendanceRecord]) -> list[DailyAttendance]:
        """Per-day attended/total counts in date order; percentages to 2 decimals."""
        by_day: dict[date, list[int]] = {}
        for r in records:
            day = _record_date(r)
            if day is None:
                continue
            counts = by_day.setdefault(day, [0, 0])
            counts[0] += 1
            if r.status in ATTENDED_STATUSES:
                counts[1] += 1

        return [
            DailyAttendance(
                date=day,
                total=total,
                present=present,
                percentage=percentage(present, total, digits=TREND_DECIMALS),
            )
            for day, (total, present) in sorted(by_day.items())
        ]


def is_good_standing(percentage_value: float, threshold: float = GOOD_STANDING_PERCENTAGE) -> bool:
    return percentage_value >= threshold


def _record_date(record: AttendanceRecord) -> Optional[date]:
    value = getattr(record, "date", None)
    if isinstance(value, datetime):
        return value.date()
    return value if isinstance(value, date) else None
