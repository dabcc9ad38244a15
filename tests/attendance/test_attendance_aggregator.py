from __future__ import annotations

from datetime import date

from college_erp.attendance.aggregator import AttendanceAggregator, is_good_standing
from college_erp.attendance.model import AttendanceRecord, attendance_from_row
from college_erp.core.enums import AttendanceStatus

P, A, L, LV = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.LEAVE


def _records(statuses, *, subject_id=1, start_day=1):
    return [
        AttendanceRecord(student_id=1, subject_id=subject_id, date=date(2024, 9, start_day + i), status=s)
        for i, s in enumerate(statuses)
    ]


def test_eighteen_present_two_absent_is_ninety_percent():
    summary = AttendanceAggregator().summarize(_records([P] * 18 + [A] * 2))

    assert summary.to_dict() == {
        "total": 20,
        "present": 18,
        "absent": 2,
        "late": 0,
        "leave": 0,
        "percentage": 90,
    }


def test_empty_input_yields_zero_summary():
    summary = AttendanceAggregator().summarize([])

    assert (summary.total, summary.present, summary.absent, summary.late, summary.percentage) == (0, 0, 0, 0, 0)


def test_late_counts_as_attended():
    summary = AttendanceAggregator().summarize(_records([P, L, A, L]))

    assert summary.present == 3
    assert summary.late == 2
    assert summary.absent == 1
    assert summary.percentage == 75


def test_leave_counts_toward_total_only():
    summary = AttendanceAggregator().summarize(_records([P, LV]))

    assert summary.total == 2
    assert summary.present == 1
    assert summary.leave == 1
    assert summary.percentage == 50


def test_percentage_rounds_half_up():
    # 1 of 8 = 12.5%
    assert AttendanceAggregator().summarize(_records([P] + [A] * 7)).percentage == 13


def test_counts_stay_within_bounds():
    agg = AttendanceAggregator()
    for mix in ([P] * 3, [A] * 5, [L, LV, A]):
        s = agg.summarize(_records(mix))
        assert s.present <= s.total
        assert 0 <= s.percentage <= 100


def test_summarize_is_idempotent_and_accepts_generators():
    records = _records([P, A, L])
    agg = AttendanceAggregator()

    assert agg.summarize(records) == agg.summarize(records)
    assert agg.summarize(r for r in records).total == 3


def test_summarize_by_subject_groups_and_keeps_overall():
    records = _records([P, A], subject_id=2) + _records([P, P], subject_id=1, start_day=10)

    breakdown = AttendanceAggregator().summarize_by_subject(records)

    assert [s.subject_id for s in breakdown.subjects] == [1, 2]
    assert breakdown.subjects[0].summary.percentage == 100
    assert breakdown.subjects[1].summary.percentage == 50
    assert breakdown.overall.total == 4
    assert breakdown.overall.percentage == 75
    assert breakdown.to_dict()["subjects"][1]["subject_id"] == 2


def test_filter_by_month():
    records = [
        AttendanceRecord(1, 1, date(2024, 8, 31), P),
        AttendanceRecord(1, 1, date(2024, 9, 1), A),
        AttendanceRecord(1, 1, date(2024, 9, 30), P),
        AttendanceRecord(1, 1, date(2024, 10, 1), P),
    ]

    filtered = AttendanceAggregator.filter_records(records, month="2024-09")

    assert [r.date.day for r in filtered] == [1, 30]


def test_explicit_range_wins_over_month():
    records = [
        AttendanceRecord(1, 1, date(2024, 8, 15), P),
        AttendanceRecord(1, 1, date(2024, 9, 15), P),
    ]

    filtered = AttendanceAggregator.filter_records(
        records, month="2024-09", start=date(2024, 8, 1), end=date(2024, 8, 31)
    )

    assert [r.date for r in filtered] == [date(2024, 8, 15)]


def test_invalid_month_is_ignored():
    assert len(AttendanceAggregator.filter_records(_records([P] * 3), month="September")) == 3


def test_filter_by_subject():
    records = _records([P], subject_id=1) + _records([P], subject_id=2)

    filtered = AttendanceAggregator.filter_records(records, subject_id=2)

    assert [r.subject_id for r in filtered] == [2]


def test_good_standing_threshold_is_applied_by_caller():
    assert is_good_standing(75)
    assert not is_good_standing(74)
    assert is_good_standing(60, threshold=60)


def test_attendance_from_row_accepts_camel_case_keys():
    rec = attendance_from_row({"studentId": "7", "subjectId": 3, "date": date(2024, 9, 1), "status": "Late"})

    assert rec.student_id == 7
    assert rec.status == L
    assert rec.lecture_number == 1


def test_records_without_a_date_are_dropped_by_date_filters():
    records = [AttendanceRecord(1, 1, None, P), AttendanceRecord(1, 1, date(2024, 9, 5), P)]

    assert [r.date for r in AttendanceAggregator.filter_records(records, month="2024-09")] == [date(2024, 9, 5)]
    assert len(AttendanceAggregator.filter_records(records, end=date(2024, 9, 30))) == 1
    assert len(AttendanceAggregator.filter_records(records, subject_id=1)) == 2


def test_daily_trend_orders_days_and_counts_late_as_attended():
    records = [
        AttendanceRecord(1, 1, date(2024, 9, 3), A),
        AttendanceRecord(1, 1, date(2024, 9, 2), P),
        AttendanceRecord(1, 2, date(2024, 9, 2), L),
        AttendanceRecord(1, 3, date(2024, 9, 2), A),
        AttendanceRecord(1, 1, None, P),
    ]

    trend = AttendanceAggregator().daily_trend(records)

    assert [d.to_dict() for d in trend] == [
        {"date": "2024-09-02", "total": 3, "present": 2, "percentage": 66.67},
        {"date": "2024-09-03", "total": 1, "present": 0, "percentage": 0.0},
    ]


def test_daily_trend_of_nothing_is_empty():
    assert AttendanceAggregator().daily_trend([]) == []


def test_store_row_with_att_date_column():
    rec = attendance_from_row({"student_id": 1, "subject_id": 2, "att_date": date(2024, 9, 4), "status": "Absent"})

    assert rec.date == date(2024, 9, 4)
    assert rec.status == A
