from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.aggregator import is_good_standing
from ..auth.flask_auth import current_auth, token_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def _optional_int(name: str):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def _optional_date(name: str):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)

    @app.route("/api/students/<int:student_id>/summary", methods=["GET"], endpoint="student_summary")
    @login_required
    def student_summary(student_id: int):
        summary = container.summary_facade.build_student_summary(current_auth(), student_id)
        data = summary.to_dict()
        data["attendance"]["good_standing"] = is_good_standing(
            summary.attendance.percentage, container.good_standing_percentage
        )
        return jsonify({"success": True, "data": data})

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    @login_required
    def student_attendance(student_id: int):
        current_auth().require_view(student_id)
        agg = container.attendance_aggregator

        records = container.store.list_attendance(student_id)
        records = agg.filter_records(
            records,
            subject_id=_optional_int("subject_id"),
            start=_optional_date("start"),
            end=_optional_date("end"),
            month=request.args.get("month"),
        )
        breakdown = agg.summarize_by_subject(records)
        return jsonify(
            {
                "success": True,
                "data": breakdown.to_dict(),
                "summary": breakdown.overall.to_dict(),
                "daily_trend": [d.to_dict() for d in agg.daily_trend(records)],
            }
        )

    @app.route("/api/students/<int:student_id>/grades", methods=["GET"], endpoint="student_grades")
    @login_required
    def student_grades(student_id: int):
        current_auth().require_view(student_id)
        agg = container.grade_aggregator

        records = container.store.list_marks(student_id, semester=_optional_int("semester"))
        return jsonify(
            {
                "success": True,
                "data": agg.summarize(records).to_dict(),
                "distribution": agg.grade_distribution(records),
            }
        )

    @app.route("/api/students/<int:student_id>/fees", methods=["GET"], endpoint="student_fees")
    @login_required
    def student_fees(student_id: int):
        current_auth().require_view(student_id)
        agg = container.fee_aggregator

        academic_year = (request.args.get("academic_year") or "").strip() or None
        semester = _optional_int("semester")
        records = [
            r
            for r in container.store.list_fees(student_id, academic_year=academic_year)
            if semester is None or r.semester == semester
        ]
        return jsonify(
            {
                "success": True,
                "data": agg.summarize(records).to_dict(),
                "overdue": [b.to_dict() for b in agg.overdue(records)],
                "monthly_collection": [m.to_dict() for m in agg.monthly_collection(records)],
            }
        )

    @app.route("/api/parents/wards/summary", methods=["GET"], endpoint="ward_summaries")
    @login_required
    def ward_summaries():
        summaries = container.summary_facade.build_ward_summaries(current_auth())
        return jsonify({"success": True, "data": [s.to_dict() for s in summaries]})
