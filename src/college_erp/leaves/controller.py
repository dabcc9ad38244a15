from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.flask_auth import current_auth, token_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError


def _parse_date(v: str):
    try:
        return parse_iso_date((v or "").strip())
    except ValueError:
        raise ValidationError("Dates must be YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)
    service = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        auth = current_auth()
        payload = request.get_json(silent=True) or {}

        student_id = payload.get("student_id", auth.student_id)
        if student_id is None:
            raise ValidationError("student_id is required")
        try:
            student_id = int(student_id)
        except (TypeError, ValueError):
            raise ValidationError("student_id must be an integer")

        leave_id = service.apply(
            auth,
            student_id=student_id,
            leave_type=payload.get("leave_type", ""),
            from_date=_parse_date(payload.get("from_date", "")),
            to_date=_parse_date(payload.get("to_date", "")),
            reason=payload.get("reason", ""),
        )
        return jsonify({"success": True, "message": "Leave application submitted", "data": {"leave_id": leave_id}}), 201

    @app.route("/api/leaves/mine", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        leaves, summary = service.summarize_mine(current_auth())
        return jsonify(
            {
                "success": True,
                "data": [l.to_dict() for l in leaves],
                "summary": summary.to_dict(),
            }
        )

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @login_required
    def pending_leaves():
        leaves = service.list_pending(current_auth())
        return jsonify({"success": True, "count": len(leaves), "data": [l.to_dict() for l in leaves]})

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    def approve_leave(leave_id: int):
        payload = request.get_json(silent=True) or {}
        leave = service.approve(current_auth(), leave_id=leave_id, remarks=payload.get("remarks", ""))
        return jsonify({"success": True, "data": leave.to_dict()})

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    def reject_leave(leave_id: int):
        payload = request.get_json(silent=True) or {}
        leave = service.reject(current_auth(), leave_id=leave_id, remarks=payload.get("remarks", ""))
        return jsonify({"success": True, "data": leave.to_dict()})

    @app.route("/api/leaves/<int:leave_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(leave_id: int):
        leave = service.cancel(current_auth(), leave_id=leave_id)
        return jsonify({"success": True, "data": leave.to_dict()})
