from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.decorators import login_required, manager_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.exceptions import ValidationError
from .model import TodayStatus
from .service import record_to_dict


def _today_to_dict(t: TodayStatus) -> dict:
    return {
        "status": t.status.value,
        "check_in_time": t.check_in_time.isoformat() if t.check_in_time else None,
        "check_out_time": t.check_out_time.isoformat() if t.check_out_time else None,
        "total_hours": t.total_hours,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        record = service.check_in(g.session_ctx.user_id)
        return jsonify({"success": True, "record": record_to_dict(record)}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = service.check_out(g.session_ctx.user_id)
        return jsonify(
            {
                "success": True,
                "record": record_to_dict(record),
                "message": f"You worked {record.total_hours:.2f} hours today",
            }
        ), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="today_status")
    @login_required
    def today_status():
        status = service.get_today_status(g.session_ctx.user_id)
        return jsonify({"success": True, "today": _today_to_dict(status)}), 200

    @app.route("/api/attendance/recent", methods=["GET"], endpoint="recent_attendance")
    @login_required
    def recent_attendance():
        try:
            limit = int(request.args.get("limit", DEFAULT_RECENT_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer")
        rows = service.get_recent(g.session_ctx.user_id, limit=max(limit, 1))
        return jsonify({"success": True, "records": [record_to_dict(r) for r in rows]}), 200

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        rows = service.get_history(g.session_ctx.user_id)
        return jsonify({"success": True, "records": [record_to_dict(r) for r in rows]}), 200

    @app.route("/api/attendance/summary/month", methods=["GET"], endpoint="monthly_summary")
    @login_required
    def monthly_summary():
        s = container.report_service.monthly_summary(g.session_ctx.user_id, today=service.today())
        return jsonify(
            {
                "success": True,
                "summary": {
                    "present": s.present,
                    "absent": s.absent,
                    "late": s.late,
                    "half_day": s.half_day,
                    "total_hours": s.total_hours,
                },
            }
        ), 200

    @app.route("/api/attendance/absences", methods=["POST"], endpoint="mark_absent")
    @manager_required
    def mark_absent():
        data = request.get_json(silent=True) or {}
        user_id = (data.get("user_id") or "").strip()
        date_s = (data.get("date") or "").strip()
        if not user_id or not date_s:
            raise ValidationError("user_id and date are required")
        try:
            work_date = parse_iso_date(date_s)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

        record = service.mark_absent(
            current_role=g.session_ctx.role,
            user_id=user_id,
            work_date=work_date,
            notes=data.get("notes"),
        )
        return jsonify({"success": True, "record": record_to_dict(record)}), 201
