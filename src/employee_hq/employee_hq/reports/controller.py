from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..attendance.model import AttendanceWithProfile
from ..attendance.service import record_to_dict
from ..auth.controller import profile_to_dict
from ..auth.decorators import manager_required
from ..container import Container
from .csv_export import write_attendance_csv
from .model import ManagerDashboard


def _with_profile_to_dict(item: AttendanceWithProfile) -> dict:
    return {**record_to_dict(item.record), "profile": profile_to_dict(item.profile)}


def _dashboard_to_dict(d: ManagerDashboard) -> dict:
    return {
        "date": d.today.strftime("%Y-%m-%d"),
        "total_employees": d.summary.total_employees,
        "present_today": d.summary.present_count,
        "absent_today": d.summary.absent_count,
        "absent_employees": [profile_to_dict(p) for p in d.summary.absent_employees],
        "late_arrivals": [_with_profile_to_dict(item) for item in d.late_arrivals],
        "weekly_trend": [
            {
                "date": p.date.strftime("%Y-%m-%d"),
                "present": p.present_count,
                "late": p.late_count,
                "absent": p.absent_count,
            }
            for p in d.weekly_trend
        ],
    }


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/manager/dashboard", methods=["GET"], endpoint="manager_dashboard")
    @manager_required
    def manager_dashboard():
        today = container.attendance_service.today()
        data = reports.manager_dashboard(current_role=g.session_ctx.role, today=today)
        return jsonify({"success": True, "dashboard": _dashboard_to_dict(data)}), 200

    @app.route("/api/manager/attendance", methods=["GET"], endpoint="all_attendance")
    @manager_required
    def all_attendance():
        rows = reports.list_attendance(
            current_role=g.session_ctx.role,
            search=request.args.get("search", ""),
            status=request.args.get("status", "all"),
        )
        return jsonify({"success": True, "records": [_with_profile_to_dict(r) for r in rows]}), 200

    @app.route("/api/manager/attendance.csv", methods=["GET"], endpoint="export_attendance_csv")
    @manager_required
    def export_attendance_csv():
        rows = reports.export_attendance(current_role=g.session_ctx.role)
        today = container.attendance_service.today()

        csv_bytes = write_attendance_csv(rows).encode("utf-8-sig")
        filename = f"attendance_{today.strftime('%Y-%m-%d')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
