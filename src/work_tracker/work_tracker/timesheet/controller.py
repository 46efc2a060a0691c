from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key
from ..common.web import admin_required, login_required
from ..container import Container
from ..core.constants import DEFAULT_DAILY_HOURS
from .model import MonthlySettings


def _settings_json(settings: MonthlySettings) -> dict:
    data = settings.to_dict()
    data["required_hours"] = settings.required_hours
    data["is_default"] = settings.is_default
    return data


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service
    timesheet = container.timesheet_service
    admin = container.admin_service

    def current_user():
        return sessions.get_current_user()

    def today():
        return container.clock().date()

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required(sessions)
    def dashboard():
        summary = timesheet.dashboard(current_user().user_id)
        return jsonify(
            {
                "success": True,
                "date": summary.today.isoformat(),
                "month": summary.month,
                "is_checked_in": summary.is_checked_in,
                "today_entry": summary.today_entry.to_dict() if summary.today_entry else None,
                "today_hours": summary.today_hours,
                "month_total": summary.month_total,
                "required_hours": summary.required_hours,
                "remaining_hours": summary.remaining_hours,
                "percentage": summary.percentage,
                "remaining_work_days": summary.remaining_work_days,
                "daily_target_remaining": round(summary.daily_target_remaining, 2),
            }
        )

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @login_required(sessions)
    def checkin():
        data = request.get_json(silent=True) or {}
        entry = timesheet.check_in(current_user().user_id, data.get("check_in"))
        return jsonify({"success": True, "message": "Checked in successfully", "entry": entry.to_dict()})

    @app.route("/api/checkout", methods=["POST"], endpoint="checkout")
    @login_required(sessions)
    def checkout():
        data = request.get_json(silent=True) or {}
        entry = timesheet.check_out(current_user().user_id, data.get("check_out"))
        return jsonify({"success": True, "message": f"Total hours: {entry.total_hours:.2f}h", "entry": entry.to_dict()})

    @app.route("/api/timesheet", endpoint="timesheet")
    @login_required(sessions)
    def timesheet_view():
        user_id = current_user().user_id
        weekly = timesheet.weekly_summary(user_id)
        return jsonify(
            {
                "success": True,
                "entries": [e.to_dict() for e in timesheet.list_entries(user_id)],
                "current_week_total": weekly.current_week,
                "last_week_total": weekly.last_week,
            }
        )

    @app.route("/api/timesheet/<entry_id>", methods=["PUT"], endpoint="timesheet_edit")
    @login_required(sessions)
    def timesheet_edit(entry_id: str):
        data = request.get_json(silent=True) or {}
        entry = timesheet.edit_entry(
            current_user().user_id,
            entry_id,
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
        )
        return jsonify({"success": True, "message": "Time entry updated successfully", "entry": entry.to_dict()})

    @app.route("/api/admin/overview", endpoint="admin_overview")
    @admin_required(sessions)
    def admin_overview():
        month = request.args.get("month") or month_key(today())
        settings = admin.settings_for(month)
        rows = admin.monthly_overview(current_role=current_user().role, month=month)
        return jsonify(
            {
                "success": True,
                "settings": _settings_json(settings),
                "users": [
                    {
                        "user_id": r.user_id,
                        "name": r.name,
                        "email": r.email,
                        "month_hours": r.month_hours,
                        "required_hours": r.required_hours,
                        "percentage": round(r.percentage, 2),
                        "remaining_hours": r.remaining_hours,
                        "status": r.status.value,
                    }
                    for r in rows
                ],
            }
        )

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="admin_settings")
    @admin_required(sessions)
    def admin_settings():
        data = request.get_json(silent=True) or {}
        settings = admin.update_monthly_settings(
            current_role=current_user().role,
            month=data.get("month") or month_key(today()),
            working_days=data.get("working_days"),
            daily_hours=data.get("daily_hours", DEFAULT_DAILY_HOURS),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Working days: {settings.working_days}, Daily hours: {settings.daily_hours:g}",
                "settings": _settings_json(settings),
            }
        )
