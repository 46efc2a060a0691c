from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, error_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        result = sessions.login(data.get("email", ""), data.get("password", ""))
        return jsonify({"success": True, "user": result.user.to_dict(), "token": result.token})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        sessions.logout()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required(sessions)
    def me():
        user = sessions.get_current_user()
        if not user:
            return error_response("Please log in to continue", 401)
        return jsonify({"success": True, "user": user.to_dict()})

    @app.route("/api/admin/users", endpoint="admin_users")
    @admin_required(sessions)
    def admin_users():
        users = container.record_store.list_users()
        return jsonify({"success": True, "users": [u.to_dict() for u in users]})
