from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import json_body, login_required, ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(
            str(data.get("login") or data.get("email") or ""),
            str(data.get("password") or ""),
        )

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["emp_id"] = s_user.emp_id
        session["employee_code"] = s_user.employee_code

        return ok({"user": s_user.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return ok(
            {
                "user": {
                    "user_id": session["user_id"],
                    "name": session.get("name"),
                    "role": session.get("role"),
                    "emp_id": session.get("emp_id"),
                    "employee_code": session.get("employee_code"),
                }
            }
        )

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"message": "OK"})
