from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import current_emp_id, ok, requires
from ..core.enums import Permission
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _period_args() -> tuple:
        today = date.today()
        return request.args.get("year", today.year), request.args.get("month", today.month)

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @requires(Permission.RECORD_ATTENDANCE)
    def check_in():
        record = container.attendance_service.check_in(current_emp_id())
        return ok({"message": "Checked in", "attendance": record.to_dict()}, 201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @requires(Permission.RECORD_ATTENDANCE)
    def check_out():
        record = container.attendance_service.check_out(current_emp_id())
        return ok({"message": "Checked out", "attendance": record.to_dict()})

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_me")
    @requires(Permission.RECORD_ATTENDANCE)
    def my_attendance():
        year, month = _period_args()
        summary = container.attendance_service.monthly_summary(current_emp_id(), year=year, month=month)
        return ok(summary.to_dict())

    @app.route("/api/admin/attendance/<int:emp_id>", methods=["GET"], endpoint="admin_attendance")
    @requires(Permission.VIEW_ATTENDANCE)
    def employee_attendance(emp_id: int):
        year, month = _period_args()
        summary = container.attendance_service.monthly_summary(emp_id, year=year, month=month)
        return ok(summary.to_dict())
