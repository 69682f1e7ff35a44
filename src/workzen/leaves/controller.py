from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_emp_id, current_user_id, json_body, ok, requires
from ..core.enums import Permission
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(value, field_name: str):
        try:
            return parse_iso_date(str(value or ""))
        except ValueError:
            raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_apply")
    @requires(Permission.REQUEST_LEAVE)
    def apply_leave():
        data = json_body()
        leave = container.leave_service.apply(
            emp_id=current_emp_id(),
            leave_type=data.get("leave_type"),
            start_date=_parse_date(data.get("start_date"), "start_date"),
            end_date=_parse_date(data.get("end_date"), "end_date"),
            reason=str(data.get("reason") or ""),
        )
        return ok({"leave": leave.to_dict()}, 201)

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_mine")
    @requires(Permission.REQUEST_LEAVE)
    def my_leaves():
        leaves = container.leave_service.list_mine(emp_id=current_emp_id())
        return ok({"leaves": [lv.to_dict() for lv in leaves]})

    @app.route("/api/admin/timeoff", methods=["GET"], endpoint="timeoff_pending")
    @requires(Permission.REVIEW_LEAVE)
    def pending_leaves():
        leaves = container.leave_service.list_pending()
        return ok({"leaves": [lv.to_dict() for lv in leaves]})

    @app.route("/api/admin/timeoff/<int:leave_id>/approve", methods=["POST"], endpoint="timeoff_approve")
    @requires(Permission.REVIEW_LEAVE)
    def approve_leave(leave_id: int):
        leave = container.leave_service.approve(leave_id=leave_id, decided_by=current_user_id())
        return ok({"leave": leave.to_dict()})

    @app.route("/api/admin/timeoff/<int:leave_id>/reject", methods=["POST"], endpoint="timeoff_reject")
    @requires(Permission.REVIEW_LEAVE)
    def reject_leave(leave_id: int):
        data = json_body()
        leave = container.leave_service.reject(
            leave_id=leave_id,
            decided_by=current_user_id(),
            reason=str(data.get("reason") or ""),
        )
        return ok({"leave": leave.to_dict()})
