from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import current_user_id, json_body, ok, requires
from ..common.validators import optional_int
from ..core.constants import DEFAULT_COMPANY_NAME
from ..core.enums import Permission
from ..core.exceptions import ValidationError
from ..container import Container
from .pdf import payslip_filename, render_payslip_pdf

PREFIX = "/api/admin/payroll"


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def _employee_arg(value) -> int:
        emp_id = optional_int(value)
        if emp_id is None:
            raise ValidationError("employee_id is required")
        return emp_id

    @app.route(f"{PREFIX}/dashboard", methods=["GET"], endpoint="payroll_dashboard")
    @requires(Permission.VIEW_PAYROLL)
    def dashboard():
        return ok(container.payroll_dashboard_service.get_dashboard())

    @app.route(f"{PREFIX}/salary-statement", methods=["GET"], endpoint="payroll_salary_statement")
    @requires(Permission.VIEW_PAYROLL)
    def salary_statement():
        data = service.get_salary_statement(
            _employee_arg(request.args.get("employee_id")),
            year=request.args.get("year"),
        )
        return ok(data)

    @app.route(f"{PREFIX}/detailed-salary-statement", methods=["GET"], endpoint="payroll_detailed_statement")
    @requires(Permission.VIEW_PAYROLL)
    def detailed_salary_statement():
        data = service.get_detailed_salary_statement(
            _employee_arg(request.args.get("employee_id")),
            year=request.args.get("year"),
        )
        return ok(data)

    @app.route(f"{PREFIX}/payruns/list", methods=["GET"], endpoint="payruns_list")
    @requires(Permission.VIEW_PAYROLL)
    def list_payruns():
        payruns = service.list_payruns(year=request.args.get("year"))
        return ok({"payruns": [p.to_dict() for p in payruns]})

    @app.route(f"{PREFIX}/payruns/current", methods=["GET"], endpoint="payruns_current")
    @requires(Permission.VIEW_PAYROLL)
    def current_payrun():
        return ok(service.get_current_payrun_data())

    @app.route(f"{PREFIX}/payruns", methods=["POST"], endpoint="payruns_create")
    @requires(Permission.MANAGE_PAYRUNS)
    def create_payrun():
        data = json_body()
        payrun = service.create_payrun(
            month=data.get("month"),
            year=data.get("year"),
            generated_by=current_user_id(),
        )
        return ok({"payrun": payrun.to_dict()}, 201)

    @app.route(f"{PREFIX}/payruns/<int:payrun_id>/status", methods=["PATCH"], endpoint="payruns_status")
    @requires(Permission.MANAGE_PAYRUNS)
    def update_payrun_status(payrun_id: int):
        payrun = service.update_payrun_status(payrun_id, json_body().get("status"))
        return ok({"payrun": payrun.to_dict()})

    @app.route(f"{PREFIX}/mark-done", methods=["POST"], endpoint="payroll_mark_done")
    @requires(Permission.MANAGE_PAYROLL)
    def mark_done():
        data = json_body()
        record = service.mark_done(
            _employee_arg(data.get("employee_id")),
            month=data.get("month"),
            year=data.get("year"),
            generated_by=current_user_id(),
        )
        return ok({"message": "Payroll marked as done", "payroll": record.to_dict()})

    @app.route(f"{PREFIX}/payslip/<int:emp_id>", methods=["GET"], endpoint="payroll_payslip")
    @requires(Permission.VIEW_PAYROLL)
    def payslip(emp_id: int):
        detail = service.get_payslip_detail(emp_id, month=request.args.get("month"), year=request.args.get("year"))
        return ok({"payslip": detail})

    @app.route(f"{PREFIX}/payslip/<int:emp_id>/pdf", methods=["GET"], endpoint="payroll_payslip_pdf")
    @requires(Permission.VIEW_PAYROLL)
    def payslip_pdf(emp_id: int):
        detail = service.get_payslip_detail(emp_id, month=request.args.get("month"), year=request.args.get("year"))
        pdf = render_payslip_pdf(detail, app.config.get("COMPANY_NAME", DEFAULT_COMPANY_NAME))
        return send_file(
            io.BytesIO(pdf),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=payslip_filename(detail),
        )

    @app.route(f"{PREFIX}/", methods=["GET"], endpoint="payroll_list", strict_slashes=False)
    @requires(Permission.VIEW_PAYROLL)
    def list_payrolls():
        result = service.list_payrolls(
            month=request.args.get("month"),
            year=request.args.get("year"),
            emp_id=request.args.get("employee_id"),
            payrun_id=request.args.get("payrun_id"),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return ok({"payrolls": [r.to_dict() for r in result.records], "pagination": result.pagination()})

    @app.route(f"{PREFIX}/", methods=["POST"], endpoint="payroll_create", strict_slashes=False)
    @requires(Permission.MANAGE_PAYROLL)
    def create_payroll():
        data = json_body()
        record = service.create_payroll(
            _employee_arg(data.get("employee_id")),
            month=data.get("month"),
            year=data.get("year"),
            status=data.get("status") or "draft",
            payrun_id=data.get("payrun_id"),
        )
        return ok({"payroll": record.to_dict()}, 201)

    @app.route(f"{PREFIX}/<int:payroll_id>", methods=["GET"], endpoint="payroll_get")
    @requires(Permission.VIEW_PAYROLL)
    def get_payroll(payroll_id: int):
        return ok({"payroll": service.get_payroll(payroll_id).to_dict()})

    @app.route(f"{PREFIX}/<int:payroll_id>", methods=["PUT"], endpoint="payroll_update")
    @requires(Permission.MANAGE_PAYROLL)
    def update_payroll(payroll_id: int):
        data = json_body()
        record = service.update_payroll(
            payroll_id,
            status=data.get("status"),
            payrun_id=data.get("payrun_id"),
            recompute=bool(data.get("recompute", False)),
        )
        return ok({"payroll": record.to_dict()})

    @app.route(f"{PREFIX}/<int:payroll_id>/status", methods=["PATCH"], endpoint="payroll_status")
    @requires(Permission.MANAGE_PAYROLL)
    def update_payroll_status(payroll_id: int):
        record = service.update_payroll_status(payroll_id, json_body().get("status"))
        return ok({"payroll": record.to_dict()})

    @app.route(f"{PREFIX}/<int:payroll_id>", methods=["DELETE"], endpoint="payroll_delete")
    @requires(Permission.MANAGE_PAYROLL)
    def delete_payroll(payroll_id: int):
        service.delete_payroll(payroll_id)
        return ok({"message": "Payroll deleted"})
