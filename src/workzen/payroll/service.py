from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local
from ..common.money import ZERO, as_number, round_money
from ..common.validators import optional_int, positive_int, require_enum, require_month, require_year
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_PAGE_SIZE
from ..core.enums import PayrollStatus, PayrunStatus
from ..core.exceptions import NotFoundError, PreconditionFailedError, ValidationError
from ..employees.model import BankDetails, Employee
from ..employees.repository import EmployeeRepository, ProfileRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import EmployeeSnapshot, PayrollPage, PayrollRecord, Payrun, PayrunTotals
from .repository import PayrollRepository, PayrunRepository
from .worked_days import WorkedDaysCalculator, prorated_cost

logger = logging.getLogger(__name__)

STORED_STATUSES = (PayrollStatus.DONE, PayrollStatus.PAID)


def _or_na(value) -> str:
    text = str(value or "").strip()
    return text or "N/A"


def build_snapshot(employee: Employee, bank: Optional[BankDetails]) -> EmployeeSnapshot:
    """Freeze the employee and bank fields a payslip prints."""

    bank = bank or BankDetails()
    return EmployeeSnapshot(
        name=employee.name,
        employee_code=_or_na(employee.employee_code),
        email=_or_na(employee.email),
        department=_or_na(employee.department),
        designation=_or_na(employee.designation),
        location=_or_na(employee.location),
        date_of_joining=employee.joining_date.isoformat() if employee.joining_date else "N/A",
        pan=_or_na(bank.pan_number or employee.pan),
        uan=_or_na(bank.uan_number or employee.uan),
        bank_account=_or_na(bank.account_number or employee.bank_account_number),
        bank_name=_or_na(bank.bank_name),
    )


def pay_period_label(month: int, year: int) -> str:
    first, last = month_bounds(year, month)
    return f"01 {first.strftime('%b')} To {last.day:02d} {last.strftime('%b')}"


def summarize_payrun(payrun: Payrun, records: Sequence[PayrollRecord]) -> PayrunTotals:
    return PayrunTotals(
        payrun=payrun,
        employee_count=len(records),
        employer_cost=round_money(sum((r.employer_cost for r in records), ZERO)),
        gross=round_money(sum((r.gross for r in records), ZERO)),
        net=round_money(sum((r.net for r in records), ZERO)),
    )


class PayrollService:
    """Payroll engine: worked days, salary split, mark-done, payslips and statements."""

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        profiles: ProfileRepository,
        payrolls: PayrollRepository,
        payruns: PayrunRepository,
        worked_days: WorkedDaysCalculator,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._employees = employees
        self._profiles = profiles
        self._payrolls = payrolls
        self._payruns = payruns
        self._worked_days = worked_days
        self._calculator = calculator or StandardSalaryCalculator()

    # ---- helpers ----

    def _employee(self, emp_id: int) -> Employee:
        employee = self._employees.get_by_id(int(emp_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _bank(self, employee: Employee) -> Optional[BankDetails]:
        return self._profiles.get_bank_details(employee.user_id)

    def _require_bank(self, employee: Employee) -> BankDetails:
        bank = self._bank(employee)
        if not bank or not bank.is_complete:
            raise PreconditionFailedError(
                f"Bank account details are missing for {employee.name}. "
                "Add account number and bank name to the profile first."
            )
        return bank

    @staticmethod
    def _period(month, year, *, today: Optional[date] = None) -> tuple[int, int]:
        """Validated (month, year); missing parts default to the previous month, the last closed one."""

        today = today or now_local().date()
        default_month, default_year = today.month - 1, today.year
        if default_month == 0:
            default_month, default_year = 12, default_year - 1

        month = require_month(month) if month not in (None, "") else default_month
        year = require_year(year) if year not in (None, "") else default_year
        return month, year

    def compute(
        self,
        employee: Employee,
        *,
        month: int,
        year: int,
        bank: Optional[BankDetails] = None,
        status: PayrollStatus = PayrollStatus.DRAFT,
        payrun_id: Optional[int] = None,
    ) -> PayrollRecord:
        """Worked days, employer cost and salary split for one month. Nothing is written."""

        worked = self._worked_days.compute(employee.emp_id, year=year, month=month, monthly_salary=employee.salary)
        cost = prorated_cost(
            employee.salary,
            working_days=worked.working_days_in_month,
            worked_days=worked.total.days,
        )
        breakdown = self._calculator.split(cost)
        return PayrollRecord(
            emp_id=employee.emp_id,
            month=month,
            year=year,
            monthly_salary=round_money(employee.salary),
            worked_days=worked,
            breakdown=breakdown,
            employee_snapshot=build_snapshot(employee, bank),
            status=status,
            salary_structure=self._calculator.name,
            payrun_id=payrun_id,
        )

    def preview(self, emp_id: int, *, month=None, year=None, today: Optional[date] = None) -> PayrollRecord:
        month, year = self._period(month, year, today=today)
        employee = self._employee(emp_id)
        return self.compute(employee, month=month, year=year, bank=self._bank(employee))

    # ---- payruns ----

    def create_payrun(self, *, month, year, generated_by: Optional[int] = None) -> Payrun:
        month, year = require_month(month), require_year(year)
        if self._payruns.get_for_period(month=month, year=year):
            raise ValidationError(f"Payrun for {month:02d}/{year} already exists")

        payrun_id = self._payruns.create(month=month, year=year, generated_by=generated_by)
        logger.info("payrun %s created for %02d/%s", payrun_id, month, year)
        return self._require_payrun(payrun_id)

    def ensure_payrun(self, *, month: int, year: int, generated_by: Optional[int] = None) -> Payrun:
        """Existing payrun for the period, or a new draft one."""

        existing = self._payruns.get_for_period(month=month, year=year)
        if existing:
            return existing

        payrun_id = self._payruns.create(month=month, year=year, generated_by=generated_by)
        logger.info("payrun %s opened for %02d/%s", payrun_id, month, year)
        return self._require_payrun(payrun_id)

    def _require_payrun(self, payrun_id: int) -> Payrun:
        payrun = self._payruns.get(int(payrun_id))
        if not payrun:
            raise NotFoundError("Payrun not found")
        return payrun

    def payrun_totals(self, payrun: Payrun) -> PayrunTotals:
        records = self._payrolls.list(payrun_id=payrun.payrun_id, limit=DEFAULT_LIST_LIMIT)
        return summarize_payrun(payrun, records)

    def list_payruns(self, *, year=None) -> list[PayrunTotals]:
        year = require_year(year) if year not in (None, "") else None
        return [self.payrun_totals(p) for p in self._payruns.list(year=year)]

    def update_payrun_status(self, payrun_id: int, status) -> Payrun:
        status = require_enum(PayrunStatus, status, "payrun status")
        self._require_payrun(payrun_id)
        self._payruns.update_status(int(payrun_id), status)
        logger.info("payrun %s -> %s", payrun_id, status.value)
        return self._require_payrun(payrun_id)

    # ---- mark done ----

    def mark_done(
        self,
        emp_id: int,
        *,
        month=None,
        year=None,
        generated_by: Optional[int] = None,
        today: Optional[date] = None,
    ) -> PayrollRecord:
        month, year = self._period(month, year, today=today)
        employee = self._employee(emp_id)

        bank = self._require_bank(employee)

        payrun = self.ensure_payrun(month=month, year=year, generated_by=generated_by)
        record = self.compute(
            employee,
            month=month,
            year=year,
            bank=bank,
            status=PayrollStatus.DONE,
            payrun_id=payrun.payrun_id,
        )
        payroll_id = self._payrolls.upsert(record)

        logger.info(
            "payroll %s done for employee %s %02d/%s: employer_cost=%s net=%s",
            payroll_id,
            employee.emp_id,
            month,
            year,
            record.employer_cost,
            record.net,
        )
        return replace(record, payroll_id=payroll_id)

    # ---- readers ----

    def get_payslip_detail(self, emp_id: int, *, month=None, year=None, today: Optional[date] = None) -> dict:
        """Stored figures for a done payroll; otherwise a preview computed now."""

        month, year = self._period(month, year, today=today)

        stored = self._payrolls.get_for_period(int(emp_id), month=month, year=year)
        if stored and stored.status in STORED_STATUSES:
            record, source = stored, "stored"
        else:
            employee = self._employee(emp_id)
            record, source = self.compute(employee, month=month, year=year, bank=self._bank(employee)), "preview"

        first = date(year, month, 1)
        employee_info = record.employee_snapshot.to_dict()
        employee_info["emp_id"] = record.emp_id

        return {
            "employee": employee_info,
            "payrun": {
                "name": f"Payrun {first.strftime('%b %Y')}",
                "period": pay_period_label(month, year),
                "month_name": first.strftime("%b"),
                "year": year,
            },
            "salary_structure": record.salary_structure,
            "month": month,
            "year": year,
            "status": record.status.value,
            "monthly_salary": as_number(record.monthly_salary),
            "worked_days": record.worked_days.to_dict(),
            "salary_computation": record.breakdown.to_dict(),
            "source": source,
        }

    def get_salary_statement(self, emp_id: int, *, year=None, today: Optional[date] = None) -> dict:
        today = today or now_local().date()
        year = require_year(year) if year not in (None, "") else today.year
        employee = self._employee(emp_id)

        by_month = {r.month: r for r in self._payrolls.list(emp_id=employee.emp_id, year=year, limit=12)}

        months = []
        total_gross = total_deductions = total_net = ZERO
        for month in range(1, 13):
            record = by_month.get(month)
            gross = record.gross if record else ZERO
            deductions = record.total_deductions if record else ZERO
            net = record.net if record else ZERO
            months.append(
                {
                    "month": month,
                    "month_name": date(year, month, 1).strftime("%b"),
                    "has_data": record is not None,
                    "gross": as_number(gross),
                    "total_deductions": as_number(deductions),
                    "net": as_number(net),
                }
            )
            total_gross += gross
            total_deductions += deductions
            total_net += net

        return {
            "employee": {
                "emp_id": employee.emp_id,
                "name": employee.name,
                "employee_code": employee.employee_code,
                "designation": employee.designation,
                "department": employee.department,
            },
            "year": year,
            "months": months,
            "totals": {
                "gross": as_number(total_gross),
                "total_deductions": as_number(total_deductions),
                "net": as_number(total_net),
            },
        }

    def get_detailed_salary_statement(self, emp_id: int, *, year=None, today: Optional[date] = None) -> dict:
        """Component table: latest stored month as the monthly figure, the year's stored rows summed."""

        today = today or now_local().date()
        year = require_year(year) if year not in (None, "") else today.year
        employee = self._employee(emp_id)

        records = sorted(self._payrolls.list(emp_id=employee.emp_id, year=year, limit=12), key=lambda r: r.month)
        joined = employee.joining_date.isoformat() if employee.joining_date else "N/A"
        header = {
            "name": employee.name,
            "employee_code": employee.employee_code,
            "designation": employee.designation or "N/A",
            "date_of_joining": joined,
            "salary_effective_from": joined,
        }

        if not records:
            return {
                "employee": header,
                "year": year,
                "earnings": [],
                "deductions": [],
                "monthly_net": 0.0,
                "yearly_net": 0.0,
            }

        latest = records[-1]

        def _rows(lines) -> list[dict]:
            out = []
            for line in lines:
                yearly = sum((r.breakdown.amount_of(line.rule_name) for r in records), ZERO)
                out.append(
                    {
                        "component": line.rule_name,
                        "monthly_amount": as_number(line.amount),
                        "yearly_amount": as_number(yearly),
                    }
                )
            return out

        return {
            "employee": header,
            "year": year,
            "earnings": _rows(latest.breakdown.earnings),
            "deductions": _rows(latest.breakdown.deductions),
            "monthly_net": as_number(latest.net),
            "yearly_net": as_number(sum((r.net for r in records), ZERO)),
        }

    def get_current_payrun_data(self, *, today: Optional[date] = None) -> dict:
        """Every active employee for the payrun being processed, the previous month."""

        month, year = self._period(None, None, today=today)
        first = date(year, month, 1)

        stored = {r.emp_id: r for r in self._payrolls.list(month=month, year=year, limit=DEFAULT_LIST_LIMIT)}

        rows = []
        totals = {"employer_cost": ZERO, "basic_wage": ZERO, "gross_wage": ZERO, "net_wage": ZERO}
        for employee in sorted(self._employees.list_active(), key=lambda e: e.name):
            bank = self._bank(employee)
            existing = stored.get(employee.emp_id)
            done = existing is not None and existing.status in STORED_STATUSES
            record = existing if done else self.compute(employee, month=month, year=year, bank=bank)

            basic = record.breakdown.amount_of("Basic Salary")
            rows.append(
                {
                    "employee_id": employee.emp_id,
                    "employee_code": employee.employee_code,
                    "employee_name": employee.name,
                    "pay_period": f"[{first.strftime('%b')} {year}]",
                    "monthly_salary": as_number(employee.salary),
                    "working_days": record.worked_days.working_days_in_month,
                    "worked_days": record.worked_days.total.days,
                    "employer_cost": as_number(record.employer_cost),
                    "basic_wage": as_number(basic),
                    "gross_wage": as_number(record.gross),
                    "net_wage": as_number(record.net),
                    "status": "Done" if done else "Pending",
                    "payroll_id": existing.payroll_id if existing else None,
                    "has_bank_details": bool(bank and bank.is_complete),
                }
            )
            totals["employer_cost"] += record.employer_cost
            totals["basic_wage"] += basic
            totals["gross_wage"] += record.gross
            totals["net_wage"] += record.net

        return {
            "pay_period": f"Payrun {first.strftime('%b %Y')}",
            "month": month,
            "year": year,
            "employees": rows,
            "totals": {k: as_number(v) for k, v in totals.items()},
        }

    # ---- payroll records ----

    def list_payrolls(
        self, *, month=None, year=None, emp_id=None, payrun_id=None, page=None, limit=None
    ) -> PayrollPage:
        filters = {
            "month": require_month(month) if month not in (None, "") else None,
            "year": require_year(year) if year not in (None, "") else None,
            "emp_id": optional_int(emp_id),
            "payrun_id": optional_int(payrun_id),
        }
        page = positive_int(page, "page", default=1)
        limit = positive_int(limit, "limit", default=DEFAULT_PAGE_SIZE, maximum=DEFAULT_LIST_LIMIT)

        records = self._payrolls.list(**filters, limit=limit, offset=(page - 1) * limit)
        return PayrollPage(records=list(records), page=page, limit=limit, total=self._payrolls.count(**filters))

    def create_payroll(
        self,
        emp_id: int,
        *,
        month,
        year,
        status=PayrollStatus.DRAFT,
        payrun_id=None,
    ) -> PayrollRecord:
        """Compute and store a new row for one employee and month.

        The period must not have a row yet. A row created as done or paid needs
        bank details, the same as marking it done.
        """

        month, year = require_month(month), require_year(year)
        status = require_enum(PayrollStatus, status, "payroll status")
        employee = self._employee(emp_id)
        payrun_id = optional_int(payrun_id)
        if payrun_id is not None:
            self._require_payrun(payrun_id)
        if self._payrolls.get_for_period(employee.emp_id, month=month, year=year):
            raise ValidationError(f"Payroll for {employee.name} {month:02d}/{year} already exists")

        bank = self._require_bank(employee) if status in STORED_STATUSES else self._bank(employee)
        record = self.compute(employee, month=month, year=year, bank=bank, status=status, payrun_id=payrun_id)
        payroll_id = self._payrolls.upsert(record)
        logger.info("payroll %s created for employee %s %02d/%s", payroll_id, employee.emp_id, month, year)
        return self.get_payroll(payroll_id)

    def update_payroll(
        self, payroll_id: int, *, status=None, payrun_id=None, recompute: bool = False
    ) -> PayrollRecord:
        """Change status or payrun of a row; `recompute` refreshes its figures and snapshot from current data."""

        record = self.get_payroll(payroll_id)
        if status not in (None, ""):
            record = replace(record, status=require_enum(PayrollStatus, status, "payroll status"))
        if payrun_id not in (None, ""):
            record = replace(record, payrun_id=self._require_payrun(optional_int(payrun_id)).payrun_id)

        if recompute:
            employee = self._employee(record.emp_id)
            bank = self._require_bank(employee) if record.status in STORED_STATUSES else self._bank(employee)
            fresh = self.compute(employee, month=record.month, year=record.year, bank=bank)
            record = replace(
                record,
                monthly_salary=fresh.monthly_salary,
                worked_days=fresh.worked_days,
                breakdown=fresh.breakdown,
                employee_snapshot=fresh.employee_snapshot,
                salary_structure=fresh.salary_structure,
            )

        self._payrolls.upsert(record)
        logger.info("payroll %s updated", payroll_id)
        return self.get_payroll(payroll_id)

    def get_payroll(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll not found")
        return record

    def update_payroll_status(self, payroll_id: int, status) -> PayrollRecord:
        status = require_enum(PayrollStatus, status, "payroll status")
        self.get_payroll(payroll_id)
        self._payrolls.update_status(int(payroll_id), status)
        logger.info("payroll %s -> %s", payroll_id, status.value)
        return self.get_payroll(payroll_id)

    def delete_payroll(self, payroll_id: int) -> None:
        self.get_payroll(payroll_id)
        self._payrolls.delete(int(payroll_id))
        logger.info("payroll %s deleted", payroll_id)
