from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, as_number, round_money, to_decimal
from ..core.constants import DEFAULT_SALARY_STRUCTURE
from ..core.enums import PayrollStatus, PayrunStatus


@dataclass(frozen=True)
class WorkedDaysLine:
    days: int
    amount: Decimal
    note: str = ""

    def to_dict(self) -> dict:
        out = {"days": self.days, "amount": as_number(self.amount)}
        if self.note:
            out["note"] = self.note
        return out

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "WorkedDaysLine":
        data = data or {}
        return cls(
            days=int(data.get("days") or 0),
            amount=round_money(data.get("amount")),
            note=str(data.get("note") or ""),
        )


@dataclass(frozen=True)
class WorkedDays:
    """Attendance plus paid leave for one employee and month, with the money each part earns."""

    working_days_in_month: int
    attendance: WorkedDaysLine
    paid_time_off: WorkedDaysLine
    total: WorkedDaysLine

    def to_dict(self) -> dict:
        return {
            "working_days_in_month": self.working_days_in_month,
            "attendance": self.attendance.to_dict(),
            "paid_time_off": self.paid_time_off.to_dict(),
            "total": self.total.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "WorkedDays":
        data = data or {}
        return cls(
            working_days_in_month=int(data.get("working_days_in_month") or 0),
            attendance=WorkedDaysLine.from_dict(data.get("attendance")),
            paid_time_off=WorkedDaysLine.from_dict(data.get("paid_time_off")),
            total=WorkedDaysLine.from_dict(data.get("total")),
        )


@dataclass(frozen=True)
class SalaryLine:
    rule_name: str
    rate: Decimal
    amount: Decimal

    def to_dict(self) -> dict:
        return {"rule_name": self.rule_name, "rate": float(self.rate), "amount": as_number(self.amount)}

    @classmethod
    def from_dict(cls, data: dict) -> "SalaryLine":
        return cls(
            rule_name=str(data.get("rule_name") or ""),
            rate=to_decimal(data.get("rate")),
            amount=round_money(data.get("amount")),
        )


@dataclass(frozen=True)
class SalaryBreakdown:
    employer_cost: Decimal
    earnings: list[SalaryLine]
    deductions: list[SalaryLine]

    @property
    def gross(self) -> Decimal:
        return round_money(sum((line.amount for line in self.earnings), ZERO))

    @property
    def total_deductions(self) -> Decimal:
        return round_money(sum((line.amount for line in self.deductions), ZERO))

    @property
    def net(self) -> Decimal:
        return round_money(self.gross - self.total_deductions)

    def amount_of(self, rule_name: str) -> Decimal:
        for line in self.earnings + self.deductions:
            if line.rule_name == rule_name:
                return line.amount
        return ZERO

    def to_dict(self) -> dict:
        return {
            "earnings": [line.to_dict() for line in self.earnings],
            "gross": as_number(self.gross),
            "deductions": [line.to_dict() for line in self.deductions],
            "total_deductions": as_number(self.total_deductions),
            "net_amount": as_number(self.net),
        }


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Employee and bank fields frozen at the time payroll was marked done."""

    name: str
    employee_code: str
    email: str
    department: str = "N/A"
    designation: str = "N/A"
    location: str = "N/A"
    date_of_joining: str = "N/A"
    pan: str = "N/A"
    uan: str = "N/A"
    bank_account: str = "N/A"
    bank_name: str = "N/A"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "employee_code": self.employee_code,
            "email": self.email,
            "department": self.department,
            "designation": self.designation,
            "location": self.location,
            "date_of_joining": self.date_of_joining,
            "pan": self.pan,
            "uan": self.uan,
            "bank_account": self.bank_account,
            "bank_name": self.bank_name,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EmployeeSnapshot":
        data = data or {}

        def _get(key: str) -> str:
            return str(data.get(key) or "N/A")

        return cls(
            name=_get("name"),
            employee_code=_get("employee_code"),
            email=_get("email"),
            department=_get("department"),
            designation=_get("designation"),
            location=_get("location"),
            date_of_joining=_get("date_of_joining"),
            pan=_get("pan"),
            uan=_get("uan"),
            bank_account=_get("bank_account"),
            bank_name=_get("bank_name"),
        )


@dataclass(frozen=True)
class PayrollRecord:
    """The computed artifact, one per (emp_id, month, year)."""

    emp_id: int
    month: int
    year: int
    monthly_salary: Decimal
    worked_days: WorkedDays
    breakdown: SalaryBreakdown
    employee_snapshot: EmployeeSnapshot
    status: PayrollStatus = PayrollStatus.DRAFT
    salary_structure: str = DEFAULT_SALARY_STRUCTURE
    payrun_id: Optional[int] = None
    payroll_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def employer_cost(self) -> Decimal:
        return self.breakdown.employer_cost

    @property
    def gross(self) -> Decimal:
        return self.breakdown.gross

    @property
    def total_deductions(self) -> Decimal:
        return self.breakdown.total_deductions

    @property
    def net(self) -> Decimal:
        return self.breakdown.net

    def to_dict(self) -> dict:
        return {
            "payroll_id": self.payroll_id,
            "emp_id": self.emp_id,
            "month": self.month,
            "year": self.year,
            "payrun_id": self.payrun_id,
            "status": self.status.value,
            "salary_structure": self.salary_structure,
            "monthly_salary": as_number(self.monthly_salary),
            "employer_cost": as_number(self.employer_cost),
            "gross_amount": as_number(self.gross),
            "total_deductions": as_number(self.total_deductions),
            "net_amount": as_number(self.net),
            "worked_days": self.worked_days.to_dict(),
            "earnings": [line.to_dict() for line in self.breakdown.earnings],
            "deductions": [line.to_dict() for line in self.breakdown.deductions],
            "employee_snapshot": self.employee_snapshot.to_dict(),
        }


@dataclass(frozen=True)
class Payrun:
    payrun_id: int
    month: int
    year: int
    status: PayrunStatus = PayrunStatus.DRAFT
    generated_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return f"Payrun {date(self.year, self.month, 1).strftime('%b %Y')}"

    def to_dict(self) -> dict:
        return {
            "payrun_id": self.payrun_id,
            "name": self.name,
            "month": self.month,
            "year": self.year,
            "status": self.status.value,
            "generated_by": self.generated_by,
            "created_at": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
        }


@dataclass(frozen=True)
class PayrunTotals:
    """Payrun row joined with the payroll rows that reference it."""

    payrun: Payrun
    employee_count: int = 0
    employer_cost: Decimal = field(default=ZERO)
    gross: Decimal = field(default=ZERO)
    net: Decimal = field(default=ZERO)

    def to_dict(self) -> dict:
        out = self.payrun.to_dict()
        out.update(
            {
                "employee_count": self.employee_count,
                "employer_cost": as_number(self.employer_cost),
                "gross": as_number(self.gross),
                "net": as_number(self.net),
            }
        )
        return out


@dataclass(frozen=True)
class PayrollPage:
    records: list[PayrollRecord]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0

    def pagination(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}
