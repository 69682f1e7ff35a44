from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local, trailing_months
from ..common.money import ZERO, as_number, round_money
from ..core.constants import DEFAULT_DASHBOARD_MONTHS, DEFAULT_LIST_LIMIT
from ..employees.repository import EmployeeRepository, ProfileRepository
from .repository import PayrollRepository, PayrunRepository
from .service import summarize_payrun


class PayrollDashboardService:
    """Trailing-window payroll figures for the admin dashboard.

    Payruns come from the payrun table only. Every done payroll references one
    because mark-done opens the payrun first.
    """

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        profiles: ProfileRepository,
        payrolls: PayrollRepository,
        payruns: PayrunRepository,
        months: int = DEFAULT_DASHBOARD_MONTHS,
    ):
        self._employees = employees
        self._profiles = profiles
        self._payrolls = payrolls
        self._payruns = payruns
        self._months = max(int(months), 1)

    def get_dashboard(self, *, today: Optional[date] = None) -> dict:
        today = today or now_local().date()
        window = trailing_months(today.year, today.month, self._months)

        monthly_stats = []
        for year, month in window:
            records = self._payrolls.list(month=month, year=year, limit=DEFAULT_LIST_LIMIT)
            monthly_stats.append(
                {
                    "month": month,
                    "year": year,
                    "label": date(year, month, 1).strftime("%b %Y"),
                    "employer_cost": as_number(round_money(sum((r.employer_cost for r in records), ZERO))),
                    "employee_count": len(records),
                }
            )

        in_window = set(window)
        payruns = []
        for payrun in self._payruns.list():
            if (payrun.year, payrun.month) not in in_window:
                continue
            records = self._payrolls.list(payrun_id=payrun.payrun_id, limit=DEFAULT_LIST_LIMIT)
            payruns.append(summarize_payrun(payrun, records).to_dict())
        payruns.sort(key=lambda p: (p["year"], p["month"]), reverse=True)

        employees = list(self._employees.list_active())
        without_bank = []
        for employee in employees:
            bank = self._profiles.get_bank_details(employee.user_id)
            if not bank or not bank.is_complete:
                without_bank.append(
                    {
                        "employee_id": employee.emp_id,
                        "employee_code": employee.employee_code,
                        "name": employee.name,
                        "email": employee.email,
                    }
                )

        return {
            "monthly_stats": monthly_stats,
            "payruns": payruns,
            "warnings": {"employees_without_bank": without_bank},
            "total_employees": len(employees),
        }
