from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.money import percent, percent_of, round_money, to_decimal
from ...core.constants import DEFAULT_PROFESSIONAL_TAX, DEFAULT_SALARY_STRUCTURE
from ..model import SalaryBreakdown, SalaryLine
from .base import SalaryCalculator

BASIC_RATE = Decimal("50")
HRA_RATE = Decimal("50")  # of Basic Salary
STANDARD_ALLOWANCE_RATE = Decimal("16.67")
PERFORMANCE_BONUS_RATE = Decimal("8.33")
LTA_RATE = Decimal("8.33")
FIXED_ALLOWANCE_RATE = Decimal("11.67")
PF_RATE = Decimal("12")  # of Basic Salary, each side
FLAT_RATE = Decimal("100")


class StandardSalaryCalculator(SalaryCalculator):
    """The Regular Pay structure.

    Takes the unrounded employer cost. Every line is rounded half-up on its own
    from unrounded inputs. The table adds up to about 120% of employer cost and
    is kept as is because payslips depend on these figures.
    """

    name = DEFAULT_SALARY_STRUCTURE

    def __init__(self, *, professional_tax: Optional[Decimal] = None):
        self._professional_tax = round_money(
            DEFAULT_PROFESSIONAL_TAX if professional_tax is None else to_decimal(professional_tax)
        )

    def split(self, employer_cost: Decimal) -> SalaryBreakdown:
        cost = to_decimal(employer_cost)

        # HRA and PF derive from the unrounded Basic; each line rounds on its own
        basic = percent(cost, BASIC_RATE)
        earnings = [
            SalaryLine("Basic Salary", BASIC_RATE, round_money(basic)),
            SalaryLine("House Rent Allowance", HRA_RATE, percent_of(basic, HRA_RATE)),
            SalaryLine("Standard Allowance", STANDARD_ALLOWANCE_RATE, percent_of(cost, STANDARD_ALLOWANCE_RATE)),
            SalaryLine("Performance Bonus", PERFORMANCE_BONUS_RATE, percent_of(cost, PERFORMANCE_BONUS_RATE)),
            SalaryLine("Leave Travel Allowance", LTA_RATE, percent_of(cost, LTA_RATE)),
            SalaryLine("Fixed Allowance", FIXED_ALLOWANCE_RATE, percent_of(cost, FIXED_ALLOWANCE_RATE)),
        ]

        pf = percent_of(basic, PF_RATE)
        deductions = [
            SalaryLine("PF Employee", PF_RATE, pf),
            SalaryLine("PF Employer", PF_RATE, pf),
            SalaryLine("Professional Tax", FLAT_RATE, self._professional_tax),
        ]

        return SalaryBreakdown(employer_cost=round_money(cost), earnings=earnings, deductions=deductions)
