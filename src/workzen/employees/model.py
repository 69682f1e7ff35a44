from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record.

    `salary` is the flat monthly base pay for a full month. `bank_account_number`
    is a fallback for payslips when the profile has no account number.
    """

    emp_id: int
    user_id: int
    employee_code: str
    name: str
    email: str
    salary: Decimal
    department: Optional[str] = None
    designation: Optional[str] = None
    location: Optional[str] = None
    joining_date: Optional[date] = None
    pan: Optional[str] = None
    uan: Optional[str] = None
    bank_account_number: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class BankDetails:
    """Bank and identity details kept on the user's profile."""

    account_number: str = ""
    bank_name: str = ""
    ifsc_code: str = ""
    pan_number: str = ""
    uan_number: str = ""

    @property
    def is_complete(self) -> bool:
        return bool((self.account_number or "").strip() and (self.bank_name or "").strip())
