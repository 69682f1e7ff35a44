from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BankDetails, Employee


class EmployeeRepository(Protocol):
    """Read access to employee records.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError


class ProfileRepository(Protocol):
    def get_bank_details(self, user_id: int) -> Optional[BankDetails]:
        raise NotImplementedError
