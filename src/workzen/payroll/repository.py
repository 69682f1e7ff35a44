from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus, PayrunStatus
from .model import PayrollRecord, Payrun


class PayrollRepository(Protocol):
    def upsert(self, record: PayrollRecord) -> int:
        """Insert or overwrite the row for (emp_id, month, year). Returns payroll_id."""

        raise NotImplementedError

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, emp_id: int, *, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        emp_id: Optional[int] = None,
        payrun_id: Optional[int] = None,
        limit: int = 200,
        offset: int = 0,
    ) -> Sequence[PayrollRecord]:
        """Newest period first."""

        raise NotImplementedError

    def count(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        emp_id: Optional[int] = None,
        payrun_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update_status(self, payroll_id: int, status: PayrollStatus) -> bool:
        raise NotImplementedError

    def delete(self, payroll_id: int) -> bool:
        raise NotImplementedError


class PayrunRepository(Protocol):
    def create(self, *, month: int, year: int, generated_by: Optional[int]) -> int:
        raise NotImplementedError

    def get(self, payrun_id: int) -> Optional[Payrun]:
        raise NotImplementedError

    def get_for_period(self, *, month: int, year: int) -> Optional[Payrun]:
        raise NotImplementedError

    def list(self, *, year: Optional[int] = None) -> Sequence[Payrun]:
        """Newest period first."""

        raise NotImplementedError

    def update_status(self, payrun_id: int, status: PayrunStatus) -> bool:
        raise NotImplementedError
