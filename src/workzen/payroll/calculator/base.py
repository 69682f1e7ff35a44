from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import SalaryBreakdown


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for salary structures)."""

    name: str = ""

    @abstractmethod
    def split(self, employer_cost: Decimal) -> SalaryBreakdown:
        """Split an unrounded employer cost into rounded earning and deduction lines."""

        raise NotImplementedError
