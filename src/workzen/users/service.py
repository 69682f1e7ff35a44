from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..employees.repository import EmployeeRepository
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role
    emp_id: Optional[int]
    employee_code: Optional[str]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "emp_id": self.emp_id,
            "employee_code": self.employee_code,
        }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def authenticate(self, login: str, password: str) -> SessionUser:
        login = require_non_empty(login, "Login")
        user = self._users.get_by_login(login)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid login or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            logger.info("failed login for %s", login)
            raise AuthenticationError("Invalid login or password")

        employee = self._employees.get_by_user_id(user.user_id)
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            role=user.role,
            emp_id=employee.emp_id if employee else None,
            employee_code=employee.employee_code if employee else None,
        )
