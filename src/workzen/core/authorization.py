"""Role based access control.

One table maps each role to what it may do; `authorize` is the only check
routes and services call.
"""
from __future__ import annotations

from typing import Union

from .enums import Permission, Role
from .exceptions import AuthorizationError


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.PAYROLL_OFFICER: frozenset(
        {
            Permission.VIEW_PAYROLL,
            Permission.MANAGE_PAYROLL,
            Permission.MANAGE_PAYRUNS,
            Permission.VIEW_ATTENDANCE,
        }
    ),
    Role.HR: frozenset(
        {
            Permission.REVIEW_LEAVE,
            Permission.REQUEST_LEAVE,
            Permission.RECORD_ATTENDANCE,
            Permission.VIEW_ATTENDANCE,
        }
    ),
    Role.EMPLOYEE: frozenset(
        {
            Permission.REQUEST_LEAVE,
            Permission.RECORD_ATTENDANCE,
        }
    ),
}


def coerce_role(value: Union[Role, str, None]) -> Role:
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise AuthorizationError("Unknown role")


def has_permission(role: Union[Role, str, None], permission: Permission) -> bool:
    try:
        resolved = coerce_role(role)
    except AuthorizationError:
        return False
    return permission in ROLE_PERMISSIONS.get(resolved, frozenset())


def authorize(role: Union[Role, str, None], permission: Permission) -> Role:
    """Raise AuthorizationError unless `role` grants `permission`."""

    resolved = coerce_role(role)
    if permission not in ROLE_PERMISSIONS.get(resolved, frozenset()):
        raise AuthorizationError(f"Forbidden: {resolved.value} cannot {permission.value.replace('_', ' ')}")
    return resolved
