import pytest

from workzen.core.authorization import ROLE_PERMISSIONS, authorize, has_permission
from workzen.core.enums import Permission, Role
from workzen.core.exceptions import AuthorizationError


def test_every_role_has_an_entry():
    assert set(ROLE_PERMISSIONS) == set(Role)


def test_admin_can_do_everything():
    for permission in Permission:
        assert authorize(Role.ADMIN, permission) == Role.ADMIN


@pytest.mark.parametrize(
    "role, permission",
    [
        (Role.PAYROLL_OFFICER, Permission.MANAGE_PAYROLL),
        (Role.PAYROLL_OFFICER, Permission.MANAGE_PAYRUNS),
        (Role.PAYROLL_OFFICER, Permission.VIEW_PAYROLL),
        (Role.HR, Permission.REVIEW_LEAVE),
        (Role.EMPLOYEE, Permission.REQUEST_LEAVE),
        (Role.EMPLOYEE, Permission.RECORD_ATTENDANCE),
    ],
)
def test_granted(role, permission):
    assert has_permission(role, permission)
    authorize(role.value, permission)


@pytest.mark.parametrize(
    "role, permission",
    [
        (Role.EMPLOYEE, Permission.VIEW_PAYROLL),
        (Role.EMPLOYEE, Permission.REVIEW_LEAVE),
        (Role.HR, Permission.MANAGE_PAYROLL),
        (Role.PAYROLL_OFFICER, Permission.REVIEW_LEAVE),
    ],
)
def test_denied(role, permission):
    assert not has_permission(role, permission)
    with pytest.raises(AuthorizationError):
        authorize(role, permission)


def test_unknown_role_is_rejected():
    assert not has_permission("Manager", Permission.VIEW_PAYROLL)
    with pytest.raises(AuthorizationError):
        authorize("Manager", Permission.VIEW_PAYROLL)
    with pytest.raises(AuthorizationError):
        authorize(None, Permission.REQUEST_LEAVE)
