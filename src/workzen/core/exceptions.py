class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced employee, payroll, payrun or leave does not exist."""

    status_code = 404


class PreconditionFailedError(DomainError):
    """Raised when an operation's prerequisites are missing (e.g. bank details)."""

    status_code = 412


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
