"""Identity and authentication exceptions.

These exceptions are raised by the authentication adapters and the password
service, and are translated to HTTP responses by the presentation layer.
"""

from mangle_identity.domain.shared.exceptions import (
    DomainException,
    ErrorCode,
    ValidationError,
)


class AuthContextError(DomainException):
    """Raised when the caller's identity cannot be resolved."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code=ErrorCode.AUTH_CONTEXT_ERROR)


class InvalidCredentialsError(AuthContextError):
    """Raised when user name or password is incorrect."""

    def __init__(self, message: str = "Invalid user name or password"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class AdminPasswordResetRequiredError(DomainException):
    """Raised when the admin calls a gated endpoint before resetting."""

    def __init__(
        self,
        message: str = "The admin password must be reset before first use",
        key: str | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.ADMIN_PASSWORD_RESET_REQUIRED,
            key=key,
        )
