"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from mangle_identity.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidUserError(ValidationError):
    """Raised when a user name or domain is malformed."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message, key=key)


class DuplicateUserError(ConflictError):
    """User with the same fully-qualified name already exists."""

    def __init__(self, fully_qualified_name: str) -> None:
        self.fully_qualified_name = fully_qualified_name
        super().__init__(
            f"User already exists: {fully_qualified_name}",
            code=ErrorCode.DUPLICATE_USER,
            key=fully_qualified_name,
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, fully_qualified_name: str) -> None:
        self.fully_qualified_name = fully_qualified_name
        super().__init__(
            f"User not found: {fully_qualified_name}",
            code=ErrorCode.USER_NOT_FOUND,
            key=fully_qualified_name,
        )
