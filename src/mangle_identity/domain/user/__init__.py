"""User domain manages user identity records only.

This domain handles:
- User aggregate (identity: name, domain, credential hash, roles)
- Fully-qualified name uniqueness key
- Repository interface for user persistence
"""

from mangle_identity.domain.user.aggregates import User
from mangle_identity.domain.user.exceptions import (
    DuplicateUserError,
    InvalidUserError,
    UserNotFoundError,
)
from mangle_identity.domain.user.repositories import UserRepository
from mangle_identity.domain.user.value_objects import FullyQualifiedName

__all__ = [
    "DuplicateUserError",
    "FullyQualifiedName",
    "InvalidUserError",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
