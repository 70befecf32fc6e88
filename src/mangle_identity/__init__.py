"""Mangle Identity - user records and the first-login admin reset gate.

This package handles:
- User management (list, create, update, current caller)
- Domain-qualified uniqueness (``name@domain``) and default domains
- The "admin must reset password" gate and the first-login reset flow
- Password hashing for stored credentials

Core operations return ``Outcome`` values; the FastAPI layer in
``mangle_identity.presentation`` translates them to HTTP responses.
"""

from mangle_identity.application.commands import (
    BootstrapAdminCommand,
    ResetAdminCredentialsCommand,
)
from mangle_identity.application.dtos import UserData
from mangle_identity.application.ports.identity import (
    AuthContext,
    DefaultDomainProvider,
)
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.reset_gate import GateError, ResetStatusRepository
from mangle_identity.domain.shared import (
    DomainException,
    ErrorCode,
    Failure,
    Outcome,
    StoreError,
)
from mangle_identity.domain.user import (
    DuplicateUserError,
    FullyQualifiedName,
    InvalidUserError,
    User,
    UserNotFoundError,
    UserRepository,
)
from mangle_identity.exceptions import (
    AdminPasswordResetRequiredError,
    AuthContextError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from mangle_identity.services import PasswordHashingService

__all__ = [
    # Domain - User
    "DuplicateUserError",
    "FullyQualifiedName",
    "InvalidUserError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    # Domain - Reset gate
    "GateError",
    "ResetStatusRepository",
    # Domain - Shared
    "DomainException",
    "ErrorCode",
    "Failure",
    "Outcome",
    "StoreError",
    # Exceptions
    "AdminPasswordResetRequiredError",
    "AuthContextError",
    "InvalidCredentialsError",
    "WeakPasswordError",
    # Ports
    "AuthContext",
    "DefaultDomainProvider",
    # Application
    "BootstrapAdminCommand",
    "CredentialResetGate",
    "ResetAdminCredentialsCommand",
    "UserData",
    "UserManager",
    # Services
    "PasswordHashingService",
]
