"""Application services for identity management."""

from mangle_identity.application.services.credential_reset_gate import (
    CredentialResetGate,
)
from mangle_identity.application.services.user_manager import UserManager

__all__ = ["CredentialResetGate", "UserManager"]
