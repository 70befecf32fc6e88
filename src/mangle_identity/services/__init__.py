"""Identity services - password hashing."""

from mangle_identity.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
]
