# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from mangle_identity.infrastructure.persistence.sqlalchemy.repositories.reset_status_repository import (
    ResetStatusRepositorySQLAlchemy,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "ResetStatusRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
