# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from mangle_identity.infrastructure.persistence.sqlalchemy.models.reset_status_model import (
    ADMIN_RESET_STATUS_ID,
    ResetStatusModel,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "ADMIN_RESET_STATUS_ID",
    "ResetStatusModel",
    "UserModel",
]
