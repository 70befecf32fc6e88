"""SQLAlchemy implementation for mangle_identity persistence.

Provides:
- Base: Declarative base for identity models
- UserModel: SQLAlchemy model for users
- ResetStatusModel: SQLAlchemy model for the admin reset flag
- UserRepositorySQLAlchemy: Repository implementation for users
- ResetStatusRepositorySQLAlchemy: Repository implementation for the flag
- create_tables / bootstrap_admin: schema creation and admin seeding
"""

from mangle_identity.infrastructure.persistence.sqlalchemy.base import Base
from mangle_identity.infrastructure.persistence.sqlalchemy.init_db import (
    bootstrap_admin,
    create_tables,
    drop_tables,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.models import (
    ResetStatusModel,
    UserModel,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.repositories import (
    ResetStatusRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "ResetStatusModel",
    "ResetStatusRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "bootstrap_admin",
    "create_tables",
    "drop_tables",
]
