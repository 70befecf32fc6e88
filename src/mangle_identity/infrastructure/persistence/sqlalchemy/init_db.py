"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from mangle_config.settings import Settings
from mangle_identity.application.commands import BootstrapAdminCommand
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.shared import Outcome
from mangle_identity.domain.user import User
from mangle_identity.infrastructure.adapters.identity import (
    AnonymousAuthContext,
    SettingsDefaultDomainProvider,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.base import Base
from mangle_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from mangle_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    # Import models to register with Base.metadata
    import mangle_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401

    logger.info("Ensuring all database tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables (USE WITH CAUTION!)."""
    logger.warning("Dropping all database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped successfully")


async def bootstrap_admin(
    session_maker: async_sessionmaker[AsyncSession],
    reset_gate: CredentialResetGate,
    settings: Settings,
) -> Outcome[User]:
    """Seed the built-in admin account and arm the reset gate if missing."""
    async with session_maker() as session:
        user_manager = UserManager(
            user_repository=UserRepositorySQLAlchemy(session),
            default_domain_provider=SettingsDefaultDomainProvider(settings),
            auth_context=AnonymousAuthContext(),
            password_service=PasswordHashingService(settings.password_hash_rounds),
        )
        command = BootstrapAdminCommand(user_manager, reset_gate)
        outcome = await command.execute(
            admin_username=settings.admin_username,
            initial_password=settings.admin_initial_password.get_secret_value(),
        )

    if outcome.is_ok:
        logger.info("Built-in admin ready: %s", outcome.value.fully_qualified_name)
    else:
        logger.error("Admin bootstrap failed: %s", outcome.failure.message)
    return outcome
