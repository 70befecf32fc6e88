"""FastAPI dependency injection for the identity API.

Provides dependencies for:
- Settings, database sessions and the process-wide reset gate
  (all held on ``app.state`` by the application factory)
- Authentication (HTTP Basic, verified against stored bcrypt hashes)
- The admin reset gate check for ordinary endpoints
- The user lifecycle controller
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from mangle_config.settings import Settings
from mangle_identity.application.ports.identity import AuthContext
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.user import FullyQualifiedName, InvalidUserError
from mangle_identity.exceptions import (
    AdminPasswordResetRequiredError,
    AuthContextError,
    InvalidCredentialsError,
)
from mangle_identity.infrastructure.adapters.identity import (
    AnonymousAuthContext,
    AuthenticatedAuthContext,
    SettingsDefaultDomainProvider,
)
from mangle_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from mangle_identity.presentation.api.controller import UserLifecycleController
from mangle_identity.presentation.api.error_translation import ErrorTranslator
from mangle_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)

# Credentials are optional here; endpoints decide whether they need a caller
security = HTTPBasic(auto_error=False)


# -----------------------------------------------------------------------------
# Database Engine & Session
# -----------------------------------------------------------------------------


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async database engine for the application.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    url = settings.database_url
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations, one per request
    """
    async with request.app.state.session_maker() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_reset_gate(request: Request) -> CredentialResetGate:
    """The single reset gate of this application instance."""
    return request.app.state.reset_gate


ResetGate = Annotated[CredentialResetGate, Depends(get_reset_gate)]


def get_error_translator(request: Request) -> ErrorTranslator:
    return request.app.state.error_translator


def get_password_service(settings: AppSettings) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.password_hash_rounds)


PasswordService = Annotated[PasswordHashingService, Depends(get_password_service)]


# -----------------------------------------------------------------------------
# Authentication (HTTP Basic)
# -----------------------------------------------------------------------------


async def get_optional_auth_context(
    session: DBSession,
    settings: AppSettings,
    password_service: PasswordService,
    credentials: HTTPBasicCredentials | None = Depends(security),
) -> AuthContext:
    """
    Resolve the caller from HTTP Basic credentials.

    Accepts ``name@domain`` or a bare ``name`` (default domain). Missing
    credentials give an anonymous context; wrong ones are rejected.

    Raises
    ------
    InvalidCredentialsError
        If the user is unknown, locked, or the password does not match
    """
    if credentials is None:
        return AnonymousAuthContext()

    try:
        fqn = FullyQualifiedName.parse(credentials.username, settings.default_domain)
    except InvalidUserError as e:
        raise InvalidCredentialsError from e

    user = await UserRepositorySQLAlchemy(session).find(fqn)
    if user is None or user.account_locked:
        logger.warning("Rejected login for %s", fqn)
        raise InvalidCredentialsError

    if not password_service.verify(credentials.password, user.password_hash):
        logger.warning("Invalid password for %s", fqn)
        raise InvalidCredentialsError

    return AuthenticatedAuthContext(user.fully_qualified_name)


OptionalAuthContext = Annotated[AuthContext, Depends(get_optional_auth_context)]


async def get_auth_context(auth_context: OptionalAuthContext) -> AuthContext:
    """Require an authenticated caller."""
    if isinstance(auth_context, AnonymousAuthContext):
        raise AuthContextError
    return auth_context


CurrentAuthContext = Annotated[AuthContext, Depends(get_auth_context)]


async def require_reset_completed(
    auth_context: CurrentAuthContext,
    reset_gate: ResetGate,
    settings: AppSettings,
) -> AuthContext:
    """Keep the built-in admin out of ordinary endpoints until it resets."""
    username = auth_context.current_username()
    if username != settings.admin_fully_qualified_name:
        return auth_context

    status = await reset_gate.read_reset_status()
    if not status.is_ok:
        raise status.failure.to_exception()
    if status.value:
        raise AdminPasswordResetRequiredError(key=username)
    return auth_context


ResetCompletedCaller = Annotated[AuthContext, Depends(require_reset_completed)]


# -----------------------------------------------------------------------------
# Core Services & Controller
# -----------------------------------------------------------------------------


def get_user_manager(
    session: DBSession,
    settings: AppSettings,
    password_service: PasswordService,
    auth_context: OptionalAuthContext,
) -> UserManager:
    return UserManager(
        user_repository=UserRepositorySQLAlchemy(session),
        default_domain_provider=SettingsDefaultDomainProvider(settings),
        auth_context=auth_context,
        password_service=password_service,
    )


def get_user_lifecycle_controller(
    user_manager: UserManager = Depends(get_user_manager),
    reset_gate: CredentialResetGate = Depends(get_reset_gate),
    error_translator: ErrorTranslator = Depends(get_error_translator),
) -> UserLifecycleController:
    return UserLifecycleController(
        user_manager=user_manager,
        reset_gate=reset_gate,
        error_translator=error_translator,
    )


Controller = Annotated[UserLifecycleController, Depends(get_user_lifecycle_controller)]


def get_public_user_lifecycle_controller(
    session: DBSession,
    settings: AppSettings,
    password_service: PasswordService,
    reset_gate: ResetGate,
    error_translator: ErrorTranslator = Depends(get_error_translator),
) -> UserLifecycleController:
    """Controller for endpoints that ignore any credentials sent along."""
    user_manager = UserManager(
        user_repository=UserRepositorySQLAlchemy(session),
        default_domain_provider=SettingsDefaultDomainProvider(settings),
        auth_context=AnonymousAuthContext(),
        password_service=password_service,
    )
    return UserLifecycleController(
        user_manager=user_manager,
        reset_gate=reset_gate,
        error_translator=error_translator,
    )


PublicController = Annotated[
    UserLifecycleController,
    Depends(get_public_user_lifecycle_controller),
]
