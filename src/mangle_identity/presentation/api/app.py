"""FastAPI application factory.

Creates and configures the FastAPI application with routers, exception
handlers and the per-application resources (engine, session maker and the
single credential reset gate).

API Versioning:
    User management endpoints live under /rest/api/v1/.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mangle_config.settings import Settings, get_settings
from mangle_identity.application.services import CredentialResetGate
from mangle_identity.infrastructure.persistence.sqlalchemy import (
    ResetStatusRepositorySQLAlchemy,
    bootstrap_admin,
    create_tables,
)
from mangle_identity.presentation.api.dependencies import (
    create_engine,
    create_session_maker,
)
from mangle_identity.presentation.api.error_translation import (
    ErrorTranslator,
    setup_exception_handlers,
)
from mangle_identity.presentation.api.routers import user_management_router


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for mangle modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("mangle_identity").setLevel(log_level)
    logging.getLogger("mangle_config").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/rest/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema and seed the built-in admin, dispose on shutdown."""
    settings: Settings = app.state.settings
    logger.info("Starting %s identity API v%s...", settings.app_name, API_VERSION)

    try:
        await create_tables(app.state.engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    await bootstrap_admin(app.state.session_maker, app.state.reset_gate, settings)
    yield

    logger.info("Shutting down identity API...")
    await app.state.engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    v1_router = APIRouter()
    v1_router.include_router(user_management_router, tags=["User Management"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} User Management API",
        description="User records and first-login admin password reset.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    session_maker = create_session_maker(engine)
    error_translator = ErrorTranslator()

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = session_maker
    app.state.error_translator = error_translator
    app.state.reset_gate = CredentialResetGate(
        ResetStatusRepositorySQLAlchemy(session_maker),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app, error_translator)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Unversioned health check for load balancers."""
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} User Management API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "users": f"{API_V1_PREFIX}/user-management/users",
                "current_user": f"{API_V1_PREFIX}/user-management/user",
                "password_reset": f"{API_V1_PREFIX}/user-management/password/reset",
            },
        }

    return app
