"""SQLAlchemy implementation of ResetStatusRepository."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mangle_identity.domain.reset_gate import GateError, ResetStatusRepository
from mangle_identity.infrastructure.persistence.sqlalchemy.models import (
    ADMIN_RESET_STATUS_ID,
    ResetStatusModel,
)

logger = logging.getLogger(__name__)

GATE_FAILURES = (SQLAlchemyError, OSError, TimeoutError)


class ResetStatusRepositorySQLAlchemy(ResetStatusRepository):
    """Stores the admin reset flag in ``password_reset_status``.

    Opens a short-lived session per call instead of sharing the request
    session, so the gate can live for the whole process.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def read(self) -> bool | None:
        stmt = select(ResetStatusModel.needs_reset).where(
            ResetStatusModel.id == ADMIN_RESET_STATUS_ID,
        )
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except GATE_FAILURES as e:
            logger.error("Reading reset status failed: %s", e)
            msg = "Admin password reset status could not be read"
            raise GateError(msg, key=ADMIN_RESET_STATUS_ID) from e

    async def write(self, needs_reset: bool) -> None:
        try:
            async with self._session_maker() as session, session.begin():
                model = await session.get(ResetStatusModel, ADMIN_RESET_STATUS_ID)
                if model is None:
                    session.add(
                        ResetStatusModel(
                            id=ADMIN_RESET_STATUS_ID,
                            needs_reset=needs_reset,
                        ),
                    )
                else:
                    model.needs_reset = needs_reset
        except GATE_FAILURES as e:
            logger.error("Writing reset status failed: %s", e)
            raise GateError(key=ADMIN_RESET_STATUS_ID) from e

        logger.debug("Reset status stored: needs_reset=%s", needs_reset)

    async def initialize(self, needs_reset: bool) -> bool:
        try:
            async with self._session_maker() as session, session.begin():
                model = await session.get(ResetStatusModel, ADMIN_RESET_STATUS_ID)
                if model is not None:
                    return False
                session.add(
                    ResetStatusModel(id=ADMIN_RESET_STATUS_ID, needs_reset=needs_reset),
                )
        except IntegrityError:
            # Created concurrently by another process
            return False
        except GATE_FAILURES as e:
            logger.error("Initializing reset status failed: %s", e)
            raise GateError(key=ADMIN_RESET_STATUS_ID) from e

        return True
