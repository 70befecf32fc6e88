import asyncio
import logging

from mangle_identity.domain.reset_gate import ResetStatusRepository
from mangle_identity.domain.shared import DomainException, Outcome

logger = logging.getLogger(__name__)


class CredentialResetGate:
    """Owns the "admin must reset password" flag.

    One instance per process. The flag lives only in the repository and is
    re-read on every call; writers are serialized by a lock.
    """

    INITIAL_STATUS = True

    def __init__(self, repository: ResetStatusRepository):
        self._repository = repository
        self._lock = asyncio.Lock()

    async def read_reset_status(self) -> Outcome[bool]:
        try:
            needs_reset = await self._repository.read()
        except DomainException as e:
            logger.warning("Could not read reset status: %s", e.message)
            return Outcome.from_exception(e)

        if needs_reset is None:
            return Outcome.ok(self.INITIAL_STATUS)
        return Outcome.ok(needs_reset)

    async def update_reset_status(self) -> Outcome[bool]:
        """Mark the first-login reset as done. Safe to call repeatedly."""
        async with self._lock:
            try:
                await self._repository.write(False)
            except DomainException as e:
                logger.error("Could not persist reset status: %s", e.message)
                return Outcome.from_exception(e)

        logger.info("Admin password reset completed, reset gate cleared")
        return Outcome.ok(True)

    async def initialize(self) -> Outcome[bool]:
        async with self._lock:
            try:
                created = await self._repository.initialize(self.INITIAL_STATUS)
            except DomainException as e:
                logger.error("Could not initialize reset status: %s", e.message)
                return Outcome.from_exception(e)

        if created:
            logger.info("Reset gate initialized: admin must reset password")
        return Outcome.ok(created)
