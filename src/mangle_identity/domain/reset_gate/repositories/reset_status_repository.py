"""Repository interface for the admin password reset flag."""

from abc import ABC, abstractmethod


class ResetStatusRepository(ABC):
    """Single-row storage for the ``needs_reset`` flag.

    Every call reads or writes the store directly; nothing is cached.
    """

    @abstractmethod
    async def read(self) -> bool | None:
        """Return the stored flag, or None if it was never written."""

    @abstractmethod
    async def write(self, needs_reset: bool) -> None:
        """Store the flag atomically (insert or update in one transaction)."""

    @abstractmethod
    async def initialize(self, needs_reset: bool) -> bool:
        """Store the flag only if no value exists yet.

        Returns
        -------
        True if a row was created, False if one already existed
        """
