"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Union

from mangle_identity.domain.user.aggregates.user import User
from mangle_identity.domain.user.value_objects import FullyQualifiedName


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Implementations enforce uniqueness of the fully-qualified name at write
    time and wrap persistence failures in ``StoreError``.
    """

    @abstractmethod
    async def find(
        self,
        fully_qualified_name: Union[str, FullyQualifiedName],
    ) -> User | None:
        """Find a user by its ``name@domain`` key."""

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Persist a new user.

        Raises
        ------
        DuplicateUserError
            If a user with the same fully-qualified name already exists
        """

    @abstractmethod
    async def update(self, user: User) -> User:
        """Overwrite an existing user.

        Raises
        ------
        UserNotFoundError
            If no user with that fully-qualified name exists
        """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users."""
