"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import datetime, timezone
from typing import Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mangle_identity.domain.shared import StoreError
from mangle_identity.domain.user import (
    DuplicateUserError,
    FullyQualifiedName,
    User,
    UserNotFoundError,
    UserRepository,
)
from mangle_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)

# Connection refused and driver timeouts can surface outside SQLAlchemy's
# exception hierarchy
STORE_FAILURES = (SQLAlchemyError, OSError, TimeoutError)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops the offset of stored UTC timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Each write commits on success and rolls back on failure, so a failed
    insert or update never leaves a partial record behind.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(
        self,
        fully_qualified_name: Union[str, FullyQualifiedName],
    ) -> User | None:
        fqn = self._to_fqn(fully_qualified_name)
        try:
            model = await self._find_model(fqn)
        except STORE_FAILURES as e:
            logger.error("User lookup failed for %s: %s", fqn, e)
            raise StoreError(key=str(fqn)) from e

        if model is None:
            logger.debug("User not found: %s", fqn)
            return None

        return self._map_to_domain(model)

    async def insert(self, user: User) -> User:
        key = user.fully_qualified_name
        model = self._map_to_model(user)
        try:
            self._session.add(model)
            await self._session.commit()
            await self._session.refresh(model)
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateUserError(key) from e
        except STORE_FAILURES as e:
            await self._session.rollback()
            logger.error("Insert failed for user %s: %s", key, e)
            raise StoreError(key=key) from e

        logger.debug("Inserted user: %s", key)
        return self._map_to_domain(model)

    async def update(self, user: User) -> User:
        key = user.fully_qualified_name
        try:
            model = await self._find_model(user.fqn_obj)
            if model is None:
                raise UserNotFoundError(key)

            self._update_model(model, user)
            await self._session.commit()
            await self._session.refresh(model)
        except UserNotFoundError:
            await self._session.rollback()
            raise
        except STORE_FAILURES as e:
            await self._session.rollback()
            logger.error("Update failed for user %s: %s", key, e)
            raise StoreError(key=key) from e

        logger.debug("Updated user: %s", key)
        return self._map_to_domain(model)

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.name)
        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except STORE_FAILURES as e:
            logger.error("Listing users failed: %s", e)
            raise StoreError from e
        return [self._map_to_domain(model) for model in models]

    async def _find_model(self, fqn: FullyQualifiedName) -> UserModel | None:
        stmt = select(UserModel).where(
            UserModel.name == fqn.name,
            UserModel.domain == fqn.domain,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_fqn(value: Union[str, FullyQualifiedName]) -> FullyQualifiedName:
        if isinstance(value, FullyQualifiedName):
            return value
        name, _, domain = value.rpartition("@")
        return FullyQualifiedName(name=name, domain=domain)

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            name=model.name,
            domain=model.domain,
            password_hash=model.password_hash,
            roles=model.roles or [],
            account_locked=model.account_locked,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            name=user.name,
            domain=user.domain,
            password_hash=user.password_hash,
            roles=list(user.roles),
            account_locked=user.account_locked,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.password_hash = user.password_hash
        model.roles = list(user.roles)
        model.account_locked = user.account_locked
        model.updated_at = user.updated_at
