"""UserManager against a real SQLite user store."""

import asyncio
from unittest.mock import Mock

import pytest

from mangle_config import Settings
from mangle_identity.application.ports.identity import AuthContext
from mangle_identity.application.services import UserManager
from mangle_identity.domain.shared import ErrorCode
from mangle_identity.infrastructure.adapters.identity import (
    SettingsDefaultDomainProvider,
)
from mangle_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from mangle_identity.services import PasswordHashingService
from tests.shared.fixtures.database import (  # noqa: F401
    sqlite_engine,
    sqlite_file_engine,
    sqlite_file_session_maker,
    sqlite_session,
    sqlite_session_maker,
)
from tests.shared.fixtures.factories import make_user_data


def _user_manager(session) -> UserManager:
    settings = Settings(_env_file=None, default_domain="mangle.local")
    auth_context = Mock(spec=AuthContext)
    auth_context.current_username.return_value = "user1"
    return UserManager(
        user_repository=UserRepositorySQLAlchemy(session),
        default_domain_provider=SettingsDefaultDomainProvider(settings),
        auth_context=auth_context,
        password_service=PasswordHashingService(rounds=4),
    )


@pytest.fixture
def user_manager(sqlite_session) -> UserManager:
    return _user_manager(sqlite_session)


class TestUserLifecycle:
    @pytest.mark.asyncio
    async def test_created_user_is_listed_with_same_fields(self, user_manager):
        created = await user_manager.create_user(
            make_user_data(roles=("USER", "AUDITOR"), account_locked=True),
        )

        listed = await user_manager.list_users()

        assert created.is_ok
        assert len(listed.value) == 1
        stored = listed.value[0]
        assert stored.fully_qualified_name == created.value.fully_qualified_name
        assert stored.roles == created.value.roles
        assert stored.account_locked is True

    @pytest.mark.asyncio
    async def test_second_create_is_duplicate_and_keeps_one_record(
        self,
        user_manager,
    ):
        first = await user_manager.create_user(make_user_data())
        second = await user_manager.create_user(
            make_user_data(domain="MANGLE.local", roles=("OTHER",)),
        )

        assert first.is_ok
        assert second.code == ErrorCode.DUPLICATE_USER
        listed = await user_manager.list_users()
        assert [u.roles for u in listed.value] == [("USER",)]

    @pytest.mark.asyncio
    async def test_update_never_creates(self, user_manager):
        outcome = await user_manager.update_user(make_user_data(name="ghost"))

        assert outcome.code == ErrorCode.USER_NOT_FOUND
        assert (await user_manager.list_users()).value == []

    @pytest.mark.asyncio
    async def test_stored_password_verifies(self, user_manager):
        await user_manager.create_user(make_user_data(password="user1-password"))

        user = (await user_manager.get_current_user()).value

        service = PasswordHashingService(rounds=4)
        assert user.password_hash != "user1-password"
        assert service.verify("user1-password", user.password_hash)

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, user_manager):
        await user_manager.create_user(make_user_data(roles=("USER",)))

        updated = await user_manager.update_user(
            make_user_data(password=None, roles=None, account_locked=True),
        )

        assert updated.value.roles == ("USER",)
        assert updated.value.account_locked is True

    @pytest.mark.asyncio
    async def test_listed_user_matches_created_user_exactly(self, user_manager):
        created = (await user_manager.create_user(make_user_data())).value

        stored = (await user_manager.list_users()).value[0]

        assert stored.created_at == created.created_at
        assert stored.updated_at == created.updated_at
        assert stored.created_at.tzinfo is not None
        assert stored.password_hash == created.password_hash
        assert stored.account_locked == created.account_locked


async def _create_in_own_session(session_maker, candidate):
    async with session_maker() as session:
        return await _user_manager(session).create_user(candidate)


class TestConcurrentCreate:
    @pytest.mark.asyncio
    async def test_racing_creates_yield_exactly_one_user(
        self,
        sqlite_file_session_maker,
    ):
        outcomes = await asyncio.gather(
            *(
                _create_in_own_session(
                    sqlite_file_session_maker,
                    make_user_data(password=None),
                )
                for _ in range(5)
            ),
        )

        assert sum(outcome.is_ok for outcome in outcomes) == 1
        assert all(
            outcome.code == ErrorCode.DUPLICATE_USER
            for outcome in outcomes
            if not outcome.is_ok
        )
        async with sqlite_file_session_maker() as session:
            users = (await _user_manager(session).list_users()).value
        assert [u.fully_qualified_name for u in users] == ["user1@mangle.local"]
