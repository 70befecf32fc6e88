"""UserLifecycleController - boundary between HTTP and the identity core.

Invokes the user manager, the reset gate and the admin reset command, turns
successful outcomes into responses and hands failures to the error
translator. Duplicate checks, domain defaults and gate transitions all
happen in the core.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from mangle_identity.application.commands import ResetAdminCredentialsCommand
from mangle_identity.application.dtos import UserData
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.shared import Outcome
from mangle_identity.domain.user import User
from mangle_identity.presentation.api.error_translation import ErrorTranslator
from mangle_identity.presentation.api.schemas import UserResponse

T = TypeVar("T")


def _user_payload(user: User) -> dict:
    return UserResponse.from_domain(user).to_payload()


def _users_payload(users: list[User]) -> list[dict]:
    return [_user_payload(user) for user in users]


def _plain(value: Any) -> Any:
    return value


class UserLifecycleController:
    def __init__(
        self,
        user_manager: UserManager,
        reset_gate: CredentialResetGate,
        error_translator: ErrorTranslator,
    ):
        self._user_manager = user_manager
        self._reset_gate = reset_gate
        self._error_translator = error_translator

    async def get_all_users(self) -> JSONResponse:
        outcome = await self._user_manager.list_users()
        return self._respond(outcome, status.HTTP_200_OK, _users_payload)

    async def create_user(self, user: UserData) -> JSONResponse:
        outcome = await self._user_manager.create_user(user)
        return self._respond(outcome, status.HTTP_201_CREATED, _user_payload)

    async def update_user(self, user: UserData) -> JSONResponse:
        outcome = await self._user_manager.update_user(user)
        return self._respond(outcome, status.HTTP_200_OK, _user_payload)

    async def get_current_user(self) -> JSONResponse:
        outcome = await self._user_manager.get_current_user()
        return self._respond(outcome, status.HTTP_200_OK, _user_payload)

    async def reset_admin_creds_for_first_login(self, user: UserData) -> JSONResponse:
        command = ResetAdminCredentialsCommand(self._user_manager, self._reset_gate)
        outcome = await command.execute(user)
        return self._respond(outcome, status.HTTP_200_OK, _plain)

    async def get_admin_password_reset_status(self) -> JSONResponse:
        outcome = await self._reset_gate.read_reset_status()
        return self._respond(outcome, status.HTTP_200_OK, _plain)

    def _respond(
        self,
        outcome: Outcome[T],
        status_code: int,
        serialize: Callable[[T], Any],
    ) -> JSONResponse:
        if not outcome.is_ok:
            return self._error_translator.translate(outcome.failure)
        return JSONResponse(status_code=status_code, content=serialize(outcome.value))
