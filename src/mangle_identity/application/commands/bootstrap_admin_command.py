import logging

from mangle_identity.application.dtos import UserData
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.shared import ErrorCode, Outcome
from mangle_identity.domain.user import User

logger = logging.getLogger(__name__)

ADMIN_ROLES = ("ADMIN",)


class BootstrapAdminCommand:
    """Make sure the built-in admin account and the reset flag exist.

    Existing records are left untouched, so running it on every startup
    never re-arms the gate once the admin has reset the password.
    """

    def __init__(self, user_manager: UserManager, reset_gate: CredentialResetGate):
        self._user_manager = user_manager
        self._reset_gate = reset_gate

    async def execute(self, admin_username: str, initial_password: str) -> Outcome[User]:
        admin = await self._user_manager.get_user(admin_username)

        if admin.code == ErrorCode.USER_NOT_FOUND:
            admin = await self._user_manager.create_user(
                UserData(
                    name=admin_username,
                    password=initial_password,
                    roles=ADMIN_ROLES,
                ),
            )
            if admin.code == ErrorCode.DUPLICATE_USER:
                # Another worker created it first
                admin = await self._user_manager.get_user(admin_username)
            elif admin.is_ok:
                logger.info(
                    "Created built-in admin: %s",
                    admin.value.fully_qualified_name,
                )

        if not admin.is_ok:
            return admin

        gate = await self._reset_gate.initialize()
        if not gate.is_ok:
            return Outcome.fail(gate.failure)

        return admin
