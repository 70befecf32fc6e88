import logging

from mangle_identity.application.dtos import UserData
from mangle_identity.application.services import CredentialResetGate, UserManager
from mangle_identity.domain.shared import Outcome, ValidationError

logger = logging.getLogger(__name__)


class ResetAdminCredentialsCommand:
    """Apply the admin's new credentials, then clear the reset gate.

    The two steps are not one transaction. If the gate cannot be cleared
    after the credentials were updated, the new credentials stay in effect
    and the gate failure is returned.
    """

    def __init__(self, user_manager: UserManager, reset_gate: CredentialResetGate):
        self._user_manager = user_manager
        self._reset_gate = reset_gate

    async def execute(self, new_credentials: UserData) -> Outcome[bool]:
        if not new_credentials.password:
            # The gate only clears once a new password has been applied
            return Outcome.from_exception(
                ValidationError(
                    "A new password is required to reset the admin credentials",
                    key=new_credentials.name,
                ),
            )

        updated = await self._user_manager.update_user(new_credentials)
        if not updated.is_ok:
            return Outcome.fail(updated.failure)

        cleared = await self._reset_gate.update_reset_status()
        if not cleared.is_ok:
            logger.error(
                "Credentials of %s were updated but the reset gate was not "
                "cleared: %s",
                updated.value.fully_qualified_name,
                cleared.failure.message,
            )
            return cleared

        return Outcome.ok(True)
