"""Application commands for identity management."""

from mangle_identity.application.commands.bootstrap_admin_command import (
    BootstrapAdminCommand,
)
from mangle_identity.application.commands.reset_admin_credentials_command import (
    ResetAdminCredentialsCommand,
)

__all__ = [
    "BootstrapAdminCommand",
    "ResetAdminCredentialsCommand",
]
