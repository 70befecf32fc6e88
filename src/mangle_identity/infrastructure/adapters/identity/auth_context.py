"""AuthContext adapters.

The presentation layer verifies the caller and wraps the resulting user name
in one of these; the core only ever asks for the name.
"""

from mangle_identity.application.ports.identity import AuthContext
from mangle_identity.exceptions import AuthContextError


class AuthenticatedAuthContext(AuthContext):
    """Caller already verified by the transport layer."""

    def __init__(self, username: str) -> None:
        self._username = username

    def current_username(self) -> str:
        if not self._username:
            raise AuthContextError
        return self._username

    def __repr__(self) -> str:
        return f"AuthenticatedAuthContext({self._username!r})"


class AnonymousAuthContext(AuthContext):
    """No caller (startup tasks, CLI, unauthenticated endpoints)."""

    def current_username(self) -> str:
        msg = "No authenticated caller"
        raise AuthContextError(msg)
