"""AuthContext - the core's view of who is calling.

Authentication itself happens outside the core; the adapter that verified
the caller hands over only the resulting user name.
"""

from abc import ABC, abstractmethod


class AuthContext(ABC):
    """Narrow capability: name of the authenticated caller."""

    @abstractmethod
    def current_username(self) -> str:
        """Return ``name`` or ``name@domain`` of the caller.

        Raises
        ------
        AuthContextError
            If no caller identity is available
        """
