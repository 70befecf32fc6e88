"""Input data for creating or updating a user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserData:
    """Candidate user record as received from a caller.

    ``domain`` may be empty (the default domain applies). ``password`` is
    plaintext and is hashed before it reaches the store. ``roles`` and
    ``account_locked`` set to None keep the stored values on update.
    """

    name: str
    domain: str = ""
    password: str | None = None
    roles: tuple[str, ...] | None = None
    account_locked: bool | None = None
