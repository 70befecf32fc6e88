"""User aggregate for identity concerns only."""

from collections.abc import Iterable
from datetime import datetime
from typing import Union

from mangle_identity.domain.shared.time import utc_now
from mangle_identity.domain.user.value_objects import FullyQualifiedName


class User:
    """
    User aggregate root.

    Identified by its fully-qualified name (``name@domain``). Roles and the
    account lock flag are carried for other components; this core never
    interprets them.
    """

    def __init__(  # noqa: PLR0913
        self,
        name: Union[str, FullyQualifiedName],
        domain: str | None = None,
        password_hash: str | None = None,
        roles: Iterable[str] = (),
        account_locked: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._fqn = (
            name
            if isinstance(name, FullyQualifiedName)
            else FullyQualifiedName(name=name, domain=domain or "")
        )
        self._password_hash = password_hash
        self._roles = tuple(sorted(set(roles)))
        self._account_locked = account_locked
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def name(self) -> str:
        return self._fqn.name

    @property
    def domain(self) -> str:
        return self._fqn.domain

    @property
    def fully_qualified_name(self) -> str:
        return str(self._fqn)

    @property
    def fqn_obj(self) -> FullyQualifiedName:
        return self._fqn

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def roles(self) -> tuple[str, ...]:
        return self._roles

    @property
    def account_locked(self) -> bool:
        return self._account_locked

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_password(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def assign_roles(self, roles: Iterable[str]) -> None:
        self._roles = tuple(sorted(set(roles)))
        self._updated_at = utc_now()

    def set_account_locked(self, locked: bool) -> None:
        self._account_locked = locked
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        name: str,
        domain: str,
        password_hash: str | None = None,
        roles: Iterable[str] = (),
        account_locked: bool = False,
    ) -> "User":
        return cls(
            name=name,
            domain=domain,
            password_hash=password_hash,
            roles=roles,
            account_locked=account_locked,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        name: str,
        domain: str,
        password_hash: str | None,
        roles: Iterable[str],
        account_locked: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            name=name,
            domain=domain,
            password_hash=password_hash,
            roles=roles,
            account_locked=account_locked,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._fqn == other._fqn

    def __hash__(self) -> int:
        return hash(self._fqn)

    def __repr__(self) -> str:
        return f"User({self.fully_qualified_name}, roles={list(self._roles)})"
