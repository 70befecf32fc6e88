"""Fully-qualified user name value object (``name@domain``)."""

from __future__ import annotations

from dataclasses import dataclass

from mangle_identity.domain.user.exceptions import InvalidUserError

SEPARATOR = "@"


@dataclass(frozen=True)
class FullyQualifiedName:
    """The uniqueness key of a user record.

    The domain is normalized to lower case; the name is kept as given
    (minus surrounding whitespace).
    """

    name: str
    domain: str

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        domain = (self.domain or "").strip().lower()

        if not name:
            msg = "User name cannot be empty"
            raise InvalidUserError(msg)
        if SEPARATOR in name:
            msg = f"User name cannot contain '{SEPARATOR}': {name}"
            raise InvalidUserError(msg, key=name)
        if not domain:
            msg = f"Domain cannot be empty for user: {name}"
            raise InvalidUserError(msg, key=name)

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "domain", domain)

    @classmethod
    def parse(cls, value: str, default_domain: str) -> FullyQualifiedName:
        """Parse ``name@domain``; a bare ``name`` gets ``default_domain``."""
        name, sep, domain = (value or "").strip().rpartition(SEPARATOR)
        if not sep:
            return cls(name=domain, domain=default_domain)
        return cls(name=name, domain=domain)

    def __str__(self) -> str:
        return f"{self.name}{SEPARATOR}{self.domain}"
