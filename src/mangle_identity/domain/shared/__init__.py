"""Shared domain building blocks: error codes, exceptions, outcomes."""

from mangle_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    StoreError,
    ValidationError,
)
from mangle_identity.domain.shared.outcome import Failure, Outcome
from mangle_identity.domain.shared.time import utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "Failure",
    "Outcome",
    "StoreError",
    "ValidationError",
    "utc_now",
]
