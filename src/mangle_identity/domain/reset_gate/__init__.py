"""Reset gate domain: the first-login password reset flag of the admin."""

from mangle_identity.domain.reset_gate.exceptions import GateError
from mangle_identity.domain.reset_gate.repositories import ResetStatusRepository

__all__ = [
    "GateError",
    "ResetStatusRepository",
]
