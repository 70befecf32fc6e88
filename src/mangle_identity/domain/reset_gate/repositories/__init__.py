from mangle_identity.domain.reset_gate.repositories.reset_status_repository import (
    ResetStatusRepository,
)

__all__ = ["ResetStatusRepository"]
