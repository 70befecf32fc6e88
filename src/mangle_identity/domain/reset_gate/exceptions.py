"""Reset gate exceptions."""

from mangle_identity.domain.shared.exceptions import DomainException, ErrorCode


class GateError(DomainException):
    """Raised when the reset flag cannot be read or persisted."""

    def __init__(
        self,
        message: str = "Admin password reset status could not be persisted",
        key: str | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.GATE_ERROR, key=key)
