"""Centralized error translation for the FastAPI application.

Failures coming out of the identity core (``Failure`` values) and domain
exceptions raised by dependencies are both mapped to HTTP responses with
the same format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from mangle_identity.domain.shared import DomainException, ErrorCode, Failure

logger = logging.getLogger(__name__)


ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTH_CONTEXT_ERROR: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ADMIN_PASSWORD_RESET_REQUIRED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_USER: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.GATE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Basic"}
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


class ErrorTranslator:
    """Maps a failure kind and message to an HTTP status and payload."""

    def status_for(self, code: ErrorCode) -> int:
        return ERROR_CODE_TO_STATUS.get(code, status.HTTP_400_BAD_REQUEST)

    def translate(self, failure: Failure) -> JSONResponse:
        status_code = self.status_for(failure.code)
        logger.warning(
            "Request failed: %s (code=%s, key=%s)",
            failure.message,
            failure.code.value,
            failure.key,
        )
        return _create_error_response(
            status_code=status_code,
            message=failure.message,
            code=failure.code.value,
        )


def setup_exception_handlers(app: FastAPI, translator: ErrorTranslator) -> None:
    """Register exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    translator
        Translator shared with the controllers
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        logger.debug("Domain exception on %s %s", request.method, request.url.path)
        return translator.translate(Failure.from_exception(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all so clients always receive the standard error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
