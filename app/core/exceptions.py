"""
Global exception handling for the application.
Every domain failure is an AppError subclass; the handler turns it into a
structured JSON body. Anything else is treated as fatal: logged and answered
with a generic 500.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Registro não encontrado", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class BusinessRuleViolationException(AppError):
    """Malformed input or a broken business rule; details carry field messages."""
    def __init__(self, message: str = "Dados inválidos", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class InvalidStatusTransitionException(BusinessRuleViolationException):
    """Order status change outside the allowed transition graph."""
    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Transição de status inválida: {current} -> {requested}",
            {"current": current, "requested": requested},
        )


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Não autenticado", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Acesso negado", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class ConflictException(AppError):
    """Concurrent modification detected while saving."""

    DELETED = "deleted"
    VERSION_MISMATCH = "version_mismatch"

    def __init__(self, reason: str, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        if message is None:
            message = (
                "O registro foi removido por outro usuário."
                if reason == self.DELETED
                else "O registro foi modificado por outro usuário. Recarregue e tente novamente."
            )
        self.reason = reason
        super().__init__(message, status.HTTP_409_CONFLICT, {"reason": reason, **(details or {})})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors as Problem-Details-like bodies."""
    if exc.status_code >= 500:
        logger.error("Application error", code=exc.__class__.__name__, message=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.__class__.__name__,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path, error=str(exc))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
                "path": request.url.path,
            }
        },
    )
