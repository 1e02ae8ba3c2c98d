# dancey_portal/exceptions.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors raised by the portal services."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(PortalError):
    """Caller-supplied data failed a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PortalError):
    """Entity does not exist or is not in the state the operation needs."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(PortalError):
    """Operation is not allowed in the entity's current state."""

    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(PortalError):
    """The relational store could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)


class ExternalServiceError(PortalError):
    """Identity or object-storage call failed while the primary operation was still open."""

    status_code = status.HTTP_502_BAD_GATEWAY


class PartialSideEffectWarning(UserWarning):
    """An auxiliary action failed after the primary operation succeeded. Logged only."""


def warn_partial_side_effect(message: str, *args) -> None:
    logger.warning("%s: " + message, PartialSideEffectWarning.__name__, *args)


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if isinstance(exc, StoreUnavailable):
        logger.error("Store unavailable on %s %s", request.method, request.url.path)
    content = {"detail": exc.message}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=StoreUnavailable.status_code,
        content={"detail": StoreUnavailable().message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(OperationalError, store_error_handler)
    app.add_exception_handler(InterfaceError, store_error_handler)
