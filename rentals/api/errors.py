import logging
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rentals.domain.errors import (
    BookingNotFoundError,
    DateRangeUnavailableError,
    DomainError,
    InvalidInputError,
    InvalidTransitionError,
    InvalidWebhookPayloadError,
    ListingNotFoundError,
    NotAuthenticatedError,
    NotAuthorizedError,
    PaymentProviderError,
)

logger = logging.getLogger(__name__)

# Most specific class wins: lookup walks the exception's MRO.
STATUS_BY_ERROR: dict[type[DomainError], int] = {
    InvalidInputError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ListingNotFoundError: status.HTTP_404_NOT_FOUND,
    DateRangeUnavailableError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidWebhookPayloadError: status.HTTP_400_BAD_REQUEST,
    PaymentProviderError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# DateRangeUnavailable and ConcurrencyConflict look the same to callers.
def _public_code(exc: DomainError) -> str:
    if isinstance(exc, DateRangeUnavailableError):
        return "DATE_RANGE_UNAVAILABLE"
    return exc.code


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "Domain error",
            exc_info=exc,
            extra={"code": exc.code, "path": request.url.path},
        )
    else:
        logger.info(
            "Request rejected",
            extra={"code": exc.code, "path": request.url.path, "status_code": status_code},
        )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": _public_code(exc)},
        headers=headers,
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Logs unhandled exceptions and returns a generic error without exposing
    internal details to the client.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. "
            "Please contact support with the error_id if the issue persists.",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
