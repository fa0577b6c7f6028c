"""
Error responses at the request dispatch boundary.

Services raise domain and repository exceptions; the handlers registered
here log each failure and turn it into a JSON error response of the form
``{"detail": <message>, "error": <DomainError.to_dict()>}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jobcost.core.exceptions import (
    BusinessRuleViolation,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)
from jobcost.core.observability import get_logger
from jobcost.infrastructure.database.repositories import (
    EntityAlreadyExistsError,
    EntityInUseError,
)

logger = get_logger(__name__)

# First match wins; anything else is a server-side failure.
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (BusinessRuleViolation, status.HTTP_409_CONFLICT),
    (EntityAlreadyExistsError, status.HTTP_409_CONFLICT),
    (EntityInUseError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request error",
        operation=f"{request.method} {request.url.path}",
        error_type=type(exc).__name__,
        error=exc.message,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.to_dict()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
