"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from huddle.domain.error import (
    DomainError,
    DuplicateRequestError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PartialFailureError,
    UnauthenticatedError,
    ValidationError,
)


# Most specific first; DomainError catches the rest
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateRequestError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (PartialFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as a JSON error response."""
    code = status_code_for(exc)
    if code >= 500:
        logfire.error(
            "Request failed part way",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            status_code=code,
            error=str(exc),
            error_type=type(exc).__name__,
        )

    body = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, PartialFailureError):
        body["step"] = exc.step
    return JSONResponse(status_code=code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on an app."""
    app.add_exception_handler(DomainError, domain_error_handler)
