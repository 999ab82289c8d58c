from fastapi import HTTPException

from app.errors import (
    AuthError,
    Conflict,
    InvalidCredentials,
    NotConfigured,
    NotFound,
    Result,
    ServiceError,
    TransportError,
    Unauthorized,
    ValidationError,
)

# Most specific first: NotConfigured is a TransportError.
STATUS_BY_ERROR = (
    (NotFound, 404),
    (Conflict, 409),
    (ValidationError, 400),
    (InvalidCredentials, 401),
    (AuthError, 401),
    (Unauthorized, 403),
    (NotConfigured, 503),
    (TransportError, 502),
)


def status_for(error: ServiceError) -> int:
    for kind, status in STATUS_BY_ERROR:
        if isinstance(error, kind):
            return status
    return 500


def unwrap(result: Result):
    """Return ``result.data`` or raise the HTTP error matching ``result.error``."""
    if result.error is not None:
        raise HTTPException(status_code=status_for(result.error), detail=result.error.message)
    return result.data
