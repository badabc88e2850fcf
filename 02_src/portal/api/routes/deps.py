"""Shared route dependencies and error translation."""

from fastapi import Header, HTTPException

from ...errors import (
    ApiUnavailableError,
    InvalidFilterError,
    InvalidSessionError,
    MalformedInputError,
    NotFoundError,
    PayloadTooLargeError,
    PermissionDeniedError,
    PortalError,
    RecordsApiError,
    SessionExpiredError,
    ValidationError,
)
from ...logging_config import get_logger
from ...models import Session
from ...session import session_from_header

logger = get_logger(__name__)


def get_session(authorization: str | None = Header(None)) -> Session:
    """Resolve the caller's session from the Authorization header."""
    try:
        return session_from_header(authorization)
    except InvalidSessionError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def to_http_error(error: PortalError) -> HTTPException:
    """Translate a portal error into the matching HTTP response."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=error.errors)
    if isinstance(error, InvalidFilterError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, (InvalidSessionError, SessionExpiredError)):
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, PayloadTooLargeError):
        return HTTPException(status_code=413, detail=str(error))
    if isinstance(error, ApiUnavailableError):
        return HTTPException(status_code=503, detail=str(error))
    if isinstance(error, (RecordsApiError, MalformedInputError)):
        logger.error("Upstream failure: %s", error)
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
