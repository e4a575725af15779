"""Interface layer errors and the domain error -> HTTP mapping."""

import logfire
from fastapi import HTTPException, status

from hotdeals.domain.error import (
    BusinessRuleViolationError,
    DeadlineExceededError,
    DomainError,
    DuplicateError,
    MissingParentError,
    NotAuthorizedError,
    NotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)
from hotdeals.util.error import LockTimeoutError

# Seconds a client should wait before retrying a lock timeout
RETRY_AFTER_SECONDS = 1


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MissingCallerError(InterfaceError):
    """Caller identity header absent or malformed."""

    pass


def http_error(error: Exception, action: str) -> HTTPException:
    """Translate an error raised below the interface into an HTTPException.

    Args:
        error: Error raised by a use case
        action: Short description of the failed action, for logs

    Returns:
        HTTPException to raise from the route
    """
    detail = str(error)

    if isinstance(error, MissingCallerError):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, DuplicateError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(
        error, (ValidationError, UnresolvedReferenceError, MissingParentError)
    ):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(error, BusinessRuleViolationError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(error, NotAuthorizedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, DeadlineExceededError):
        code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(error, LockTimeoutError):
        logfire.warn(f"{action}: lock timeout", error=detail)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )
    elif isinstance(error, ValueError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(error, DomainError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        logfire.error(f"Unexpected error: {action}", error=detail)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}",
        )

    logfire.warn(f"{action} failed", error=detail, status_code=code)
    return HTTPException(status_code=code, detail=detail)
