"""
API dependency helpers.

Provides the store handle, the admin gate and the translation of repository
results into HTTP responses.
"""
import logging
from typing import Optional, TypeVar

from fastapi import Header, HTTPException, Request, status

from portfolio.api.auth import DEV_ADMIN_EMAIL, is_admin_email, resolve_email_from_headers
from portfolio.config import get_settings
from portfolio.db.errors import ErrorKind
from portfolio.db.results import Err, NotFound, Ok, Result
from portfolio.db.store import StoreClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

_KIND_TO_STATUS = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.REFERENTIAL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONSTRAINT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_store(request: Request) -> StoreClient:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store not initialised")
    return store


def require_admin(
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> str:
    """Return the admin's email or raise 401/403."""
    settings = get_settings()
    if settings.dev_mode:
        return DEV_ADMIN_EMAIL
    email = resolve_email_from_headers(x_auth_request_email, x_forwarded_email)
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    if not is_admin_email(email, settings.admin_emails):
        logger.info("admin_access_denied email=%s", email)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return email


def status_for_error(result: Err) -> int:
    return _KIND_TO_STATUS.get(result.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def unwrap(result: Result[T]) -> T:
    """Return the Ok payload, raising HTTPException for NotFound and Err."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    if isinstance(result, Err):
        raise HTTPException(status_code=status_for_error(result), detail=result.message)
    raise TypeError(f"Unexpected result type: {type(result)!r}")
