"""
Store error taxonomy.

Driver exceptions raised by SQLAlchemy are translated into `StoreError`
instances carrying an `ErrorKind`, so that the retry wrapper can tell
transient failures from permanent ones and callers never handle raw
database errors.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from sqlalchemy import exc as sa_exc


class ErrorKind(str, Enum):
    TRANSIENT = "transient"
    TIMEOUT = "timeout"
    CONSTRAINT = "constraint"
    VALIDATION = "validation"
    REFERENTIAL = "referential"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


TRANSIENT_KINDS = frozenset({ErrorKind.TRANSIENT, ErrorKind.TIMEOUT})


class StoreError(Exception):
    """Failure reported by the store or raised by a repository rule."""

    def __init__(self, kind: ErrorKind, detail: str, *, cause: Optional[BaseException] = None) -> None:
        self.kind = ErrorKind(kind)
        self.detail = detail
        super().__init__(detail)
        if cause is not None:
            self.__cause__ = cause

    @property
    def transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, detail={self.detail!r})"


def _driver_message(exc: BaseException) -> str:
    # DBAPIError carries the driver's own message on `orig`
    orig = getattr(exc, "orig", None)
    if orig is not None and str(orig):
        return str(orig)
    return str(exc) or exc.__class__.__name__


def classify_exception(exc: BaseException) -> ErrorKind:
    """Map a driver/network exception to an ErrorKind."""
    if isinstance(exc, StoreError):
        return exc.kind
    if isinstance(exc, sa_exc.IntegrityError):
        return ErrorKind.CONSTRAINT
    if isinstance(
        exc,
        (
            sa_exc.OperationalError,
            sa_exc.InterfaceError,
            sa_exc.DisconnectionError,
            sa_exc.TimeoutError,
        ),
    ):
        return ErrorKind.TRANSIENT
    if isinstance(exc, (sa_exc.DataError, sa_exc.ProgrammingError)):
        return ErrorKind.VALIDATION
    if isinstance(exc, (ConnectionError, OSError)):
        return ErrorKind.TRANSIENT
    return ErrorKind.UNKNOWN


def translate_exception(exc: BaseException) -> StoreError:
    """Wrap `exc` in a StoreError unless it already is one."""
    if isinstance(exc, StoreError):
        return exc
    return StoreError(classify_exception(exc), _driver_message(exc), cause=exc)


__all__ = [
    "ErrorKind",
    "StoreError",
    "TRANSIENT_KINDS",
    "classify_exception",
    "translate_exception",
]
