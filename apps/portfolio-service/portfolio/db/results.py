"""
Typed results returned by every repository function.

`Ok` carries the payload, `NotFound` reports a missing row (a success path,
not an error) and `Err` carries the StoreError together with the action
that failed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from portfolio.db.errors import ErrorKind, StoreError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    entity: str
    id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def message(self) -> str:
        if self.id is None:
            return f"{self.entity} not found"
        return f"{self.entity} {self.id} not found"


@dataclass(frozen=True)
class Err:
    error: StoreError
    action: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return f"Failed to {self.action}: {self.error.detail}"


Result = Union[Ok[T], NotFound, Err]


__all__ = ["Ok", "NotFound", "Err", "Result"]
