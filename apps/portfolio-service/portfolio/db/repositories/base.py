"""
Shared plumbing for repository functions.

Turns store work into `Result` values: `RowMissing` raised inside the work
becomes `NotFound`, a `StoreError` becomes `Err` (logged once here), and
anything else is a bug and propagates.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.results import Err, NotFound, Ok, Result
from portfolio.db.store import StoreClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M")


class RowMissing(Exception):
    """Raised inside store work when the addressed row does not exist."""

    def __init__(self, entity: str, entity_id: Optional[str] = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


def get_or_missing(db: Session, model: Type[M], entity: str, entity_id: str) -> M:
    row = db.get(model, entity_id)
    if row is None:
        raise RowMissing(entity, entity_id)
    return row


def rejected(action: str, kind: ErrorKind, detail: str) -> Err:
    """Build an Err for input refused before touching the store."""
    logger.warning("store_result_failed action=%s kind=%s detail=%s", action, kind.value, detail)
    return Err(StoreError(kind, detail), action)


async def capture(action: str, pending: Awaitable[T]) -> Result[T]:
    try:
        value = await pending
    except RowMissing as missing:
        return NotFound(missing.entity, missing.entity_id)
    except StoreError as exc:
        logger.warning("store_result_failed action=%s kind=%s detail=%s", action, exc.kind.value, exc.detail)
        return Err(exc, action)
    return Ok(value)


async def execute(store: StoreClient, action: str, work: Callable[[Session], T]) -> Result[T]:
    """Run `work` through the store's retry policy and wrap the outcome."""
    return await capture(action, store.run(work, label=action))


async def fan_out(pending: Iterable[Awaitable[T]]) -> List[T]:
    """Await `pending` concurrently and return results in order.

    The first failure cancels the remaining tasks before it is re-raised, so
    no store call outlives the caller.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(awaitable) for awaitable in pending]
    except ExceptionGroup as failed:
        raise failed.exceptions[0]
    return [task.result() for task in tasks]
