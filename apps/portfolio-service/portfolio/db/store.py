"""
Store client: the handle every repository function receives.

Wraps an async SQLAlchemy engine. Work is expressed as plain synchronous
ORM code operating on a `Session` and executed inside a single transaction
through `AsyncSession.run_sync`, so repository functions read like regular
SQLAlchemy query code while the I/O stays non-blocking.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from sqlalchemy import event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session

from portfolio.db import models
from portfolio.db.errors import ErrorKind, StoreError, translate_exception
from portfolio.db.retry import DEFAULT_RETRY_POLICY, RetryPolicy, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")

Procedure = Callable[..., Any]

_ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}
_SYNC_DRIVERS = {
    "postgresql": "postgresql+psycopg2",
    "postgres": "postgresql+psycopg2",
    "sqlite": "sqlite+pysqlite",
}


def to_async_url(url: str) -> str:
    """Return `url` with the async driver for its backend."""
    u = make_url(url)
    backend = u.get_backend_name()
    target = _ASYNC_DRIVERS.get(backend)
    if target is None or u.drivername == target:
        return u.render_as_string(hide_password=False)
    return u.set(drivername=target).render_as_string(hide_password=False)


def to_sync_url(url: str) -> str:
    """Return `url` with the blocking driver for its backend (used by migrations)."""
    u = make_url(url)
    target = _SYNC_DRIVERS.get(u.get_backend_name())
    if target is None:
        return u.render_as_string(hide_password=False)
    return u.set(drivername=target).render_as_string(hide_password=False)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


_UPSERT_BUILDERS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def increment_stat(db: Session, metric_name: str, increment_by: int = 1) -> int:
    """Atomically add `increment_by` to a stat row, creating it when absent.

    Single INSERT .. ON CONFLICT DO UPDATE statement, so concurrent first
    increments of the same metric cannot race each other into a duplicate key.
    """
    dialect = db.get_bind().dialect.name
    build_insert = _UPSERT_BUILDERS.get(dialect)
    if build_insert is None:
        raise StoreError(ErrorKind.UNKNOWN, f"increment_stat is not supported on {dialect}")
    now = models.now_utc()
    stmt = build_insert(models.PortfolioStat).values(
        metric_name=metric_name,
        metric_value=increment_by,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[models.PortfolioStat.metric_name],
        set_={
            "metric_value": models.PortfolioStat.metric_value + increment_by,
            "updated_at": now,
        },
    ).returning(models.PortfolioStat.metric_value)
    return db.execute(stmt).scalar_one()



DEFAULT_PROCEDURES: Dict[str, Procedure] = {
    "increment_stat": increment_stat,
}


class StoreClient:
    """Configured handle to the relational store."""

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        procedures: Optional[Dict[str, Procedure]] = None,
    ) -> None:
        self.engine = engine
        self.retry_policy = retry_policy or DEFAULT_RETRY_POLICY
        self._session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        self._procedures: Dict[str, Procedure] = dict(DEFAULT_PROCEDURES)
        if procedures:
            self._procedures.update(procedures)
        if engine.dialect.name == "sqlite" and not event.contains(
            engine.sync_engine, "connect", _enable_sqlite_foreign_keys
        ):
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    @classmethod
    def from_url(cls, url: str, *, retry_policy: Optional[RetryPolicy] = None, **engine_kwargs) -> "StoreClient":
        engine = create_async_engine(to_async_url(url), **engine_kwargs)
        return cls(engine, retry_policy=retry_policy)

    async def transaction(self, work: Callable[[Session], T], *, label: Optional[str] = None) -> T:
        """Run `work(session)` in one transaction; commit on success, roll back on error."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await session.run_sync(work)
        except StoreError as exc:
            logger.debug("store_work_rejected label=%s kind=%s", label, exc.kind.value)
            raise
        except (SQLAlchemyError, OSError) as exc:
            error = translate_exception(exc)
            logger.debug("store_call_failed label=%s kind=%s detail=%s", label, error.kind.value, error.detail)
            raise error from exc

    async def run(self, work: Callable[[Session], T], *, label: Optional[str] = None) -> T:
        """`transaction` under the client's retry policy."""
        return await with_retry(lambda: self.transaction(work, label=label), self.retry_policy)

    async def rpc(self, name: str, **params: Any) -> Any:
        procedure = self._procedures.get(name)
        if procedure is None:
            raise StoreError(ErrorKind.VALIDATION, f"Unknown procedure {name!r}")
        return await self.transaction(lambda db: procedure(db, **params), label=f"rpc:{name}")

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(models.Base.metadata.create_all)

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(models.Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = [
    "DEFAULT_PROCEDURES",
    "StoreClient",
    "increment_stat",
    "to_async_url",
    "to_sync_url",
]
