"""Portfolio stat counters."""
from __future__ import annotations

from typing import Dict

from sqlalchemy.orm import Session

from portfolio.db import models
from portfolio.db.results import Result
from portfolio.db.retry import with_retry
from portfolio.db.store import StoreClient

from .base import capture, execute

TOTAL_CONNECTIONS = "total_connections"


async def get_portfolio_stats(store: StoreClient) -> Result[Dict[str, int]]:
    def _work(db: Session):
        rows = db.query(models.PortfolioStat).order_by(models.PortfolioStat.metric_name.asc()).all()
        return {row.metric_name: row.metric_value for row in rows}

    return await execute(store, "fetch portfolio stats", _work)


async def increment_stat(store: StoreClient, metric_name: str, increment_by: int = 1) -> Result[int]:
    """Increment a counter through the store's `increment_stat` procedure; returns the new value."""
    return await capture(
        "increment stat",
        with_retry(
            lambda: store.rpc("increment_stat", metric_name=metric_name, increment_by=increment_by),
            store.retry_policy,
        ),
    )
