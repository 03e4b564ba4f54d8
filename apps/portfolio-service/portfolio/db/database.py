"""
Store construction from environment configuration.

The application builds one `StoreClient` at startup (see
`portfolio.api.main`) and hands it to the repositories; nothing here is a
module-level singleton.
"""
import logging
from typing import Optional

from sqlalchemy.engine import make_url

from portfolio.config import Settings, get_settings
from portfolio.db.retry import RetryPolicy
from portfolio.db.store import StoreClient

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    # Drop dead pooled connections before handing them out
    return {"pool_pre_ping": True}


def build_store(settings: Optional[Settings] = None, *, database_url: Optional[str] = None) -> StoreClient:
    """Create a StoreClient from settings (DATABASE_URL / POSTGRES_* and STORE_RETRY_*)."""
    settings = settings or get_settings()
    url = database_url or settings.database_url
    policy = RetryPolicy.from_settings(settings)
    store = StoreClient.from_url(url, retry_policy=policy, **_engine_kwargs(url))
    logger.info(
        "store_configured backend=%s attempts=%s delay=%s backoff=%s timeout=%s",
        store.engine.dialect.name,
        policy.attempts,
        policy.delay,
        policy.backoff,
        policy.timeout,
    )
    return store
