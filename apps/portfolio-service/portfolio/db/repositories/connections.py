"""
Connection (contact form) repository functions.

Status workflow: new submissions are `unread`; opening one moves it to
`read`; replying records the message and sets `replied` in one update.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind
from portfolio.db.results import Ok, Result
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import (
    INBOX_STATUSES,
    MANUAL_INBOX_STATUSES,
    STATUS_READ,
    STATUS_REPLIED,
    STATUS_UNREAD,
    status_value,
)

from . import stats
from .base import execute, get_or_missing, rejected

logger = logging.getLogger(__name__)


async def submit_contact_form(store: StoreClient, form: schemas.ConnectionCreate) -> Result[schemas.Connection]:
    """Store a contact submission as `unread` and bump the connections counter.

    The counter is best effort: a failed increment is logged and the
    submission still succeeds.
    """
    def _work(db: Session):
        db_connection = models.Connection(**form.model_dump(), status=STATUS_UNREAD)
        db.add(db_connection)
        db.flush()
        return schemas.Connection.model_validate(db_connection)

    result = await execute(store, "submit contact form", _work)
    if isinstance(result, Ok):
        counted = await stats.increment_stat(store, stats.TOTAL_CONNECTIONS, 1)
        if not isinstance(counted, Ok):
            logger.warning(
                "stat_increment_failed metric=%s connection_id=%s", stats.TOTAL_CONNECTIONS, result.value.id
            )
    return result


async def list_connections(store: StoreClient, *, status=None) -> Result[List[schemas.Connection]]:
    """Connections newest first, optionally filtered by status."""
    action = "fetch connections"
    status = status_value(status)
    if status is not None and status not in INBOX_STATUSES:
        return rejected(action, ErrorKind.VALIDATION, f"unknown status {status!r}")

    def _work(db: Session):
        q = db.query(models.Connection)
        if status is not None:
            q = q.filter(models.Connection.status == status)
        rows = q.order_by(models.Connection.created_at.desc(), models.Connection.id.asc()).all()
        return [schemas.Connection.model_validate(row) for row in rows]

    return await execute(store, action, _work)


async def get_connection(store: StoreClient, connection_id: str) -> Result[schemas.Connection]:
    def _work(db: Session):
        return schemas.Connection.model_validate(get_or_missing(db, models.Connection, "Connection", connection_id))

    return await execute(store, "fetch connection", _work)


async def mark_connection_read(store: StoreClient, connection_id: str) -> Result[schemas.Connection]:
    """unread -> read; read or replied connections are returned unchanged."""
    def _work(db: Session):
        db_connection = get_or_missing(db, models.Connection, "Connection", connection_id)
        if db_connection.status == STATUS_UNREAD:
            db_connection.status = STATUS_READ
            db_connection.updated_at = models.now_utc()
            db.flush()
        return schemas.Connection.model_validate(db_connection)

    return await execute(store, "mark connection as read", _work)


async def update_connection_status(store: StoreClient, connection_id: str, status) -> Result[schemas.Connection]:
    action = "update connection status"
    status = status_value(status)
    if status == STATUS_REPLIED:
        return rejected(action, ErrorKind.VALIDATION, "status 'replied' can only be set by sending a reply")
    if status not in MANUAL_INBOX_STATUSES:
        return rejected(action, ErrorKind.VALIDATION, f"unknown status {status!r}")

    def _work(db: Session):
        db_connection = get_or_missing(db, models.Connection, "Connection", connection_id)
        if db_connection.status != status:
            db_connection.status = status
            db_connection.updated_at = models.now_utc()
            db.flush()
        return schemas.Connection.model_validate(db_connection)

    return await execute(store, action, _work)


async def reply_to_connection(store: StoreClient, connection_id: str, message: str) -> Result[schemas.Connection]:
    action = "reply to connection"
    if not message or not message.strip():
        return rejected(action, ErrorKind.VALIDATION, "reply message must not be empty")

    def _work(db: Session):
        db_connection = get_or_missing(db, models.Connection, "Connection", connection_id)
        db_connection.reply_message = message
        db_connection.status = STATUS_REPLIED
        db_connection.updated_at = models.now_utc()
        db.flush()
        return schemas.Connection.model_validate(db_connection)

    return await execute(store, action, _work)


async def delete_connection(store: StoreClient, connection_id: str) -> Result[None]:
    """Delete a connection; feedback linked to it keeps its row and loses the link."""
    def _work(db: Session):
        db_connection = get_or_missing(db, models.Connection, "Connection", connection_id)
        db.query(models.Feedback).filter(models.Feedback.connection_id == connection_id).update(
            {models.Feedback.connection_id: None}, synchronize_session=False
        )
        db.delete(db_connection)
        db.flush()

    return await execute(store, "delete connection", _work)
