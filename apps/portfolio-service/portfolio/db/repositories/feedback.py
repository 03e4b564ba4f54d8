"""
Feedback repository functions.

Feedback shares the connection inbox statuses (`unread`, `read`,
`replied`); `replied` is only reachable by attaching a reply message.
"""
from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.results import Result
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import (
    INBOX_STATUSES,
    MANUAL_INBOX_STATUSES,
    STATUS_REPLIED,
    STATUS_UNREAD,
    status_value,
)

from .base import execute, get_or_missing, rejected


async def submit_feedback(store: StoreClient, feedback: schemas.FeedbackCreate) -> Result[schemas.Feedback]:
    def _work(db: Session):
        if feedback.connection_id is not None and db.get(models.Connection, feedback.connection_id) is None:
            raise StoreError(ErrorKind.REFERENTIAL, f"unknown connection id: {feedback.connection_id}")
        db_feedback = models.Feedback(**feedback.model_dump(mode="json"), status=STATUS_UNREAD)
        db.add(db_feedback)
        db.flush()
        return schemas.Feedback.model_validate(db_feedback)

    return await execute(store, "submit feedback", _work)


async def list_feedback(store: StoreClient, *, status=None) -> Result[List[schemas.Feedback]]:
    """Feedback newest first, optionally filtered by status."""
    action = "fetch feedback"
    status = status_value(status)
    if status is not None and status not in INBOX_STATUSES:
        return rejected(action, ErrorKind.VALIDATION, f"unknown status {status!r}")

    def _work(db: Session):
        q = db.query(models.Feedback)
        if status is not None:
            q = q.filter(models.Feedback.status == status)
        rows = q.order_by(models.Feedback.created_at.desc(), models.Feedback.id.asc()).all()
        return [schemas.Feedback.model_validate(row) for row in rows]

    return await execute(store, action, _work)


async def list_feedback_with_sender(store: StoreClient) -> Result[List[schemas.FeedbackWithSender]]:
    """Feedback newest first, each with the linked connection's sender details (or None)."""
    def _work(db: Session):
        rows = (
            db.query(models.Feedback, models.Connection)
            .outerjoin(models.Connection, models.Connection.id == models.Feedback.connection_id)
            .order_by(models.Feedback.created_at.desc(), models.Feedback.id.asc())
            .all()
        )
        items = []
        for db_feedback, db_connection in rows:
            sender = schemas.FeedbackSender.model_validate(db_connection) if db_connection is not None else None
            item = schemas.FeedbackWithSender.model_validate(db_feedback)
            items.append(item.model_copy(update={"sender": sender}))
        return items

    return await execute(store, "fetch feedback with sender", _work)


async def get_feedback(store: StoreClient, feedback_id: str) -> Result[schemas.Feedback]:
    def _work(db: Session):
        return schemas.Feedback.model_validate(get_or_missing(db, models.Feedback, "Feedback", feedback_id))

    return await execute(store, "fetch feedback item", _work)


async def update_feedback_status(store: StoreClient, feedback_id: str, status) -> Result[schemas.Feedback]:
    action = "update feedback status"
    status = status_value(status)
    if status == STATUS_REPLIED:
        return rejected(action, ErrorKind.VALIDATION, "status 'replied' can only be set by sending a reply")
    if status not in MANUAL_INBOX_STATUSES:
        return rejected(action, ErrorKind.VALIDATION, f"unknown status {status!r}")

    def _work(db: Session):
        db_feedback = get_or_missing(db, models.Feedback, "Feedback", feedback_id)
        if db_feedback.status != status:
            db_feedback.status = status
            db_feedback.updated_at = models.now_utc()
            db.flush()
        return schemas.Feedback.model_validate(db_feedback)

    return await execute(store, action, _work)


async def reply_to_feedback(store: StoreClient, feedback_id: str, message: str) -> Result[schemas.Feedback]:
    action = "reply to feedback"
    if not message or not message.strip():
        return rejected(action, ErrorKind.VALIDATION, "reply message must not be empty")

    def _work(db: Session):
        db_feedback = get_or_missing(db, models.Feedback, "Feedback", feedback_id)
        db_feedback.reply_message = message
        db_feedback.status = STATUS_REPLIED
        db_feedback.updated_at = models.now_utc()
        db.flush()
        return schemas.Feedback.model_validate(db_feedback)

    return await execute(store, action, _work)


async def delete_feedback(store: StoreClient, feedback_id: str) -> Result[None]:
    def _work(db: Session):
        db.delete(get_or_missing(db, models.Feedback, "Feedback", feedback_id))
        db.flush()

    return await execute(store, "delete feedback", _work)
