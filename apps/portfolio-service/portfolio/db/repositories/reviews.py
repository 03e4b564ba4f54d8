"""
Review (testimonial) repository functions.

Moderation workflow: submissions start `pending`; an admin approves or
rejects them. Repeating a transition is a no-op, while moving between
`approved` and `rejected` is a conflict.
"""
from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.results import Result
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import (
    REVIEW_APPROVED,
    REVIEW_PENDING,
    REVIEW_REJECTED,
    REVIEW_STATUSES,
    review_transition_allowed,
    status_value,
)

from .base import execute, get_or_missing, rejected


async def submit_review(store: StoreClient, review: schemas.ReviewCreate) -> Result[schemas.Review]:
    def _work(db: Session):
        db_review = models.Review(**review.model_dump(), status=REVIEW_PENDING)
        db.add(db_review)
        db.flush()
        return schemas.Review.model_validate(db_review)

    return await execute(store, "submit review", _work)


async def list_reviews(store: StoreClient, *, status=None) -> Result[List[schemas.Review]]:
    """Reviews newest first, optionally filtered by status."""
    status = status_value(status)
    action = f"fetch {status} reviews" if status else "fetch reviews"
    if status is not None and status not in REVIEW_STATUSES:
        return rejected(action, ErrorKind.VALIDATION, f"unknown status {status!r}")

    def _work(db: Session):
        q = db.query(models.Review)
        if status is not None:
            q = q.filter(models.Review.status == status)
        rows = q.order_by(models.Review.created_at.desc(), models.Review.id.asc()).all()
        return [schemas.Review.model_validate(row) for row in rows]

    return await execute(store, action, _work)


async def list_pending_reviews(store: StoreClient) -> Result[List[schemas.Review]]:
    return await list_reviews(store, status=REVIEW_PENDING)


async def list_approved_reviews(store: StoreClient) -> Result[List[schemas.Review]]:
    """Public testimonials."""
    return await list_reviews(store, status=REVIEW_APPROVED)


async def get_review(store: StoreClient, review_id: str) -> Result[schemas.Review]:
    def _work(db: Session):
        return schemas.Review.model_validate(get_or_missing(db, models.Review, "Review", review_id))

    return await execute(store, "fetch review", _work)


async def _transition(store: StoreClient, review_id: str, target: str, action: str) -> Result[schemas.Review]:
    def _work(db: Session):
        db_review = get_or_missing(db, models.Review, "Review", review_id)
        if not review_transition_allowed(db_review.status, target):
            raise StoreError(
                ErrorKind.CONFLICT,
                f"review {review_id} is {db_review.status} and cannot become {target}",
            )
        if db_review.status != target:
            db_review.status = target
            db_review.updated_at = models.now_utc()
            db.flush()
        return schemas.Review.model_validate(db_review)

    return await execute(store, action, _work)


async def approve_review(store: StoreClient, review_id: str) -> Result[schemas.Review]:
    return await _transition(store, review_id, REVIEW_APPROVED, "approve review")


async def reject_review(store: StoreClient, review_id: str) -> Result[schemas.Review]:
    return await _transition(store, review_id, REVIEW_REJECTED, "reject review")


async def delete_review(store: StoreClient, review_id: str) -> Result[None]:
    def _work(db: Session):
        db.delete(get_or_missing(db, models.Review, "Review", review_id))
        db.flush()

    return await execute(store, "delete review", _work)
