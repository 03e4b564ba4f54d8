"""Feedback API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portfolio.api.deps import get_store, require_admin, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import feedback as feedback_repo
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import InboxStatusEnum

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=schemas.Feedback, status_code=status.HTTP_201_CREATED)
async def submit_feedback_endpoint(feedback: schemas.FeedbackCreate, store: StoreClient = Depends(get_store)):
    return unwrap(await feedback_repo.submit_feedback(store, feedback))


@router.get("", response_model=List[schemas.Feedback])
async def list_feedback_endpoint(
    status_filter: Optional[InboxStatusEnum] = Query(default=None, alias="status"),
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await feedback_repo.list_feedback(store, status=status_filter))


@router.get("/with-sender", response_model=List[schemas.FeedbackWithSender])
async def list_feedback_with_sender_endpoint(
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await feedback_repo.list_feedback_with_sender(store))


@router.get("/{feedback_id}", response_model=schemas.Feedback)
async def get_feedback_endpoint(
    feedback_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await feedback_repo.get_feedback(store, feedback_id))


@router.put("/{feedback_id}/status", response_model=schemas.Feedback)
async def update_feedback_status_endpoint(
    feedback_id: str,
    payload: schemas.InboxStatusUpdate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await feedback_repo.update_feedback_status(store, feedback_id, payload.status))


@router.post("/{feedback_id}/reply", response_model=schemas.Feedback)
async def reply_to_feedback_endpoint(
    feedback_id: str,
    payload: schemas.ReplyCreate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await feedback_repo.reply_to_feedback(store, feedback_id, payload.message))


@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback_endpoint(
    feedback_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    unwrap(await feedback_repo.delete_feedback(store, feedback_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
