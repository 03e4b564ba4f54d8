"""
Reviews API endpoints.

Anyone may submit a review and read approved ones; moderation is admin only.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portfolio.api.deps import get_store, require_admin, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import reviews as review_repo
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import ReviewStatusEnum

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/approved", response_model=List[schemas.Review])
async def list_approved_reviews_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await review_repo.list_approved_reviews(store))


@router.post("", response_model=schemas.Review, status_code=status.HTTP_201_CREATED)
async def submit_review_endpoint(review: schemas.ReviewCreate, store: StoreClient = Depends(get_store)):
    return unwrap(await review_repo.submit_review(store, review))


@router.get("", response_model=List[schemas.Review])
async def list_reviews_endpoint(
    status_filter: Optional[ReviewStatusEnum] = Query(default=None, alias="status"),
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await review_repo.list_reviews(store, status=status_filter))


@router.get("/pending", response_model=List[schemas.Review])
async def list_pending_reviews_endpoint(
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await review_repo.list_pending_reviews(store))


@router.get("/{review_id}", response_model=schemas.Review)
async def get_review_endpoint(
    review_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await review_repo.get_review(store, review_id))


@router.post("/{review_id}/approve", response_model=schemas.Review)
async def approve_review_endpoint(
    review_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await review_repo.approve_review(store, review_id))


@router.post("/{review_id}/reject", response_model=schemas.Review)
async def reject_review_endpoint(
    review_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await review_repo.reject_review(store, review_id))


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review_endpoint(
    review_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    unwrap(await review_repo.delete_review(store, review_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
