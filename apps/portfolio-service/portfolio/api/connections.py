"""
Connections API endpoints.

The contact form is public; the inbox (listing, status changes, replies,
deletion) is admin only.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portfolio.api.deps import get_store, require_admin, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import connections as connection_repo
from portfolio.db.store import StoreClient
from portfolio.utils.statuses import InboxStatusEnum

router = APIRouter(prefix="/connections", tags=["connections"])


@router.post("", response_model=schemas.Connection, status_code=status.HTTP_201_CREATED)
async def submit_contact_form_endpoint(
    form: schemas.ConnectionCreate,
    store: StoreClient = Depends(get_store),
):
    return unwrap(await connection_repo.submit_contact_form(store, form))


@router.get("", response_model=List[schemas.Connection])
async def list_connections_endpoint(
    status_filter: Optional[InboxStatusEnum] = Query(default=None, alias="status"),
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await connection_repo.list_connections(store, status=status_filter))


@router.get("/{connection_id}", response_model=schemas.Connection)
async def get_connection_endpoint(
    connection_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await connection_repo.get_connection(store, connection_id))


@router.post("/{connection_id}/read", response_model=schemas.Connection)
async def mark_connection_read_endpoint(
    connection_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await connection_repo.mark_connection_read(store, connection_id))


@router.put("/{connection_id}/status", response_model=schemas.Connection)
async def update_connection_status_endpoint(
    connection_id: str,
    payload: schemas.InboxStatusUpdate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await connection_repo.update_connection_status(store, connection_id, payload.status))


@router.post("/{connection_id}/reply", response_model=schemas.Connection)
async def reply_to_connection_endpoint(
    connection_id: str,
    payload: schemas.ReplyCreate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await connection_repo.reply_to_connection(store, connection_id, payload.message))


@router.delete("/{connection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_connection_endpoint(
    connection_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    unwrap(await connection_repo.delete_connection(store, connection_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
