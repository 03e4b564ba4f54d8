"""Technologies API endpoints."""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from portfolio.api.deps import get_store, require_admin, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import technologies as technology_repo
from portfolio.db.store import StoreClient

router = APIRouter(prefix="/technologies", tags=["technologies"])


@router.get("", response_model=List[schemas.Technology])
async def list_technologies_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await technology_repo.list_technologies(store))


@router.get("/by-category", response_model=List[schemas.TechnologyCategory])
async def list_technologies_by_category_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await technology_repo.list_technologies_by_category(store))


@router.get("/{technology_id}", response_model=schemas.Technology)
async def get_technology_endpoint(technology_id: str, store: StoreClient = Depends(get_store)):
    return unwrap(await technology_repo.get_technology(store, technology_id))


@router.post("", response_model=schemas.Technology, status_code=status.HTTP_201_CREATED)
async def create_technology_endpoint(
    technology: schemas.TechnologyCreate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await technology_repo.create_technology(store, technology))


@router.put("/{technology_id}", response_model=schemas.Technology)
async def update_technology_endpoint(
    technology_id: str,
    technology: schemas.TechnologyUpdate,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return unwrap(await technology_repo.update_technology(store, technology_id, technology))


@router.delete("/{technology_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_technology_endpoint(
    technology_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    unwrap(await technology_repo.delete_technology(store, technology_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
