"""
Projects API endpoints.

Public listing and detail reads; create/update/delete (with technology
links) for admins.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portfolio.api.deps import get_store, require_admin, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import projects as project_repo
from portfolio.db.repositories.projects import ListOrder
from portfolio.db.store import StoreClient

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectCreateRequest(schemas.ProjectCreate):
    technology_ids: List[str] = []


class ProjectUpdateRequest(schemas.ProjectUpdate):
    # Omitted (or null) leaves links untouched; [] clears them
    technology_ids: Optional[List[str]] = None


@router.get("", response_model=List[schemas.Project])
async def list_projects_endpoint(
    order: ListOrder = Query(default=ListOrder.SORT_ORDER),
    featured: bool = Query(default=False),
    store: StoreClient = Depends(get_store),
):
    return unwrap(await project_repo.list_projects(store, featured_only=featured, order=order))


@router.get("/featured", response_model=List[schemas.Project])
async def list_featured_projects_endpoint(
    order: ListOrder = Query(default=ListOrder.SORT_ORDER),
    store: StoreClient = Depends(get_store),
):
    return unwrap(await project_repo.list_featured_projects(store, order=order))


@router.get("/{project_id}", response_model=schemas.Project)
async def get_project_endpoint(project_id: str, store: StoreClient = Depends(get_store)):
    return unwrap(await project_repo.get_project(store, project_id))


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
async def create_project_endpoint(
    payload: ProjectCreateRequest,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    project = schemas.ProjectCreate(**payload.model_dump(exclude={"technology_ids"}))
    return unwrap(await project_repo.create_project(store, project, payload.technology_ids))


@router.put("/{project_id}", response_model=schemas.Project)
async def update_project_endpoint(
    project_id: str,
    payload: ProjectUpdateRequest,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    changes = schemas.ProjectUpdate(**payload.model_dump(exclude_unset=True, exclude={"technology_ids"}))
    return unwrap(await project_repo.update_project(store, project_id, changes, payload.technology_ids))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_endpoint(
    project_id: str,
    store: StoreClient = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    unwrap(await project_repo.delete_project(store, project_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
