"""
Project repository functions and the project/technology relationship manager.

Technology links live in the `project_technologies` join table. Create,
update and delete touch the project row and its join rows inside one
transaction, so a failure anywhere leaves the store as it was before the
call. List reads enrich each project with its technologies through a
concurrent per-project fan-out.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind
from portfolio.db.results import Result
from portfolio.db.store import StoreClient

from .base import capture, execute, fan_out, get_or_missing, rejected
from .technologies import linked_technologies, require_technologies


class ListOrder(str, Enum):
    SORT_ORDER = "sort_order"  # sort_order asc, then created_at asc
    NEWEST = "newest"  # created_at desc


def _order_clauses(order: ListOrder):
    if order == ListOrder.NEWEST:
        return (models.Project.created_at.desc(), models.Project.id.asc())
    return (models.Project.sort_order.asc(), models.Project.created_at.asc(), models.Project.id.asc())


def _project_technologies(db: Session, project_id: str) -> List[schemas.Technology]:
    return linked_technologies(db, models.ProjectTechnology, models.ProjectTechnology.project_id, project_id)


def _with_technologies(db: Session, db_project: models.Project) -> schemas.Project:
    project = schemas.Project.model_validate(db_project)
    return project.model_copy(update={"technologies": _project_technologies(db, db_project.id)})


def _replace_links(db: Session, project_id: str, technology_ids: Sequence[str]) -> None:
    """Destructive replace: drop every existing link, then insert the new set."""
    wanted = require_technologies(db, technology_ids)
    db.query(models.ProjectTechnology).filter(
        models.ProjectTechnology.project_id == project_id
    ).delete(synchronize_session=False)
    db.add_all(
        [models.ProjectTechnology(project_id=project_id, technology_id=tech_id) for tech_id in wanted]
    )


async def fetch_project_technologies(store: StoreClient, project_id: str) -> List[schemas.Technology]:
    return await store.run(
        lambda db: _project_technologies(db, project_id),
        label="fetch project technologies",
    )


async def list_projects(
    store: StoreClient,
    *,
    featured_only: bool = False,
    order: ListOrder = ListOrder.SORT_ORDER,
) -> Result[List[schemas.Project]]:
    """List projects with their technologies.

    Ordering is explicit: `ListOrder.SORT_ORDER` (default) or `ListOrder.NEWEST`.
    Technologies are fetched per project concurrently; any failure fails the
    whole list.
    """
    action = "fetch featured projects" if featured_only else "fetch projects"
    try:
        order = ListOrder(order)
    except ValueError:
        return rejected(action, ErrorKind.VALIDATION, f"unknown order {order!r}")

    def _work(db: Session):
        q = db.query(models.Project)
        if featured_only:
            q = q.filter(models.Project.is_featured.is_(True))
        return [schemas.Project.model_validate(row) for row in q.order_by(*_order_clauses(order)).all()]

    async def _load():
        projects = await store.run(_work, label=action)
        technologies = await fan_out(fetch_project_technologies(store, project.id) for project in projects)
        return [
            project.model_copy(update={"technologies": techs})
            for project, techs in zip(projects, technologies)
        ]

    return await capture(action, _load())


async def list_featured_projects(
    store: StoreClient, *, order: ListOrder = ListOrder.SORT_ORDER
) -> Result[List[schemas.Project]]:
    return await list_projects(store, featured_only=True, order=order)


async def get_project(store: StoreClient, project_id: str) -> Result[schemas.Project]:
    def _work(db: Session):
        db_project = get_or_missing(db, models.Project, "Project", project_id)
        return _with_technologies(db, db_project)

    return await execute(store, "fetch project", _work)


async def create_project(
    store: StoreClient,
    project: schemas.ProjectCreate,
    technology_ids: Optional[Sequence[str]] = None,
) -> Result[schemas.Project]:
    """Insert a project and one link per distinct technology id.

    Unknown technology ids fail the call with a referential error and no
    project row is left behind.
    """
    def _work(db: Session):
        wanted = require_technologies(db, technology_ids or [])
        db_project = models.Project(**project.model_dump())
        db.add(db_project)
        db.flush()
        db.add_all(
            [models.ProjectTechnology(project_id=db_project.id, technology_id=tech_id) for tech_id in wanted]
        )
        db.flush()
        return _with_technologies(db, db_project)

    return await execute(store, "create project", _work)


async def update_project(
    store: StoreClient,
    project_id: str,
    project: schemas.ProjectUpdate,
    technology_ids: Optional[Sequence[str]] = None,
) -> Result[schemas.Project]:
    """Update the fields set on `project`.

    `technology_ids=None` leaves the links untouched; any list, including an
    empty one, replaces the linked set.
    """
    def _work(db: Session):
        db_project = get_or_missing(db, models.Project, "Project", project_id)
        changes = project.model_dump(exclude_unset=True)
        for key, value in changes.items():
            # nullable=False columns ignore explicit nulls
            if value is None and key in ("title", "description", "is_featured", "sort_order"):
                continue
            setattr(db_project, key, value)
        if technology_ids is not None:
            _replace_links(db, project_id, technology_ids)
        if changes or technology_ids is not None:
            db_project.updated_at = models.now_utc()
        db.flush()
        return _with_technologies(db, db_project)

    return await execute(store, "update project", _work)


async def delete_project(store: StoreClient, project_id: str) -> Result[None]:
    """Delete the join rows, then the project, in one transaction."""
    def _work(db: Session):
        db_project = get_or_missing(db, models.Project, "Project", project_id)
        db.query(models.ProjectTechnology).filter(
            models.ProjectTechnology.project_id == project_id
        ).delete(synchronize_session=False)
        db.delete(db_project)
        db.flush()

    return await execute(store, "delete project", _work)
