"""
Technology repository functions.

CRUD for the technology catalogue plus the helpers projects and experiences
use to resolve their linked technologies.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.results import Result
from portfolio.db.store import StoreClient

from .base import RowMissing, execute, get_or_missing

DEFAULT_CATEGORY = "Other"


def linked_technologies(db: Session, join_model, owner_column, owner_id: str) -> List[schemas.Technology]:
    """Technologies linked to one owner row through `join_model`, by name."""
    rows = (
        db.query(models.Technology)
        .join(join_model, join_model.technology_id == models.Technology.id)
        .filter(owner_column == owner_id)
        .order_by(models.Technology.name.asc(), models.Technology.id.asc())
        .all()
    )
    return [schemas.Technology.model_validate(row) for row in rows]


def require_technologies(db: Session, technology_ids: Sequence[str]) -> List[str]:
    """Return `technology_ids` deduplicated, raising REFERENTIAL for unknown ids."""
    wanted = list(dict.fromkeys(technology_ids))
    if not wanted:
        return []
    found = {
        row[0]
        for row in db.query(models.Technology.id).filter(models.Technology.id.in_(wanted)).all()
    }
    unknown = [tech_id for tech_id in wanted if tech_id not in found]
    if unknown:
        raise StoreError(ErrorKind.REFERENTIAL, f"unknown technology ids: {', '.join(unknown)}")
    return wanted


def group_by_category(technologies: Sequence[schemas.Technology]) -> List[schemas.TechnologyCategory]:
    """Group technologies by category; uncategorised ones land in "Other"."""
    groups: Dict[str, List[schemas.Technology]] = {}
    for tech in technologies:
        groups.setdefault(tech.category or DEFAULT_CATEGORY, []).append(tech)
    return [
        schemas.TechnologyCategory(
            category=category,
            technologies=sorted(items, key=lambda t: (t.name.lower(), t.id)),
        )
        for category, items in sorted(groups.items(), key=lambda kv: kv[0].lower())
    ]


async def list_technologies(store: StoreClient) -> Result[List[schemas.Technology]]:
    def _work(db: Session):
        rows = db.query(models.Technology).order_by(models.Technology.name.asc(), models.Technology.id.asc()).all()
        return [schemas.Technology.model_validate(row) for row in rows]

    return await execute(store, "fetch technologies", _work)


async def list_technologies_by_category(store: StoreClient) -> Result[List[schemas.TechnologyCategory]]:
    def _work(db: Session):
        rows = db.query(models.Technology).all()
        return group_by_category([schemas.Technology.model_validate(row) for row in rows])

    return await execute(store, "fetch technologies by category", _work)


async def get_technology(store: StoreClient, technology_id: str) -> Result[schemas.Technology]:
    def _work(db: Session):
        row = get_or_missing(db, models.Technology, "Technology", technology_id)
        return schemas.Technology.model_validate(row)

    return await execute(store, "fetch technology", _work)


async def create_technology(store: StoreClient, technology: schemas.TechnologyCreate) -> Result[schemas.Technology]:
    def _work(db: Session):
        db_technology = models.Technology(**technology.model_dump())
        db.add(db_technology)
        db.flush()
        return schemas.Technology.model_validate(db_technology)

    return await execute(store, "create technology", _work)


async def update_technology(
    store: StoreClient, technology_id: str, technology: schemas.TechnologyUpdate
) -> Result[schemas.Technology]:
    def _work(db: Session):
        db_technology = get_or_missing(db, models.Technology, "Technology", technology_id)
        for key, value in technology.model_dump(exclude_unset=True).items():
            if key == "name" and value is None:
                continue
            setattr(db_technology, key, value)
        db.flush()
        return schemas.Technology.model_validate(db_technology)

    return await execute(store, "update technology", _work)


async def delete_technology(store: StoreClient, technology_id: str) -> Result[None]:
    """Delete a technology and every link pointing at it."""
    def _work(db: Session):
        db_technology = db.get(models.Technology, technology_id)
        if db_technology is None:
            raise RowMissing("Technology", technology_id)
        db.query(models.ProjectTechnology).filter(
            models.ProjectTechnology.technology_id == technology_id
        ).delete(synchronize_session=False)
        db.query(models.ExperienceTechnology).filter(
            models.ExperienceTechnology.technology_id == technology_id
        ).delete(synchronize_session=False)
        db.delete(db_technology)
        db.flush()

    return await execute(store, "delete technology", _work)
