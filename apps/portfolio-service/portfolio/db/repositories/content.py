"""
Read-only public content: profile, experience, education, certifications
and fun facts.
"""
from __future__ import annotations

from typing import Dict, List

from sqlalchemy.orm import Session

from portfolio.db import models, schemas
from portfolio.db.results import Result
from portfolio.db.store import StoreClient

from .base import RowMissing, capture, execute, fan_out
from .technologies import linked_technologies


async def get_profile(store: StoreClient) -> Result[schemas.Profile]:
    def _work(db: Session):
        db_profile = db.query(models.Profile).order_by(models.Profile.created_at.asc()).first()
        if db_profile is None:
            raise RowMissing("Profile")
        return schemas.Profile.model_validate(db_profile)

    return await execute(store, "fetch profile", _work)


async def _experience_technologies(store: StoreClient, experience_id: str) -> List[schemas.Technology]:
    return await store.run(
        lambda db: linked_technologies(
            db, models.ExperienceTechnology, models.ExperienceTechnology.experience_id, experience_id
        ),
        label="fetch experience technologies",
    )


async def list_experiences(store: StoreClient) -> Result[List[schemas.Experience]]:
    """Experiences by sort_order, each with its technologies (fetched concurrently)."""
    action = "fetch experiences"

    def _work(db: Session):
        rows = (
            db.query(models.Experience)
            .order_by(models.Experience.sort_order.asc(), models.Experience.created_at.asc())
            .all()
        )
        return [schemas.Experience.model_validate(row) for row in rows]

    async def _load():
        experiences = await store.run(_work, label=action)
        technologies = await fan_out(_experience_technologies(store, e.id) for e in experiences)
        return [e.model_copy(update={"technologies": t}) for e, t in zip(experiences, technologies)]

    return await capture(action, _load())


async def list_education(store: StoreClient) -> Result[List[schemas.Education]]:
    def _work(db: Session):
        rows = (
            db.query(models.Education)
            .order_by(models.Education.sort_order.asc(), models.Education.created_at.asc())
            .all()
        )
        return [schemas.Education.model_validate(row) for row in rows]

    return await execute(store, "fetch education", _work)


async def list_certifications(store: StoreClient) -> Result[List[schemas.Certification]]:
    """Active certifications by sort_order."""
    def _work(db: Session):
        rows = (
            db.query(models.Certification)
            .filter(models.Certification.is_active.is_(True))
            .order_by(models.Certification.sort_order.asc(), models.Certification.created_at.asc())
            .all()
        )
        return [schemas.Certification.model_validate(row) for row in rows]

    return await execute(store, "fetch certifications", _work)


async def list_fun_facts_by_category(store: StoreClient) -> Result[List[schemas.FunFactCategory]]:
    """Fun facts grouped by category (categories alphabetical, items by sort_order)."""
    def _work(db: Session):
        rows = (
            db.query(models.FunFact)
            .order_by(models.FunFact.category.asc(), models.FunFact.sort_order.asc(), models.FunFact.created_at.asc())
            .all()
        )
        groups: Dict[str, schemas.FunFactCategory] = {}
        for row in rows:
            fact = schemas.FunFact.model_validate(row)
            group = groups.get(fact.category)
            if group is None:
                group = groups[fact.category] = schemas.FunFactCategory(
                    category=fact.category, category_icon_name=fact.category_icon_name, items=[]
                )
            elif group.category_icon_name is None and fact.category_icon_name:
                group.category_icon_name = fact.category_icon_name
            group.items.append(fact)
        return list(groups.values())

    return await execute(store, "fetch fun facts", _work)
