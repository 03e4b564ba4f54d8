"""Public read-only content endpoints: stats, profile, experience and friends."""
from typing import Dict, List

from fastapi import APIRouter, Depends

from portfolio.api.deps import get_store, unwrap
from portfolio.db import schemas
from portfolio.db.repositories import content as content_repo
from portfolio.db.repositories import stats as stats_repo
from portfolio.db.store import StoreClient

router = APIRouter(tags=["content"])


@router.get("/stats", response_model=Dict[str, int])
async def get_stats_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await stats_repo.get_portfolio_stats(store))


@router.get("/profile", response_model=schemas.Profile)
async def get_profile_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await content_repo.get_profile(store))


@router.get("/experiences", response_model=List[schemas.Experience])
async def list_experiences_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await content_repo.list_experiences(store))


@router.get("/education", response_model=List[schemas.Education])
async def list_education_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await content_repo.list_education(store))


@router.get("/certifications", response_model=List[schemas.Certification])
async def list_certifications_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await content_repo.list_certifications(store))


@router.get("/fun-facts", response_model=List[schemas.FunFactCategory])
async def list_fun_facts_endpoint(store: StoreClient = Depends(get_store)):
    return unwrap(await content_repo.list_fun_facts_by_category(store))
