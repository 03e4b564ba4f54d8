import pytest

from portfolio.db import schemas
from portfolio.db.repositories import connections as connection_repo
from portfolio.db.repositories import projects as project_repo
from portfolio.db.repositories import technologies as technology_repo
from portfolio.db.results import Ok


def _unwrap(result):
    assert isinstance(result, Ok), result
    return result.value


@pytest.fixture
def technology_factory(store):
    async def _create(name: str, category: str | None = None, icon_name: str | None = None):
        return _unwrap(
            await technology_repo.create_technology(
                store, schemas.TechnologyCreate(name=name, category=category, icon_name=icon_name)
            )
        )
    return _create


@pytest.fixture
def project_factory(store):
    async def _create(title: str, technology_ids=None, **fields):
        data = schemas.ProjectCreate(title=title, **fields)
        return _unwrap(await project_repo.create_project(store, data, technology_ids))
    return _create


@pytest.fixture
def connection_factory(store):
    async def _create(name: str = "A", email: str = "a@x.com", subject: str = "Hi", message: str = "test"):
        form = schemas.ConnectionCreate(name=name, email=email, subject=subject, message=message)
        return _unwrap(await connection_repo.submit_contact_form(store, form))
    return _create
