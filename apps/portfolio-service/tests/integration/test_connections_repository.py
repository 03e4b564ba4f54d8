import logging

import pytest

from portfolio.db import models, schemas
from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.repositories import connections as connection_repo
from portfolio.db.repositories import feedback as feedback_repo
from portfolio.db.repositories import stats as stats_repo
from portfolio.db.results import Err, NotFound, Ok
from portfolio.utils.statuses import InboxStatusEnum


@pytest.mark.asyncio
async def test_contact_form_is_unread_and_listed_first(store, connection_factory):
    older = await connection_factory(name="Earlier", email="e@x.com", subject="Old", message="first")
    created = await connection_factory(name="A", email="a@x.com", subject="Hi", message="test")

    assert created.status == "unread"
    assert (created.name, created.email, created.subject, created.message) == ("A", "a@x.com", "Hi", "test")

    listed = await connection_repo.list_connections(store)
    assert isinstance(listed, Ok)
    assert [c.id for c in listed.value] == [created.id, older.id]


@pytest.mark.asyncio
async def test_contact_form_increments_total_connections(store, connection_factory):
    await connection_factory()
    await connection_factory(name="B", email="b@x.com")

    stats = await stats_repo.get_portfolio_stats(store)
    assert stats.value == {"total_connections": 2}


@pytest.mark.asyncio
async def test_stat_failure_does_not_fail_submission(store, monkeypatch, caplog):
    async def _broken_rpc(name, **params):
        raise StoreError(ErrorKind.UNKNOWN, "procedure missing")

    monkeypatch.setattr(store, "rpc", _broken_rpc)
    form = schemas.ConnectionCreate(name="A", email="a@x.com", subject="Hi", message="test")

    with caplog.at_level(logging.WARNING):
        result = await connection_repo.submit_contact_form(store, form)

    assert isinstance(result, Ok)
    assert "stat_increment_failed" in caplog.text
    fetched = await connection_repo.get_connection(store, result.value.id)
    assert isinstance(fetched, Ok)


@pytest.mark.asyncio
async def test_mark_read_only_moves_unread(store, connection_factory):
    created = await connection_factory()

    result = await connection_repo.mark_connection_read(store, created.id)
    assert result.value.status == "read"

    replied = await connection_repo.reply_to_connection(store, created.id, "Thanks for reaching out")
    assert replied.value.status == "replied"

    again = await connection_repo.mark_connection_read(store, created.id)
    assert again.value.status == "replied"
    assert again.value.reply_message == "Thanks for reaching out"


@pytest.mark.asyncio
async def test_update_status_toggles_read_unread(store, connection_factory):
    created = await connection_factory()

    read = await connection_repo.update_connection_status(store, created.id, InboxStatusEnum.read)
    assert read.value.status == "read"
    unread = await connection_repo.update_connection_status(store, created.id, "unread")
    assert unread.value.status == "unread"

    filtered = await connection_repo.list_connections(store, status="unread")
    assert [c.id for c in filtered.value] == [created.id]
    assert (await connection_repo.list_connections(store, status="read")).value == []


@pytest.mark.asyncio
async def test_update_status_rejects_replied(store, connection_factory):
    created = await connection_factory()
    result = await connection_repo.update_connection_status(store, created.id, "replied")
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION
    assert (await connection_repo.get_connection(store, created.id)).value.status == "unread"


@pytest.mark.asyncio
async def test_list_connections_rejects_unknown_status(store):
    result = await connection_repo.list_connections(store, status="spam")
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_reply_requires_message(store, connection_factory):
    created = await connection_factory()
    result = await connection_repo.reply_to_connection(store, created.id, "   ")
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_missing_connection_is_not_found(store):
    assert isinstance(await connection_repo.get_connection(store, "nope"), NotFound)
    assert isinstance(await connection_repo.mark_connection_read(store, "nope"), NotFound)
    assert isinstance(await connection_repo.reply_to_connection(store, "nope", "hi"), NotFound)
    assert isinstance(await connection_repo.delete_connection(store, "nope"), NotFound)


@pytest.mark.asyncio
async def test_delete_connection_unlinks_feedback(store, connection_factory):
    created = await connection_factory()
    feedback = await feedback_repo.submit_feedback(
        store, schemas.FeedbackCreate(content="Great site", connection_id=created.id)
    )
    assert isinstance(feedback, Ok)

    assert isinstance(await connection_repo.delete_connection(store, created.id), Ok)
    assert isinstance(await connection_repo.get_connection(store, created.id), NotFound)

    kept = await feedback_repo.get_feedback(store, feedback.value.id)
    assert isinstance(kept, Ok)
    assert kept.value.connection_id is None
    count = await store.transaction(lambda db: db.query(models.Connection).count())
    assert count == 0
