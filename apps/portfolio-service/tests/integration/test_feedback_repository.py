import pytest

from portfolio.db import schemas
from portfolio.db.errors import ErrorKind
from portfolio.db.repositories import feedback as feedback_repo
from portfolio.db.results import Err, NotFound, Ok


async def _submit(store, content="Nice work", **fields):
    result = await feedback_repo.submit_feedback(store, schemas.FeedbackCreate(content=content, **fields))
    assert isinstance(result, Ok), result
    return result.value


@pytest.mark.asyncio
async def test_submit_feedback_defaults(store):
    item = await _submit(store, type="suggestion", priority="high")
    assert item.status == "unread"
    assert item.type == "suggestion"
    assert item.priority == "high"
    assert item.reply_message is None


@pytest.mark.asyncio
async def test_reply_marks_replied_with_message(store):
    item = await _submit(store)

    result = await feedback_repo.reply_to_feedback(store, item.id, "Thanks")
    assert isinstance(result, Ok)

    fetched = await feedback_repo.get_feedback(store, item.id)
    assert fetched.value.status == "replied"
    assert fetched.value.reply_message == "Thanks"

    listed = await feedback_repo.list_feedback(store, status="replied")
    assert [(f.id, f.reply_message) for f in listed.value] == [(item.id, "Thanks")]


@pytest.mark.asyncio
async def test_reply_rejects_empty_message(store):
    item = await _submit(store)
    result = await feedback_repo.reply_to_feedback(store, item.id, "")
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION
    assert result.message == "Failed to reply to feedback: reply message must not be empty"


@pytest.mark.asyncio
async def test_status_updates(store):
    item = await _submit(store)
    assert (await feedback_repo.update_feedback_status(store, item.id, "read")).value.status == "read"

    replied = await feedback_repo.update_feedback_status(store, item.id, "replied")
    assert isinstance(replied, Err)
    assert replied.kind is ErrorKind.VALIDATION

    assert isinstance(await feedback_repo.update_feedback_status(store, "nope", "read"), NotFound)


@pytest.mark.asyncio
async def test_feedback_with_sender(store, connection_factory):
    sender = await connection_factory(name="Ada", email="ada@example.com", subject="Hello")
    anonymous = await _submit(store, content="Anonymous note")
    linked = await _submit(store, content="Signed note", connection_id=sender.id)

    result = await feedback_repo.list_feedback_with_sender(store)
    assert isinstance(result, Ok)
    assert [f.id for f in result.value] == [linked.id, anonymous.id]
    assert result.value[0].sender.name == "Ada"
    assert result.value[0].sender.email == "ada@example.com"
    assert result.value[0].sender.subject == "Hello"
    assert result.value[0].sender.status == "unread"
    assert result.value[1].sender is None


@pytest.mark.asyncio
async def test_unknown_connection_is_referential(store):
    result = await feedback_repo.submit_feedback(
        store, schemas.FeedbackCreate(content="Orphan", connection_id="missing")
    )
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.REFERENTIAL


@pytest.mark.asyncio
async def test_delete_feedback(store):
    item = await _submit(store)
    assert isinstance(await feedback_repo.delete_feedback(store, item.id), Ok)
    assert isinstance(await feedback_repo.get_feedback(store, item.id), NotFound)
    assert isinstance(await feedback_repo.delete_feedback(store, item.id), NotFound)
