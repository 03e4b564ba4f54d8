import pytest
from sqlalchemy import exc as sa_exc

from portfolio.db.errors import ErrorKind, StoreError, classify_exception, translate_exception
from portfolio.db.results import Err, NotFound, Ok


def _dbapi(cls, message: str):
    return cls("INSERT INTO projects ...", {}, Exception(message))


@pytest.mark.parametrize(
    "exc,kind",
    [
        (_dbapi(sa_exc.IntegrityError, "UNIQUE constraint failed"), ErrorKind.CONSTRAINT),
        (_dbapi(sa_exc.OperationalError, "database is locked"), ErrorKind.TRANSIENT),
        (_dbapi(sa_exc.InterfaceError, "connection closed"), ErrorKind.TRANSIENT),
        (_dbapi(sa_exc.DataError, "value too long"), ErrorKind.VALIDATION),
        (_dbapi(sa_exc.ProgrammingError, "syntax error"), ErrorKind.VALIDATION),
        (sa_exc.TimeoutError("QueuePool limit reached"), ErrorKind.TRANSIENT),
        (ConnectionRefusedError("refused"), ErrorKind.TRANSIENT),
        (sa_exc.InvalidRequestError("misuse"), ErrorKind.UNKNOWN),
        (RuntimeError("anything else"), ErrorKind.UNKNOWN),
    ],
)
def test_classify_exception(exc, kind):
    assert classify_exception(exc) is kind


def test_translate_uses_driver_message_and_keeps_cause():
    original = _dbapi(sa_exc.IntegrityError, "FOREIGN KEY constraint failed")
    error = translate_exception(original)
    assert error.kind is ErrorKind.CONSTRAINT
    assert error.detail == "FOREIGN KEY constraint failed"
    assert error.__cause__ is original
    assert not error.transient


def test_translate_passes_store_errors_through():
    error = StoreError(ErrorKind.CONFLICT, "already approved")
    assert translate_exception(error) is error


def test_err_message_reads_failed_to_action():
    result = Err(StoreError(ErrorKind.TRANSIENT, "connection refused"), "fetch projects")
    assert not result.ok
    assert result.kind is ErrorKind.TRANSIENT
    assert result.message == "Failed to fetch projects: connection refused"


def test_not_found_is_a_success_outcome():
    missing = NotFound("Project", "abc")
    assert missing.ok
    assert missing.message == "Project abc not found"
    assert NotFound("Profile").message == "Profile not found"
    assert Ok([]).ok
