import asyncio

import pytest

from portfolio.db.errors import ErrorKind, StoreError
from portfolio.db.retry import RetryPolicy, is_retryable, with_retry


class FlakyOperation:
    """Fails with `error_factory()` for the first `failures` calls, then returns `value`."""

    def __init__(self, failures: int, value="ok", error_factory=None):
        self.failures = failures
        self.value = value
        self.error_factory = error_factory or (lambda: StoreError(ErrorKind.TRANSIENT, "connection reset"))
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error_factory()
        return self.value


@pytest.mark.asyncio
@pytest.mark.parametrize("attempts", [1, 2, 3, 5])
async def test_succeeds_on_last_attempt(attempts):
    op = FlakyOperation(failures=attempts - 1, value={"id": "p1"})
    result = await with_retry(op, RetryPolicy(attempts=attempts, delay=0, timeout=None))
    assert result == {"id": "p1"}
    assert op.calls == attempts


@pytest.mark.asyncio
@pytest.mark.parametrize("attempts", [1, 3, 4])
async def test_always_failing_operation_invoked_budget_times(attempts):
    op = FlakyOperation(failures=10_000)
    with pytest.raises(StoreError) as excinfo:
        await with_retry(op, RetryPolicy(attempts=attempts, delay=0, timeout=None))
    assert excinfo.value.kind is ErrorKind.TRANSIENT
    assert op.calls == attempts


@pytest.mark.asyncio
async def test_last_error_is_reraised_unchanged(no_wait_policy):
    raised = []

    def _factory():
        err = StoreError(ErrorKind.TRANSIENT, f"failure {len(raised) + 1}")
        raised.append(err)
        return err

    op = FlakyOperation(failures=10, error_factory=_factory)
    with pytest.raises(StoreError) as excinfo:
        await with_retry(op, no_wait_policy)
    assert excinfo.value is raised[-1]
    assert excinfo.value.detail == "failure 3"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind",
    [ErrorKind.CONSTRAINT, ErrorKind.VALIDATION, ErrorKind.REFERENTIAL, ErrorKind.CONFLICT, ErrorKind.UNKNOWN],
)
async def test_permanent_errors_fail_fast(kind, no_wait_policy):
    op = FlakyOperation(failures=1, error_factory=lambda: StoreError(kind, "permanent"))
    with pytest.raises(StoreError) as excinfo:
        await with_retry(op, no_wait_policy)
    assert excinfo.value.kind is kind
    assert op.calls == 1


@pytest.mark.asyncio
async def test_raw_connection_errors_are_retried(no_wait_policy):
    op = FlakyOperation(failures=2, error_factory=lambda: ConnectionResetError("peer reset"))
    assert await with_retry(op, no_wait_policy) == "ok"
    assert op.calls == 3


@pytest.mark.asyncio
async def test_non_store_exceptions_are_not_retried(no_wait_policy):
    op = FlakyOperation(failures=1, error_factory=lambda: KeyError("bug"))
    with pytest.raises(KeyError):
        await with_retry(op, no_wait_policy)
    assert op.calls == 1


@pytest.mark.asyncio
async def test_slow_attempt_times_out_and_is_retried():
    calls = 0

    async def _op():
        nonlocal calls
        calls += 1
        if calls == 1:
            await asyncio.sleep(5)
        return "late but fine"

    result = await with_retry(_op, RetryPolicy(attempts=2, delay=0, timeout=0.05))
    assert result == "late but fine"
    assert calls == 2


@pytest.mark.asyncio
async def test_timeout_on_every_attempt_surfaces_timeout_kind():
    async def _op():
        await asyncio.sleep(5)

    with pytest.raises(StoreError) as excinfo:
        await with_retry(_op, RetryPolicy(attempts=2, delay=0, timeout=0.02))
    assert excinfo.value.kind is ErrorKind.TIMEOUT


def test_is_retryable_classification():
    assert is_retryable(StoreError(ErrorKind.TRANSIENT, "x"))
    assert is_retryable(StoreError(ErrorKind.TIMEOUT, "x"))
    assert is_retryable(OSError("network down"))
    assert not is_retryable(StoreError(ErrorKind.CONSTRAINT, "x"))
    assert not is_retryable(ValueError("bad"))


def test_policy_validation():
    with pytest.raises(ValueError):
        RetryPolicy(attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(backoff="linear")
    with pytest.raises(ValueError):
        RetryPolicy(delay=-1)


def test_policy_defaults():
    policy = RetryPolicy()
    assert policy.attempts == 3
    assert policy.delay == 1.0
    assert policy.backoff == "fixed"
    assert policy.timeout == 10.0
