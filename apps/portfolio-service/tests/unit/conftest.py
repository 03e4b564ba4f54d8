import pytest

from portfolio.db.retry import RetryPolicy


@pytest.fixture
def no_wait_policy():
    """Three attempts, no delay, no timeout."""
    return RetryPolicy(attempts=3, delay=0, timeout=None)
