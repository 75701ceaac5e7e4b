"""Unit tests for handle_redis_connection_error decorator.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Connection error handling
       - Ensures Redis connection and timeout errors are converted into DataStoreError.
       - Ensures Redis command errors (READONLY, OOM) are converted into DataStoreError.
       - Ensures other exceptions pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

from unittest.mock import MagicMock

import pytest
import redis

from linkregistry.dao.redis.helpers import handle_redis_connection_error, redis_location
from linkregistry.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error=None):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}
        self.error = error

    @handle_redis_connection_error
    def ping(self):
        """Ping Redis."""
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


# -------------------------------
# 2. Connection error handling
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [redis.exceptions.ConnectionError('refused'), redis.exceptions.TimeoutError('timeout')],
)
def test_decorator_transforms_redis_errors(error):
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error).ping()
    assert exc_info.value.__cause__ is error


@pytest.mark.parametrize(
    'error',
    [redis.exceptions.ReadOnlyError('READONLY'), redis.exceptions.ResponseError('OOM command not allowed')],
)
def test_decorator_transforms_redis_command_errors(error):
    with pytest.raises(DataStoreError, match='Redis at localhost:6379/0 rejected the command') as exc_info:
        DummyDAO(error).ping()
    assert exc_info.value.__cause__ is error


def test_decorator_does_not_touch_other_errors():
    with pytest.raises(ValueError):
        DummyDAO(ValueError('boom')).ping()


def test_redis_location():
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5})
    assert redis_location(client) == '203.0.113.1:18000/5'


# -------------------------------
# 3. Metadata preservation
# -------------------------------


def test_decorator_preserves_metadata():
    assert DummyDAO.ping.__name__ == 'ping'
    assert DummyDAO.ping.__doc__ == 'Ping Redis.'
