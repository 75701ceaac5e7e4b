import functools
from collections.abc import Callable
from typing import Any

import redis

from linkregistry.dao.exceptions import DataStoreError


__all__ = []


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.RedisError (connection loss, timeouts, READONLY
            replicas, OOM rejections, ...).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_connection_error
        ... def get_link(self, link_id):
        ...     return self.redis.get(link_id)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f"Redis at {redis_location(self.redis)} rejected the command: {e}") from e

    return wrapper


def redis_location(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client, for error messages."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'
