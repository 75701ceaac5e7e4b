import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the two link keyspaces.

        link.id.<identifier>  -> link
        link.hash.<digest>    -> identifier

    An optional prefix can be provided to namespace all generated keys,
    e.g. "linkregistry:prod" or "linkregistry:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_id_key(self, link_id: str) -> str:
        return f'link.id.{link_id}'

    @prefix_key
    def link_hash_key(self, digest: str) -> str:
        return f'link.hash.{digest}'
