"""Data Access Object (DAO) implementation for managing links in Redis

This module provides a Redis-based implementation of LinkBaseDAO over two
independent keyspaces:

    [<prefix>:]link.id.<identifier>   -> link
    [<prefix>:]link.hash.<digest>     -> identifier

Responsibilities:
    - Retrieve links by identifier;
    - Store links, reusing the identifier of a previous registration of the same link;
    - Claim identifiers atomically (SET NX) unless configured otherwise;
    - Report a desync between the two keyspaces loudly instead of hiding it.

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving links in a Redis datastore.

Example:
    >>> from linkregistry.core.hasher import Sha3ContentHasher
    >>> from linkregistry.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(hasher=Sha3ContentHasher(), prefix="app:dev")

    >>> dao.store('abc123', 'http://example.com')
    'abc123'
    >>> dao.store('xyz', 'http://example.com')
    'abc123'
    >>> dao.get('abc123')
    'http://example.com'
"""

import logging
from typing import Optional

import redis
from beartype import beartype

from linkregistry.constants import Defaults, Event
from linkregistry.core.hasher import ContentHasher, Sha3ContentHasher
from linkregistry.dao.base import LinkBaseDAO
from linkregistry.dao.redis.mixins import RedisClientMixin
from linkregistry.dao.redis.helpers import handle_redis_connection_error
from linkregistry.dao.exceptions import DataStoreError, InconsistentWriteError, LinkAlreadyExistsError


logger = logging.getLogger(__name__)


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing link records

    This class implements the LinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Attributes:
        hasher (ContentHasher):
            Digest used as the deduplication key.
        atomic_claim (bool):
            If True, the link record is written with SET NX so concurrent writers
            cannot both claim the same identifier. If False, a plain SET is used and
            the last writer wins.

    Methods:
        get(link_id: str, **kwargs) -> str | None:
            Retrieve the link stored under an identifier, None if absent.
            Raises DataStoreError on any Redis failure.

        store(link_id: str, link: str, **kwargs) -> str:
            Store a link, or return the identifier it is already registered under.
            Raises LinkAlreadyExistsError when atomic_claim is on and the identifier is taken.
            Raises InconsistentWriteError when the hash index write fails after the link record was written.
            Raises DataStoreError on any other Redis failure.

    NOTE:
        Links and identifiers are text, so the client always decodes replies
        (`redis_decode_responses=True`). A config asking otherwise is overridden.
    """

    def __init__(
        self,
        hasher: Optional[ContentHasher] = None,
        atomic_claim: bool = Defaults.ATOMIC_CLAIM,
        **kwargs,
    ):
        self.hasher = hasher if hasher is not None else Sha3ContentHasher()
        self.atomic_claim = atomic_claim

        if kwargs.get('redis_decode_responses', True) is not True:
            logger.warning(
                'Ignoring redis_decode_responses=%r. Link records are always decoded.',
                kwargs['redis_decode_responses'],
            )
        kwargs['redis_decode_responses'] = True
        super().__init__(**kwargs)

    @handle_redis_connection_error
    @beartype
    def get(self, link_id: str, **kwargs) -> str | None:
        """Retrieve a stored link by identifier

        Args:
            link_id (str):
                The identifier of the link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str | None:
                The link if a record exists, None otherwise.

        Raises:
            DataStoreError:
                If Redis is unreachable or rejects the command.

        Example:
            >>> dao.get('abc123')
            'http://example.com'
        """
        return self.redis.get(self.keys.link_id_key(link_id))

    @handle_redis_connection_error
    @beartype
    def store(self, link_id: str, link: str, **kwargs) -> str:
        """Store a link under an identifier, deduplicating by content digest

        Steps:
            - Look up link.hash.<digest>. If present, return the identifier stored
              there and write nothing (the requested identifier is discarded).
            - Write link.id.<link_id> (SET NX when atomic_claim is on).
            - Write link.hash.<digest>.

        Args:
            link_id (str):
                The identifier requested for the link.
            link (str):
                The full URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str:
                link_id, or the identifier of the earlier registration of link.

        Raises:
            LinkAlreadyExistsError:
                If atomic_claim is on and link_id already holds a record.
            InconsistentWriteError:
                If link.id.<link_id> was written but link.hash.<digest> was not.
            DataStoreError:
                If Redis fails (connection, timeout or rejected command) before anything is written.

        Example:
            >>> dao.store('abc123', 'http://example.com')
            'abc123'
        """
        digest = self.hasher.digest(link)
        link_id_key = self.keys.link_id_key(link_id)
        link_hash_key = self.keys.link_hash_key(digest)

        existing_id = self.redis.get(link_hash_key)
        if existing_id is not None:
            logger.info(
                'Link already registered under another identifier.',
                extra={'event': Event.LINK_DEDUPLICATED, 'requested_id': link_id, 'link_id': existing_id},
            )
            return existing_id

        # NOTE: The two SET commands are NOT executed as a transaction. If the
        #       second one fails the link record stays without its hash index entry:
        #
        #       -> SET <prefix>:link.id.<id> <link> [NX]      => OK
        #       ... connection drops, replica turns READONLY, OOM, ...
        #       -> SET <prefix>:link.hash.<digest> <id>       => never applied
        #
        #       The link still resolves, but registering the same link again creates
        #       a second identifier instead of deduplicating.
        claimed = self.redis.set(link_id_key, link, nx=self.atomic_claim)
        if not claimed:
            if self.atomic_claim:
                raise LinkAlreadyExistsError(f"Link with id '{link_id}' already exists.")
            raise DataStoreError(f"Redis refused to write link with id '{link_id}'.")

        try:
            indexed = self.redis.set(link_hash_key, link_id)
        except redis.exceptions.RedisError as e:
            raise self._inconsistent_write(link_id, digest) from e
        if not indexed:
            raise self._inconsistent_write(link_id, digest)

        return link_id

    def _inconsistent_write(self, link_id: str, digest: str) -> InconsistentWriteError:
        logger.error(
            'Link record written without its hash index entry. Keyspaces are out of sync.',
            extra={
                'event': Event.INCONSISTENT_WRITE,
                'link_id': link_id,
                'link_id_key': self.keys.link_id_key(link_id),
                'link_hash_key': self.keys.link_hash_key(digest),
            },
        )
        return InconsistentWriteError(
            f"Stored link with id '{link_id}' but failed to index its digest '{digest}'.",
            link_id=link_id,
            digest=digest,
        )
