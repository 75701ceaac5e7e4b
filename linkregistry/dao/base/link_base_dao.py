"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link store
implementations, regardless of the underlying storage mechanism.

Responsibilities:
    - Provide an interface for reading a link by identifier.
    - Provide an interface for storing an (identifier, link) pair with
      content-addressed deduplication.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkregistry.dao.redis import LinkRedisDAO
        >>> dao = LinkRedisDAO(...)

        >>> dao.store('abc123', 'http://example.com')
        'abc123'
        >>> dao.store('xyz', 'http://example.com')  # same link, deduplicated
        'abc123'
        >>> dao.get('abc123')
        'http://example.com'
        >>> dao.get('xyz') is None
        True
"""

from abc import ABC, abstractmethod


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        get(link_id: str, **kwargs) -> str | None:
            Retrieve the link stored under an identifier.
            Returns None if no record exists.
            Raises DataStoreError on connection or read failure.

        store(link_id: str, link: str, **kwargs) -> str:
            Store a link under an identifier, unless the same link is already
            registered, in which case the existing identifier is returned.
            Raises DataStoreError on connection or write failure.
            Raises InconsistentWriteError when only the link record was written.

    NOTE:
        - Records are immutable. There is no update or delete operation.
        - Checking that an identifier is free is the caller's job (`get` before
          `store`). Implementations may additionally refuse to overwrite an
          occupied identifier with LinkAlreadyExistsError.
    """

    @abstractmethod
    def get(self, link_id: str, **kwargs) -> str | None:
        """Retrieve a link from the data store by its identifier.

        Args:
            link_id (str):
                The identifier of the link to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The link if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def store(self, link_id: str, link: str, **kwargs) -> str:
        """Store a link under an identifier, deduplicating by content.

        Args:
            link_id (str):
                The identifier requested (or generated) for the link.

            link (str):
                The full URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str: link_id, or the identifier of a previous registration of the same link.

        Raises:
            LinkAlreadyExistsError:
                If the implementation claims identifiers atomically and link_id is taken.

            InconsistentWriteError:
                If the link record was written but its hash index entry was not.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
