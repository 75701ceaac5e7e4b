"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkAlreadyExistsError:
        Raised when an identifier already holds a link record.

    DataStoreError:
        Raised when the data store is unreachable or rejects a command
        (e.g., connection issues, timeouts, OOM, etc.).

    InconsistentWriteError:
        Raised when the link record was written but its hash index entry was not.

Example:
    >>> from linkregistry.dao.exceptions import LinkAlreadyExistsError
    >>> raise LinkAlreadyExistsError("Link with id 'abc123' already exists.")
    Traceback (most recent call last):
        ...
    linkregistry.dao.exceptions.LinkAlreadyExistsError: Link with id 'abc123' already exists.
"""

from linkregistry.exceptions import LinkRegistryError


class DAOError(LinkRegistryError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class LinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to claim an identifier which already has a link record."""

    error_code = 'dao:link_already_exists_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class InconsistentWriteError(DataStoreError):
    """Exception raised when only one of the two keyspaces was written.

    The link record exists but its hash index entry does not. Nothing is rolled
    back, so the pair stays out of sync until repaired by hand.
    """

    error_code = 'dao:inconsistent_write_error'

    def __init__(self, message: str, link_id: str | None = None, digest: str | None = None):
        super().__init__(message)
        self.link_id = link_id
        self.digest = digest
