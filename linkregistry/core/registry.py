"""Registry service orchestrating validation, generation and storage

Read path (`resolve`):
    validate identifier -> LinkBaseDAO.get -> LinkRecord

Write path (`register`):
    validate link -> validate or generate identifier -> LinkBaseDAO.get
    (refuse occupied identifiers) -> LinkBaseDAO.store -> LinkRecord

Authentication of writers is the transport layer's job; the service trusts
its caller.

NOTE:
    The occupancy check and the write are two round trips. Without an atomic
    claim in the DAO, two writers can both see a free identifier and the last
    one wins. LinkRedisDAO closes that window with SET NX (atomic_claim=True).

Example:
    >>> service = RegistryService(store=dao, generator=GraphemeIdGenerator(5))
    >>> service.register('http://example.com', link_id='abc123')
    LinkRecord(link_id='abc123', link='http://example.com')
    >>> service.resolve('abc123').link
    'http://example.com'
"""

import logging
from typing import Optional

from linkregistry.constants import Event, Limits
from linkregistry.core.generator import IdGenerator
from linkregistry.core.validator import LinkValidator
from linkregistry.dao.base import LinkBaseDAO
from linkregistry.dao.exceptions import LinkAlreadyExistsError
from linkregistry.exceptions import InvalidIdentifierError, InvalidLinkError, LinkNotFoundError
from linkregistry.models import LinkRecord


logger = logging.getLogger(__name__)


class RegistryService:
    """Answer read and write requests against a link store

    Attributes:
        store (LinkBaseDAO):
            Link store (Redis in production).
        generator (IdGenerator):
            Source of identifiers when the caller supplies none.
        validator (LinkValidator):
            Identifier and link format rules.
    """

    def __init__(self, store: LinkBaseDAO, generator: IdGenerator, validator: Optional[LinkValidator] = None):
        self.store = store
        self.generator = generator
        self.validator = validator if validator is not None else LinkValidator()

    def resolve(self, link_id: str) -> LinkRecord:
        """Return the link record of an identifier

        Raises:
            InvalidIdentifierError:
                If link_id is not a valid identifier.
            LinkNotFoundError:
                If no record exists for link_id.
            DataStoreError:
                If the store is unreachable.
        """
        self._require_valid_id(link_id)

        link = self.store.get(link_id)
        if link is None:
            logger.info('No link record for identifier.', extra={'event': Event.LINK_NOT_FOUND, 'link_id': link_id})
            raise LinkNotFoundError(f"Link with id '{link_id}' not found.")

        return LinkRecord(link_id=link_id, link=link)

    def register(self, link: str, link_id: Optional[str] = None) -> LinkRecord:
        """Register a link, under link_id when given or a generated identifier otherwise

        The returned identifier may differ from the requested one: if the same
        link was registered before, its original identifier is returned and
        nothing new is written.

        Raises:
            InvalidLinkError:
                If link is not an http(s) URL within length limits.
            InvalidIdentifierError:
                If link_id is given but invalid.
            LinkAlreadyExistsError:
                If link_id already holds a record.
            InconsistentWriteError:
                If only one of the two keyspaces could be written.
            DataStoreError:
                If the store is unreachable.
        """
        if not self.validator.is_valid_link(link):
            logger.info('Rejected invalid link.', extra={'event': Event.INVALID_LINK})
            raise InvalidLinkError(
                f'link must be [{Limits.MIN_LINK_LENGTH}..{Limits.MAX_LINK_LENGTH}] bytes long, and start with http:// or https://'
            )

        if link_id is not None:
            self._require_valid_id(link_id)
        else:
            link_id = self.generator.next()

        if self.store.get(link_id) is not None:
            logger.info(
                'Identifier already holds a link record. Refusing to overwrite.',
                extra={'event': Event.LINK_ALREADY_EXISTS, 'link_id': link_id},
            )
            raise LinkAlreadyExistsError(f"Link with id '{link_id}' already exists.")

        stored_id = self.store.store(link_id, link)
        logger.info(
            'Stored link.',
            extra={'event': Event.LINK_STORED, 'link_id': stored_id, 'requested_id': link_id, 'link': link},
        )
        return LinkRecord(link_id=stored_id, link=link)

    def _require_valid_id(self, link_id: str) -> None:
        if not self.validator.is_valid_id(link_id):
            logger.info('Rejected invalid identifier.', extra={'event': Event.INVALID_IDENTIFIER})
            raise InvalidIdentifierError(
                f'id must only contain permitted characters and be [{Limits.MIN_ID_CLUSTERS}..{Limits.MAX_ID_CLUSTERS}] long'
            )
