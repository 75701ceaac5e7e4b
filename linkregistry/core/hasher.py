"""Content hashing for link deduplication

The digest is only ever used as a lookup key (`link.hash.<digest>`), never
reversed. It is hex-encoded so the key stays valid text.

Example:
    >>> Sha3ContentHasher().digest('http://example.com')
    '7b3a...'  # 56 hex characters
"""

import hashlib
from abc import ABC, abstractmethod

from beartype import beartype


class ContentHasher(ABC):
    """Interface for deterministic link digests."""

    @abstractmethod
    def digest(self, link: str) -> str:
        """Return a stable, key-safe digest of link."""
        pass


class Sha3ContentHasher(ContentHasher):
    """SHA3-224 over the UTF-8 bytes of the link, as lowercase hex."""

    @beartype
    def digest(self, link: str) -> str:
        return hashlib.sha3_224(link.encode('utf-8')).hexdigest()
