"""Identifier and link format validation

Both predicates are pure and are evaluated before any storage access.

Example:
    >>> validator = LinkValidator()
    >>> validator.is_valid_id('abc123')
    True
    >>> validator.is_valid_id('🐶🐱🐭🐹🐰🦊🐻🐼🐨🐯🦁')  # 11 clusters
    False
    >>> validator.is_valid_link('ftp://example.com')
    False
"""

from typing import Any

from linkregistry.constants import Alphabet, Limits
from linkregistry.core.graphemes import GraphemeAlphabet, segments


class LinkValidator:
    """Enforce identifier and link format constraints

    Attributes:
        permitted (GraphemeAlphabet):
            Clusters an identifier may be built from.
    """

    def __init__(self, permitted: GraphemeAlphabet | str = Alphabet.PERMITTED):
        self.permitted = permitted if isinstance(permitted, GraphemeAlphabet) else GraphemeAlphabet(permitted)

    def is_valid_id(self, link_id: Any) -> bool:
        """True iff link_id has 1..10 grapheme clusters, all from the permitted alphabet."""
        if not isinstance(link_id, str):
            return False

        clusters = segments(link_id)
        if not Limits.MIN_ID_CLUSTERS <= len(clusters) <= Limits.MAX_ID_CLUSTERS:
            return False
        return all(cluster in self.permitted for cluster in clusters)

    def is_valid_link(self, link: Any) -> bool:
        """True iff link is an http(s) URL of 7..2083 UTF-8 bytes."""
        if not isinstance(link, str):
            return False
        try:
            size = len(link.encode('utf-8'))
        except UnicodeEncodeError:  # lone surrogates
            return False
        if not Limits.MIN_LINK_LENGTH <= size <= Limits.MAX_LINK_LENGTH:
            return False
        return link.startswith(Limits.LINK_PREFIXES)
