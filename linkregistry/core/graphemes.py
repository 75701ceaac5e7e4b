"""Grapheme cluster segmentation

Identifiers are measured in user-perceived characters (Unicode extended
grapheme clusters), not code points or bytes. A pictograph followed by a
variation selector, a flag made of two regional indicators or a ZWJ family
sequence are each one cluster.

Functions:
    segments(text: str) -> list[str]
        Split text into its grapheme clusters.
    cluster_count(text: str) -> int
        Number of grapheme clusters in text.

Classes:
    GraphemeAlphabet:
        Ordered, de-duplicated set of clusters used to generate and validate identifiers.

Example:
    >>> segments('ab⚡️')
    ['a', 'b', '⚡️']
    >>> cluster_count('🐶🐱')
    2
"""

from collections.abc import Iterator

import regex
from beartype import beartype


_GRAPHEME_PATTERN = regex.compile(r'\X')


@beartype
def segments(text: str) -> list[str]:
    """Split text into extended grapheme clusters, in order of appearance."""
    return _GRAPHEME_PATTERN.findall(text)


@beartype
def cluster_count(text: str) -> int:
    return len(segments(text))


class GraphemeAlphabet:
    """Alphabet of grapheme clusters

    Duplicated clusters are dropped (first occurrence wins) so every symbol
    is drawn with the same probability by the identifier generator.

    Attributes:
        symbols (tuple[str, ...]):
            Ordered clusters of the alphabet.

    Example:
        >>> alphabet = GraphemeAlphabet('ab⭐️a')
        >>> alphabet.symbols
        ('a', 'b', '⭐️')
        >>> '⭐️' in alphabet
        True
        >>> '⭐' in alphabet  # star without the variation selector
        False
    """

    @beartype
    def __init__(self, text: str):
        symbols = tuple(dict.fromkeys(segments(text)))
        if not symbols:
            raise ValueError('Alphabet must contain at least one grapheme cluster.')

        self.symbols = symbols
        self._lookup = frozenset(symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __getitem__(self, index: int) -> str:
        return self.symbols[index]

    def __contains__(self, cluster: object) -> bool:
        return cluster in self._lookup

    def __repr__(self) -> str:
        return f'GraphemeAlphabet({"".join(self.symbols)!r})'

    def covers(self, text: str) -> bool:
        """True if every grapheme cluster of text belongs to this alphabet."""
        return all(cluster in self._lookup for cluster in segments(text))
