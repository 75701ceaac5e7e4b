"""Identifier generation

Classes:
    IdGenerator:
        Interface producing candidate identifiers.
    GraphemeIdGenerator:
        Draws fixed-length identifiers from a grapheme alphabet with a
        cryptographically strong random source.

NOTE:
    Generated identifiers are NOT guaranteed to be unique. Two calls collide
    with probability 1/N^L (N symbols, L clusters). The caller must check the
    identifier is free before committing it; there is no retry loop here.

Example:
    >>> generator = GraphemeIdGenerator(length=5)
    >>> generator.next()
    '🐼🦄🐔🐶🐝'
"""

import random
import secrets
from abc import ABC, abstractmethod

from beartype import beartype

from linkregistry.constants import Alphabet, Limits
from linkregistry.core.graphemes import GraphemeAlphabet


class IdGenerator(ABC):
    """Interface for identifier generators."""

    @abstractmethod
    def next(self) -> str:
        """Return a new candidate identifier."""
        pass


class GraphemeIdGenerator(IdGenerator):
    """Generate identifiers by sampling grapheme clusters independently and uniformly

    Attributes:
        length (int):
            Number of grapheme clusters per identifier.
        alphabet (GraphemeAlphabet):
            Clusters to draw from.
        rng (random.Random):
            Random source. Defaults to secrets.SystemRandom (OS entropy).
            Tests may inject a seeded random.Random for reproducible output.
    """

    @beartype
    def __init__(
        self,
        length: int,
        alphabet: GraphemeAlphabet | str = Alphabet.GENERATED,
        rng: random.Random | None = None,
    ):
        if not Limits.MIN_ID_CLUSTERS <= length <= Limits.MAX_ID_CLUSTERS:
            raise ValueError(
                f'Identifier length must be within [{Limits.MIN_ID_CLUSTERS}, {Limits.MAX_ID_CLUSTERS}] (given value: {length}).'
            )

        self.length = length
        self.alphabet = alphabet if isinstance(alphabet, GraphemeAlphabet) else GraphemeAlphabet(alphabet)
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def next(self) -> str:
        return ''.join(self.rng.choice(self.alphabet.symbols) for _ in range(self.length))
