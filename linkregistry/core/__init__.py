from linkregistry.core.graphemes import GraphemeAlphabet, segments, cluster_count
from linkregistry.core.generator import IdGenerator, GraphemeIdGenerator
from linkregistry.core.hasher import ContentHasher, Sha3ContentHasher
from linkregistry.core.validator import LinkValidator
from linkregistry.core.registry import RegistryService


__all__ = [
    'GraphemeAlphabet',
    'segments',
    'cluster_count',
    'IdGenerator',
    'GraphemeIdGenerator',
    'ContentHasher',
    'Sha3ContentHasher',
    'LinkValidator',
    'RegistryService',
]
