"""Unit tests for content digests."""

import hashlib

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from linkregistry.core.hasher import Sha3ContentHasher


def test_digest_is_sha3_224_hex():
    hasher = Sha3ContentHasher()
    expected = hashlib.sha3_224(b'http://example.com').hexdigest()

    digest = hasher.digest('http://example.com')

    assert digest == expected
    assert len(digest) == 56


def test_digest_is_deterministic_and_content_sensitive():
    hasher = Sha3ContentHasher()
    assert hasher.digest('http://example.com') == hasher.digest('http://example.com')
    assert hasher.digest('http://example.com') != hasher.digest('https://example.com')


def test_digest_encodes_utf8():
    hasher = Sha3ContentHasher()
    assert hasher.digest('http://例え.jp') == hashlib.sha3_224('http://例え.jp'.encode('utf-8')).hexdigest()


def test_digest_with_invalid_type():
    with pytest.raises(BeartypeCallHintParamViolation):
        Sha3ContentHasher().digest(b'http://example.com')
