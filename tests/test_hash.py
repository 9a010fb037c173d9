"""Hash utilities tests."""

import hashlib
import pytest
from minigit.core.hash import hash_object, hash_file, is_valid_hash
import tempfile
from pathlib import Path


def test_hash_object_empty():
    """Test hashing empty bytes."""
    result = hash_object(b'')
    assert len(result) == 40
    assert result == 'da39a3ee5e6b4b0d3255bfef95601890afd80709'


def test_hash_object_deterministic():
    """Test hash consistency for same input."""
    data = b'hello world'
    hash1 = hash_object(data)
    hash2 = hash_object(data)
    assert hash1 == hash2


def test_hash_object_equal_content_equal_hash():
    """Test separately built but equal byte strings hash the same."""
    assert hash_object(b'hel' + b'lo') == hash_object(bytes(b'hello'))


def test_hash_object_is_plain_sha1():
    """Test the fingerprint is the SHA-1 of the raw content, no header."""
    assert hash_object(b'hello') == hashlib.sha1(b'hello').hexdigest()


def test_hash_object_different_data():
    """Test different data produces different hashes."""
    hash1 = hash_object(b'hello')
    hash2 = hash_object(b'world')
    assert hash1 != hash2


def test_hash_file():
    """Test hashing file contents."""
    with tempfile.NamedTemporaryFile(mode='wb', delete=False) as f:
        f.write(b'test content')
        temp_path = f.name

    try:
        assert hash_file(temp_path) == hash_object(b'test content')
    finally:
        Path(temp_path).unlink()


@pytest.mark.parametrize('value,expected', [
    ('a' * 40, True),
    ('0123456789abcdef0123456789abcdef01234567', True),
    ('A' * 40, False),
    ('a' * 39, False),
    ('g' * 40, False),
    ('', False),
])
def test_is_valid_hash(value, expected):
    """Test fingerprint shape validation."""
    assert is_valid_hash(value) is expected
