import hashlib
import hmac

import pytest

from nstdkit.sha256 import Sha256


@pytest.mark.parametrize(
    "data",
    [b"", b"abc", b"a" * 55, b"a" * 56, b"a" * 63, b"a" * 64, b"a" * 65, bytes(range(256)) * 5],
)
def test_hash_matches_reference(data):
    assert Sha256.hash(data) == hashlib.sha256(data).digest()


def test_known_digest_of_abc():
    assert Sha256.hash(b"abc").hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_digest_length():
    assert len(Sha256.hash(b"anything")) == Sha256.digest_size


def test_incremental_update_equals_single_update():
    data = bytes(range(200)) * 3
    hasher = Sha256()
    for start in range(0, len(data), 37):
        hasher.update(data[start:start + 37])
    assert hasher.finalize() == Sha256.hash(data)


def test_finalize_resets_state():
    hasher = Sha256()
    hasher.update(b"first message")
    hasher.finalize()
    hasher.update(b"second")
    assert hasher.finalize() == Sha256.hash(b"second")


def test_reset_discards_data():
    hasher = Sha256()
    hasher.update(b"garbage")
    hasher.reset()
    assert hasher.finalize() == Sha256.hash(b"")


def test_accepts_bytearray_and_memoryview():
    data = b"buffer protocol"
    assert Sha256.hash(bytearray(data)) == Sha256.hash(memoryview(data))


def test_rejects_str():
    with pytest.raises(TypeError):
        Sha256.hash("text")


@pytest.mark.parametrize("key_size", [0, 16, 63, 64, 65, 200])
def test_hmac_matches_reference(key_size):
    key = bytes((i * 7) & 0xFF for i in range(key_size))
    message = b"The quick brown fox jumps over the lazy dog"
    assert Sha256.hmac(key, message) == hmac.new(key, message, hashlib.sha256).digest()