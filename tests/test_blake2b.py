import hashlib
import os
import struct

import pytest

from brinecrypt.blake2b import Blake2bState, CryptoError, hash, longhash

EMPTY_DIGEST = (
    "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
    "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce"
)
ABC_DIGEST = (
    "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
    "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
)


def test_empty_vector():
    assert Blake2bState(64).finalize(64).hex() == EMPTY_DIGEST


def test_abc_vector():
    state = Blake2bState(64)
    state.update(b"abc")
    assert state.finalize(64).hex() == ABC_DIGEST


def test_keyed_vector_matches_reference():
    key = bytes(range(64))
    for length in (0, 1, 127, 128, 129, 255, 256):
        data = bytes(i % 256 for i in range(length))
        state = Blake2bState(64, key)
        state.update(data)
        assert state.finalize(64) == hashlib.blake2b(data, key=key).digest()


@pytest.mark.parametrize("size", [0, 1, 63, 64, 65, 127, 128, 129, 255, 256, 257, 511])
def test_double_update_matches_reference(size):
    block = os.urandom(size)
    state = Blake2bState(64)
    state.update(block)
    state.update(block)
    assert state.finalize(64) == hashlib.blake2b(block + block).digest()


def test_key_with_double_update():
    key = os.urandom(32)
    block = os.urandom(256)
    state = Blake2bState(64, key)
    state.update(block)
    state.update(block)
    assert state.finalize(64) == hashlib.blake2b(block * 2, key=key).digest()


def test_salt_and_personal():
    salt = b"s" * 16
    personal = b"p" * 16
    state = Blake2bState(32, b"k" * 32, salt, personal)
    state.update(b"message")
    expected = hashlib.blake2b(
        b"message", digest_size=32, key=b"k" * 32, salt=salt, person=personal
    ).digest()
    assert state.finalize(32) == expected


def test_split_updates_equal_single_update():
    data = os.urandom(1000)
    whole = hash(data)
    state = Blake2bState()
    for start in range(0, len(data), 37):
        state.update(data[start:start + 37])
    assert state.finalize() == whole


@pytest.mark.parametrize("outlen", [1, 16, 32, 64])
def test_hash_function(outlen):
    data = b"a string of bytes"
    assert hash(data, outlen) == hashlib.blake2b(data, digest_size=outlen).digest()


def test_hash_with_key():
    key = os.urandom(16)
    assert hash(b"x", 32, key) == hashlib.blake2b(b"x", digest_size=32, key=key).digest()


@pytest.mark.parametrize("outlen", [0, 65])
def test_invalid_outlen(outlen):
    with pytest.raises(CryptoError):
        Blake2bState(outlen)


def test_key_too_long():
    with pytest.raises(CryptoError):
        Blake2bState(64, bytes(65))


def test_bad_salt_length():
    with pytest.raises(CryptoError):
        Blake2bState(64, None, bytes(8))


def test_bad_personal_length():
    with pytest.raises(CryptoError):
        Blake2bState(64, None, None, bytes(17))


def test_finalize_twice_raises():
    state = Blake2bState(64)
    state.finalize(64)
    with pytest.raises(CryptoError):
        state.finalize(64)


@pytest.mark.parametrize("outlen", [0, 65])
def test_finalize_invalid_outlen(outlen):
    with pytest.raises(CryptoError):
        Blake2bState(64).finalize(outlen)


def test_hash_outlen_too_large():
    with pytest.raises(CryptoError):
        hash(b"data", 65)


@pytest.mark.parametrize("outlen", range(5, 65))
def test_longhash_short_outputs(outlen):
    data = os.urandom(outlen)
    expected = hashlib.blake2b(
        struct.pack("<I", outlen) + data, digest_size=outlen
    ).digest()
    assert longhash(data, outlen) == expected


@pytest.mark.parametrize("outlen", [65, 96, 97, 128, 200, 319, 1024])
def test_longhash_long_outputs(outlen):
    data = os.urandom(40)
    out = longhash(data, outlen)
    assert len(out) == outlen
    first = hashlib.blake2b(struct.pack("<I", outlen) + data).digest()
    assert out[:32] == first[:32]
    assert out[32:64] == hashlib.blake2b(first).digest()[:32] or outlen <= 96
    assert longhash(data, outlen) == out


def test_longhash_tail_for_exact_two_blocks():
    data = b"input"
    out = longhash(data, 96)
    first = hashlib.blake2b(struct.pack("<I", 96) + data).digest()
    assert out[:32] == first[:32]
    assert out[32:] == hashlib.blake2b(first).digest()


def test_longhash_length_changes_output():
    assert longhash(b"abc", 100)[:32] != longhash(b"abc", 101)[:32]


def test_longhash_too_short():
    with pytest.raises(CryptoError):
        longhash(b"abc", 4)