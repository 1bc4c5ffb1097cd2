import hashlib
import os

import pytest

from brinecrypt.blake2b import CryptoError
from brinecrypt.hashing import (
    CRYPTO_HASH_SHA512_BYTES,
    Sha512State,
    crypto_hash_sha512,
)

ABC_DIGEST = (
    "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
    "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
)
EMPTY_DIGEST = (
    "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
    "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
)


def test_known_vector_abc():
    assert crypto_hash_sha512(b"abc").hex() == ABC_DIGEST


def test_known_vector_empty():
    assert crypto_hash_sha512(b"").hex() == EMPTY_DIGEST


def test_crypto_hash_sha512_random():
    data = os.urandom(64)
    digest = crypto_hash_sha512(data)
    assert len(digest) == CRYPTO_HASH_SHA512_BYTES
    assert digest == hashlib.sha512(data).digest()


def test_crypto_hash_sha512_update():
    chunks = [os.urandom(64) for _ in range(10)]
    state = Sha512State()
    for chunk in chunks:
        state.update(chunk)
    assert state.finalize() == crypto_hash_sha512(b"".join(chunks))


def test_finalize_twice_raises():
    state = Sha512State()
    state.update(b"abc")
    assert state.finalize().hex() == ABC_DIGEST
    with pytest.raises(CryptoError):
        state.finalize()


def test_update_after_finalize_raises():
    state = Sha512State()
    state.finalize()
    with pytest.raises(CryptoError):
        state.update(b"more")