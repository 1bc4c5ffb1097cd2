import hashlib
import hmac
import os
import random

import pytest

from brinecrypt.blake2b import CryptoError
from brinecrypt.crypto_auth import (
    CRYPTO_AUTH_BYTES,
    CRYPTO_AUTH_KEYBYTES,
    AuthState,
    crypto_auth,
    crypto_auth_keygen,
    crypto_auth_verify,
)


def _padded(prefix: bytes) -> bytes:
    return prefix.ljust(CRYPTO_AUTH_KEYBYTES, b"\x00")


def test_rfc4231_case_1():
    key = _padded(bytes([0x0B]) * 20)
    mac = crypto_auth(b"Hi There", key)
    assert mac.hex() == (
        "87aa7cdea5ef619d4ff0b4241a1d6cb02379f4e2ce4ec2787ad0b30545e17cde"
    )


def test_rfc4231_case_3():
    key = _padded(bytes([0xAA]) * 20)
    mac = crypto_auth(bytes([0xDD]) * 50, key)
    assert mac.hex() == (
        "fa73b0089d56a284efb0f0756c890be9b1b5dbdd8ee81a3655f83e33b2279d39"
    )


def test_crypto_auth_random():
    rng = random.Random(1234)
    for _ in range(20):
        message = os.urandom(rng.randrange(5000))
        key = crypto_auth_keygen()
        mac = crypto_auth(message, key)
        assert len(mac) == CRYPTO_AUTH_BYTES
        assert mac == hmac.new(key, message, hashlib.sha512).digest()[:32]
        crypto_auth_verify(mac, message, key)
        with pytest.raises(CryptoError):
            crypto_auth_verify(mac, b"invalid message", key)


def test_multi_part_matches_single_part():
    key = crypto_auth_keygen()
    state = AuthState(key)
    state.update(b"Multi-part")
    state.update(b"data")
    mac = state.finalize()
    assert mac == crypto_auth(b"Multi-partdata", key)
    with pytest.raises(CryptoError):
        crypto_auth_verify(mac, b"Invalid data", key)


def test_wrong_key_fails_verification():
    key = crypto_auth_keygen()
    other = bytes(b ^ 1 for b in key)
    mac = crypto_auth(b"message", key)
    with pytest.raises(CryptoError):
        crypto_auth_verify(mac, b"message", other)


def test_invalid_key_length_raises():
    with pytest.raises(CryptoError):
        crypto_auth(b"message", bytes(16))


def test_keygen_length_and_randomness():
    first = crypto_auth_keygen()
    second = crypto_auth_keygen()
    assert len(first) == CRYPTO_AUTH_KEYBYTES
    assert first != second