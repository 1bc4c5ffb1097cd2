"""Secret-key message authentication using HMAC-SHA512-256."""

from __future__ import annotations

import hmac
import secrets

from .blake2b import CryptoError
from .hashing import Sha512State, crypto_hash_sha512

__all__ = [
    "CRYPTO_AUTH_BYTES",
    "CRYPTO_AUTH_KEYBYTES",
    "AuthState",
    "crypto_auth",
    "crypto_auth_verify",
    "crypto_auth_keygen",
]

CRYPTO_AUTH_BYTES = 32
CRYPTO_AUTH_KEYBYTES = 32

_BLOCK = 128


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != CRYPTO_AUTH_KEYBYTES:
        raise CryptoError(
            f"invalid key length {len(key)}, expected {CRYPTO_AUTH_KEYBYTES}"
        )
    return key


class AuthState:
    """Incremental HMAC-SHA512-256 authenticator."""

    def __init__(self, key: bytes) -> None:
        key = _check_key(key)
        if len(key) > _BLOCK:
            key = crypto_hash_sha512(key)
        padded = key.ljust(_BLOCK, b"\x00")
        self._inner = Sha512State()
        self._inner.update(bytes(b ^ 0x36 for b in padded))
        self._outer = Sha512State()
        self._outer.update(bytes(b ^ 0x5C for b in padded))

    def update(self, data: bytes) -> None:
        """Absorb ``data`` into the authenticator."""
        self._inner.update(data)

    def finalize(self) -> bytes:
        """Return the 32-byte authentication code."""
        self._outer.update(self._inner.finalize())
        return self._outer.finalize()[:CRYPTO_AUTH_BYTES]


def crypto_auth(message: bytes, key: bytes) -> bytes:
    """Compute the authentication code for ``message`` under ``key``."""
    state = AuthState(key)
    state.update(message)
    return state.finalize()


def crypto_auth_verify(mac: bytes, message: bytes, key: bytes) -> None:
    """Raise CryptoError unless ``mac`` authenticates ``message`` under ``key``."""
    computed = crypto_auth(message, key)
    if not hmac.compare_digest(bytes(mac), computed):
        raise CryptoError("authentication codes do not match")


def crypto_auth_keygen() -> bytes:
    """Generate a random authentication key."""
    return secrets.token_bytes(CRYPTO_AUTH_KEYBYTES)