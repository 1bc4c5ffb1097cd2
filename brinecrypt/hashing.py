"""SHA-512 hashing with one-shot and incremental interfaces."""

from __future__ import annotations

import hashlib

from .blake2b import CryptoError

__all__ = ["CRYPTO_HASH_SHA512_BYTES", "Sha512State", "crypto_hash_sha512"]

CRYPTO_HASH_SHA512_BYTES = 64


class Sha512State:
    """Incremental SHA-512 hasher that can be finalized once."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha512()
        self._finalized = False

    def update(self, data: bytes) -> None:
        """Absorb ``data`` into the hash state."""
        if self._finalized:
            raise CryptoError("sha512 state already finalized")
        self._hasher.update(bytes(data))

    def finalize(self) -> bytes:
        """Return the 64-byte digest; the state cannot be used afterwards."""
        if self._finalized:
            raise CryptoError("sha512 state already finalized")
        self._finalized = True
        return self._hasher.digest()


def crypto_hash_sha512(data: bytes) -> bytes:
    """Compute the SHA-512 digest of ``data``."""
    state = Sha512State()
    state.update(data)
    return state.finalize()