"""Generic hashing based on BLAKE2b, optionally keyed."""

from __future__ import annotations

import secrets

from .blake2b import Blake2bState, CryptoError

__all__ = [
    "CRYPTO_GENERICHASH_BYTES",
    "CRYPTO_GENERICHASH_BYTES_MIN",
    "CRYPTO_GENERICHASH_BYTES_MAX",
    "CRYPTO_GENERICHASH_KEYBYTES",
    "CRYPTO_GENERICHASH_KEYBYTES_MIN",
    "CRYPTO_GENERICHASH_KEYBYTES_MAX",
    "GenericHashState",
    "crypto_generichash",
    "crypto_generichash_keygen",
]

CRYPTO_GENERICHASH_BYTES = 32
CRYPTO_GENERICHASH_BYTES_MIN = 16
CRYPTO_GENERICHASH_BYTES_MAX = 64
CRYPTO_GENERICHASH_KEYBYTES = 32
CRYPTO_GENERICHASH_KEYBYTES_MIN = 16
CRYPTO_GENERICHASH_KEYBYTES_MAX = 64


def _check_params(key: bytes | None, outlen: int) -> bytes | None:
    if not CRYPTO_GENERICHASH_BYTES_MIN <= outlen <= CRYPTO_GENERICHASH_BYTES_MAX:
        raise CryptoError(
            f"invalid output length {outlen}, should be at least "
            f"{CRYPTO_GENERICHASH_BYTES_MIN} and no more than "
            f"{CRYPTO_GENERICHASH_BYTES_MAX}"
        )
    if key is None:
        return None
    key = bytes(key)
    if not CRYPTO_GENERICHASH_KEYBYTES_MIN <= len(key) <= CRYPTO_GENERICHASH_KEYBYTES_MAX:
        raise CryptoError(
            f"invalid key length {len(key)}, should be at least "
            f"{CRYPTO_GENERICHASH_KEYBYTES_MIN} and no more than "
            f"{CRYPTO_GENERICHASH_KEYBYTES_MAX}"
        )
    return key


class GenericHashState:
    """Incremental generic hasher producing ``outlen`` bytes."""

    def __init__(
        self, key: bytes | None = None, outlen: int = CRYPTO_GENERICHASH_BYTES
    ) -> None:
        key = _check_params(key, outlen)
        self.outlen = outlen
        self._state = Blake2bState(outlen, key)

    def update(self, data: bytes) -> None:
        """Absorb ``data`` into the hash state."""
        self._state.update(bytes(data))

    def finalize(self) -> bytes:
        """Return the digest; the state cannot be finalized twice."""
        return self._state.finalize(self.outlen)


def crypto_generichash(
    data: bytes,
    outlen: int = CRYPTO_GENERICHASH_BYTES,
    key: bytes | None = None,
) -> bytes:
    """Hash ``data`` in one call, returning ``outlen`` bytes."""
    state = GenericHashState(key, outlen)
    state.update(data)
    return state.finalize()


def crypto_generichash_keygen() -> bytes:
    """Generate a random key for keyed generic hashing."""
    return secrets.token_bytes(CRYPTO_GENERICHASH_KEYBYTES)