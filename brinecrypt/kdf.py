"""Subkey derivation from a main key, based on keyed BLAKE2b."""

from __future__ import annotations

import secrets
import struct

from .blake2b import PERSONALBYTES, SALTBYTES, Blake2bState, CryptoError

__all__ = [
    "CRYPTO_KDF_KEYBYTES",
    "CRYPTO_KDF_CONTEXTBYTES",
    "CRYPTO_KDF_BYTES_MIN",
    "CRYPTO_KDF_BYTES_MAX",
    "crypto_kdf_keygen",
    "crypto_kdf_derive_from_key",
]

CRYPTO_KDF_KEYBYTES = 32
CRYPTO_KDF_CONTEXTBYTES = 8
CRYPTO_KDF_BYTES_MIN = 16
CRYPTO_KDF_BYTES_MAX = 64


def crypto_kdf_keygen() -> bytes:
    """Generate a random main key for subkey derivation."""
    return secrets.token_bytes(CRYPTO_KDF_KEYBYTES)


def crypto_kdf_derive_from_key(
    subkey_len: int, subkey_id: int, context: bytes, main_key: bytes
) -> bytes:
    """Derive a ``subkey_len``-byte subkey from ``main_key``, ``context`` and ``subkey_id``."""
    if not CRYPTO_KDF_BYTES_MIN <= subkey_len <= CRYPTO_KDF_BYTES_MAX:
        raise CryptoError(
            f"invalid subkey length {subkey_len}, should be at least "
            f"{CRYPTO_KDF_BYTES_MIN} and no more than {CRYPTO_KDF_BYTES_MAX}"
        )
    context = bytes(context)
    if len(context) != CRYPTO_KDF_CONTEXTBYTES:
        raise CryptoError(
            f"invalid context length {len(context)}, expected {CRYPTO_KDF_CONTEXTBYTES}"
        )
    main_key = bytes(main_key)
    if len(main_key) != CRYPTO_KDF_KEYBYTES:
        raise CryptoError(
            f"invalid main key length {len(main_key)}, expected {CRYPTO_KDF_KEYBYTES}"
        )
    if not 0 <= subkey_id <= 0xFFFFFFFFFFFFFFFF:
        raise CryptoError(f"subkey id {subkey_id} out of range")

    salt = struct.pack("<Q", subkey_id).ljust(SALTBYTES, b"\x00")
    personal = context.ljust(PERSONALBYTES, b"\x00")
    state = Blake2bState(CRYPTO_KDF_KEYBYTES, main_key, salt, personal)
    return state.finalize(subkey_len)