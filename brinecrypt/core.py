"""The HChaCha20 and HSalsa20 core functions."""

from __future__ import annotations

import struct

from .blake2b import CryptoError

__all__ = [
    "CRYPTO_CORE_HCHACHA20_INPUTBYTES",
    "CRYPTO_CORE_HCHACHA20_KEYBYTES",
    "CRYPTO_CORE_HCHACHA20_OUTPUTBYTES",
    "CRYPTO_CORE_HSALSA20_INPUTBYTES",
    "CRYPTO_CORE_HSALSA20_KEYBYTES",
    "CRYPTO_CORE_HSALSA20_OUTPUTBYTES",
    "crypto_core_hchacha20",
    "crypto_core_hsalsa20",
]

CRYPTO_CORE_HCHACHA20_INPUTBYTES = 16
CRYPTO_CORE_HCHACHA20_KEYBYTES = 32
CRYPTO_CORE_HCHACHA20_OUTPUTBYTES = 32
CRYPTO_CORE_HSALSA20_INPUTBYTES = 16
CRYPTO_CORE_HSALSA20_KEYBYTES = 32
CRYPTO_CORE_HSALSA20_OUTPUTBYTES = 32

_MASK32 = 0xFFFFFFFF
_SIGMA = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

_CHACHA_QUARTERS = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

_SALSA_QUARTERS = (
    (0, 4, 8, 12),
    (5, 9, 13, 1),
    (10, 14, 2, 6),
    (15, 3, 7, 11),
    (0, 1, 2, 3),
    (5, 6, 7, 4),
    (10, 11, 8, 9),
    (15, 12, 13, 14),
)


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK32


def _check_inputs(
    data: bytes, key: bytes, constants: tuple[int, int, int, int] | None
) -> tuple[bytes, bytes, tuple[int, ...]]:
    data = bytes(data)
    key = bytes(key)
    if len(data) != 16:
        raise CryptoError(f"invalid input length {len(data)}, expected 16")
    if len(key) != 32:
        raise CryptoError(f"invalid key length {len(key)}, expected 32")
    if constants is None:
        consts: tuple[int, ...] = _SIGMA
    else:
        consts = tuple(constants)
        if len(consts) != 4 or any(not 0 <= c <= _MASK32 for c in consts):
            raise CryptoError("constants must be four 32-bit unsigned integers")
    return data, key, consts


def crypto_core_hchacha20(
    data: bytes,
    key: bytes,
    constants: tuple[int, int, int, int] | None = None,
) -> bytes:
    """Apply HChaCha20 to a 16-byte input and a 32-byte key, giving 32 bytes."""
    data, key, consts = _check_inputs(data, key, constants)
    x = list(consts) + list(struct.unpack("<8I", key)) + list(struct.unpack("<4I", data))

    for _ in range(10):
        for a, b, c, d in _CHACHA_QUARTERS:
            x[a] = (x[a] + x[b]) & _MASK32
            x[d] = _rotl(x[d] ^ x[a], 16)
            x[c] = (x[c] + x[d]) & _MASK32
            x[b] = _rotl(x[b] ^ x[c], 12)
            x[a] = (x[a] + x[b]) & _MASK32
            x[d] = _rotl(x[d] ^ x[a], 8)
            x[c] = (x[c] + x[d]) & _MASK32
            x[b] = _rotl(x[b] ^ x[c], 7)

    return struct.pack("<8I", *x[0:4], *x[12:16])


def crypto_core_hsalsa20(
    data: bytes,
    key: bytes,
    constants: tuple[int, int, int, int] | None = None,
) -> bytes:
    """Apply HSalsa20 to a 16-byte input and a 32-byte key, giving 32 bytes."""
    data, key, consts = _check_inputs(data, key, constants)
    k = struct.unpack("<8I", key)
    n = struct.unpack("<4I", data)
    x = [
        consts[0], k[0], k[1], k[2],
        k[3], consts[1], n[0], n[1],
        n[2], n[3], consts[2], k[4],
        k[5], k[6], k[7], consts[3],
    ]

    for _ in range(10):
        for y0, y1, y2, y3 in _SALSA_QUARTERS:
            x[y1] ^= _rotl((x[y0] + x[y3]) & _MASK32, 7)
            x[y2] ^= _rotl((x[y1] + x[y0]) & _MASK32, 9)
            x[y3] ^= _rotl((x[y2] + x[y1]) & _MASK32, 13)
            x[y0] ^= _rotl((x[y3] + x[y2]) & _MASK32, 18)

    return struct.pack("<8I", x[0], x[5], x[10], x[15], x[6], x[7], x[8], x[9])