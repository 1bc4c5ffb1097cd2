"""BLAKE2b hashing (RFC 7693) with keying, salt and personalisation.

Also provides the variable-length ``longhash`` construction used by Argon2.
"""

from __future__ import annotations

import struct

__all__ = ["CryptoError", "Blake2bState", "hash", "longhash"]

BLOCKBYTES = 128
OUTBYTES = 64
HALFOUTBYTES = OUTBYTES // 2
KEYBYTES = 64
SALTBYTES = 16
PERSONALBYTES = 16

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK128 = (1 << 128) - 1

_IV = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
)

_G_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


class CryptoError(Exception):
    """Raised when a cryptographic operation gets invalid input or state."""


def _compress(h: list[int], counter: int, final: bool, block: bytes) -> None:
    m = struct.unpack("<16Q", block)
    v = list(h)
    v.extend(_IV[:4])
    v.append(_IV[4] ^ (counter & _MASK64))
    v.append(_IV[5] ^ (counter >> 64))
    v.append(_IV[6] ^ (_MASK64 if final else 0))
    v.append(_IV[7])

    for sigma in _SIGMA:
        for i, (a, b, c, d) in enumerate(_G_LANES):
            x = m[sigma[2 * i]]
            y = m[sigma[2 * i + 1]]
            va, vb, vc, vd = v[a], v[b], v[c], v[d]

            va = (va + vb + x) & _MASK64
            vd ^= va
            vd = (vd >> 32) | ((vd << 32) & _MASK64)
            vc = (vc + vd) & _MASK64
            vb ^= vc
            vb = (vb >> 24) | ((vb << 40) & _MASK64)
            va = (va + vb + y) & _MASK64
            vd ^= va
            vd = (vd >> 16) | ((vd << 48) & _MASK64)
            vc = (vc + vd) & _MASK64
            vb ^= vc
            vb = (vb >> 63) | ((vb << 1) & _MASK64)

            v[a], v[b], v[c], v[d] = va, vb, vc, vd

    for i in range(8):
        h[i] ^= v[i] ^ v[i + 8]


class Blake2bState:
    """Incremental BLAKE2b hasher."""

    def __init__(
        self,
        outlen: int = OUTBYTES,
        key: bytes | None = None,
        salt: bytes | None = None,
        personal: bytes | None = None,
    ) -> None:
        if not 0 < outlen <= OUTBYTES:
            raise CryptoError(f"invalid blake2b outlen: {outlen}")
        key_length = 0 if key is None else len(key)
        if key_length > KEYBYTES:
            raise CryptoError(
                f"invalid blake2b key length: {key_length} max: {KEYBYTES}"
            )
        salt = bytes(SALTBYTES) if salt is None else bytes(salt)
        if len(salt) != SALTBYTES:
            raise CryptoError(f"invalid blake2b salt length: {len(salt)}")
        personal = bytes(PERSONALBYTES) if personal is None else bytes(personal)
        if len(personal) != PERSONALBYTES:
            raise CryptoError(f"invalid blake2b personal length: {len(personal)}")

        params = bytes([outlen, key_length, 1, 1]) + bytes(28) + salt + personal
        self.outlen = outlen
        self._h = [
            iv ^ p for iv, p in zip(_IV, struct.unpack("<8Q", params))
        ]
        self._counter = 0
        self._buf = bytearray()
        self._finalized = False

        if key is not None:
            self.update(bytes(key).ljust(BLOCKBYTES, b"\x00"))

    def update(self, data: bytes) -> None:
        """Absorb ``data`` into the hash state."""
        if not data:
            return
        self._buf.extend(data)
        # The last block is always kept back so finalize can flag it.
        while len(self._buf) > BLOCKBYTES:
            self._counter = (self._counter + BLOCKBYTES) & _MASK128
            _compress(self._h, self._counter, False, bytes(self._buf[:BLOCKBYTES]))
            del self._buf[:BLOCKBYTES]

    def finalize(self, outlen: int | None = None) -> bytes:
        """Finish hashing and return the first ``outlen`` bytes of the digest."""
        if outlen is None:
            outlen = self.outlen
        if not 0 < outlen <= OUTBYTES:
            raise CryptoError(
                f"invalid output length {outlen}, should be <= {OUTBYTES}"
            )
        if self._finalized:
            raise CryptoError("already on last block")

        self._counter = (self._counter + len(self._buf)) & _MASK128
        self._finalized = True
        block = bytes(self._buf).ljust(BLOCKBYTES, b"\x00")
        _compress(self._h, self._counter, True, block)
        self._buf.clear()

        digest = struct.pack("<8Q", *self._h)
        self._h = [0] * 8
        return digest[:outlen]


def hash(data: bytes, outlen: int = OUTBYTES, key: bytes | None = None) -> bytes:
    """Compute a BLAKE2b digest of ``outlen`` bytes in one call."""
    if outlen > OUTBYTES:
        raise CryptoError(f"output length {outlen} greater than max {OUTBYTES}")
    state = Blake2bState(outlen, key)
    state.update(data)
    return state.finalize(outlen)


def longhash(data: bytes, outlen: int) -> bytes:
    """Variable-length BLAKE2b (Argon2's H'), producing ``outlen`` bytes."""
    if outlen <= 4:
        raise CryptoError(f"longhash output length {outlen} must be greater than 4")
    if outlen >= 0xFFFFFFFF:
        raise CryptoError(f"longhash output length {outlen} is too large")

    state = Blake2bState(min(outlen, OUTBYTES))
    state.update(struct.pack("<I", outlen))
    state.update(data)

    if outlen <= OUTBYTES:
        return state.finalize(outlen)

    block = state.finalize(OUTBYTES)
    out = bytearray(block[:HALFOUTBYTES])
    rest = outlen - HALFOUTBYTES
    chunk_count = rest // HALFOUTBYTES - (2 if rest % HALFOUTBYTES == 0 else 1)
    for _ in range(chunk_count):
        block = hash(block, OUTBYTES)
        out.extend(block[:HALFOUTBYTES])
    out.extend(hash(block, outlen - len(out)))
    return bytes(out)