"""Argon2i and Argon2id password hashing (version 0x13)."""

from __future__ import annotations

import struct
from enum import IntEnum

from .blake2b import Blake2bState, CryptoError, longhash

__all__ = ["ARGON2_VERSION_NUMBER", "Argon2Type", "argon2_hash"]

ARGON2_VERSION_NUMBER = 0x13

_BLOCK_SIZE = 1024
_QWORDS_IN_BLOCK = _BLOCK_SIZE // 8
_ADDRESSES_IN_BLOCK = 128
_PREHASH_DIGEST_LENGTH = 64
_SYNC_POINTS = 4

_MIN_LANES, _MAX_LANES = 1, 0xFFFFFF
_MIN_OUTLEN, _MAX_OUTLEN = 16, 0xFFFFFFFF
_MIN_MEMORY, _MAX_MEMORY = 2 * _SYNC_POINTS, 0xFFFFFFFF
_MIN_TIME, _MAX_TIME = 1, 0xFFFFFFFF
_MIN_PWD_LENGTH, _MAX_PWD_LENGTH = 0, 0xFFFFFFFF
_MIN_AD_LENGTH, _MAX_AD_LENGTH = 0, 0xFFFFFFFF
_MIN_SALT_LENGTH, _MAX_SALT_LENGTH = 8, 0xFFFFFFFF
_MIN_SECRET, _MAX_SECRET = 0, 0xFFFFFFFF

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_QUARTERS = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

_ROWS = tuple(tuple(range(16 * i, 16 * i + 16)) for i in range(8))
_COL_OFFSETS = (0, 1, 16, 17, 32, 33, 48, 49, 64, 65, 80, 81, 96, 97, 112, 113)
_COLS = tuple(tuple(2 * i + off for off in _COL_OFFSETS) for i in range(8))

# Every G application of the permutation, in order: all rows, then all columns.
_G_STEPS = tuple(
    (idx[a], idx[b], idx[c], idx[d])
    for idx in _ROWS + _COLS
    for a, b, c, d in _QUARTERS
)


class Argon2Type(IntEnum):
    """Argon2 variant."""

    ARGON2I = 1
    ARGON2ID = 2


def _validate(minimum: int, maximum: int, value: int, name: str) -> None:
    if not minimum <= value <= maximum:
        raise CryptoError(
            f"{name} value {value} out of range, must be between {minimum} and {maximum}"
        )


def _permute(v: list[int]) -> None:
    for a, b, c, d in _G_STEPS:
        va, vb, vc, vd = v[a], v[b], v[c], v[d]

        va = (va + vb + 2 * (va & _MASK32) * (vb & _MASK32)) & _MASK64
        vd ^= va
        vd = (vd >> 32) | ((vd << 32) & _MASK64)
        vc = (vc + vd + 2 * (vc & _MASK32) * (vd & _MASK32)) & _MASK64
        vb ^= vc
        vb = (vb >> 24) | ((vb << 40) & _MASK64)
        va = (va + vb + 2 * (va & _MASK32) * (vb & _MASK32)) & _MASK64
        vd ^= va
        vd = (vd >> 16) | ((vd << 48) & _MASK64)
        vc = (vc + vd + 2 * (vc & _MASK32) * (vd & _MASK32)) & _MASK64
        vb ^= vc
        vb = (vb >> 63) | ((vb << 1) & _MASK64)

        v[a], v[b], v[c], v[d] = va, vb, vc, vd


def _fill_block(
    prev_block: list[int], ref_block: list[int], next_block: list[int] | None
) -> list[int]:
    """Apply the compression function G; XOR into ``next_block`` when given."""
    r = [x ^ y for x, y in zip(ref_block, prev_block)]
    tmp = r if next_block is None else [x ^ y for x, y in zip(r, next_block)]
    tmp = list(tmp)
    _permute(r)
    return [x ^ y for x, y in zip(tmp, r)]


def _load_block(data: bytes) -> list[int]:
    return list(struct.unpack(f"<{_QWORDS_IN_BLOCK}Q", data))


def _store_block(block: list[int]) -> bytes:
    return struct.pack(f"<{_QWORDS_IN_BLOCK}Q", *block)


class _Instance:
    def __init__(
        self,
        memory_blocks: int,
        segment_length: int,
        type_: Argon2Type,
        passes: int,
        lanes: int,
    ) -> None:
        self.memory_blocks = memory_blocks
        self.segment_length = segment_length
        self.lane_length = segment_length * _SYNC_POINTS
        self.type_ = type_
        self.passes = passes
        self.lanes = lanes
        self.memory: list[list[int]] = [
            [0] * _QWORDS_IN_BLOCK for _ in range(memory_blocks)
        ]

    def fill_first_blocks(self, h0: bytes) -> None:
        for lane in range(self.lanes):
            base = lane * self.lane_length
            for i in (0, 1):
                seed = h0 + struct.pack("<II", i, lane)
                self.memory[base + i] = _load_block(longhash(seed, _BLOCK_SIZE))

    def fill_memory_blocks(self, pass_: int) -> None:
        for slice_ in range(_SYNC_POINTS):
            for lane in range(self.lanes):
                self._fill_segment(pass_, lane, slice_)

    def finalize(self, outlen: int) -> bytes:
        last = list(self.memory[self.lane_length - 1])
        for lane in range(1, self.lanes):
            block = self.memory[lane * self.lane_length + self.lane_length - 1]
            last = [x ^ y for x, y in zip(last, block)]
        return longhash(_store_block(last), outlen)

    def _generate_addresses(self, pass_: int, lane: int, slice_: int) -> list[int]:
        zero_block = [0] * _QWORDS_IN_BLOCK
        input_block = [0] * _QWORDS_IN_BLOCK
        input_block[0] = pass_
        input_block[1] = lane
        input_block[2] = slice_
        input_block[3] = self.memory_blocks
        input_block[4] = self.passes
        input_block[5] = int(self.type_)

        pseudo_rands: list[int] = []
        while len(pseudo_rands) < self.segment_length:
            input_block[6] += 1
            tmp_block = _fill_block(zero_block, input_block, zero_block)
            address_block = _fill_block(zero_block, tmp_block, zero_block)
            pseudo_rands.extend(address_block)
        return pseudo_rands[: self.segment_length]

    def _index_alpha(
        self, pass_: int, slice_: int, index: int, pseudo_rand: int, same_lane: bool
    ) -> int:
        seg = self.segment_length
        if pass_ == 0:
            if slice_ == 0:
                area = index - 1
            elif same_lane:
                area = slice_ * seg + index - 1
            elif index == 0:
                area = slice_ * seg - 1
            else:
                area = slice_ * seg
        elif same_lane:
            area = self.lane_length - seg + index - 1
        elif index == 0:
            area = self.lane_length - seg - 1
        else:
            area = self.lane_length - seg

        relative = (pseudo_rand * pseudo_rand) >> 32
        relative = area - 1 - ((area * relative) >> 32)

        if pass_ != 0 and slice_ != _SYNC_POINTS - 1:
            start = (slice_ + 1) * seg
        else:
            start = 0
        return (start + relative) % self.lane_length

    def _fill_segment(self, pass_: int, lane: int, slice_: int) -> None:
        data_independent = not (
            self.type_ == Argon2Type.ARGON2ID
            and (pass_ != 0 or slice_ >= _SYNC_POINTS // 2)
        )
        pseudo_rands = (
            self._generate_addresses(pass_, lane, slice_) if data_independent else []
        )

        first_slice = pass_ == 0 and slice_ == 0
        starting_index = 2 if first_slice else 0

        curr = lane * self.lane_length + slice_ * self.segment_length + starting_index
        if curr % self.lane_length == 0:
            prev = curr + self.lane_length - 1
        else:
            prev = curr - 1

        memory = self.memory
        for index in range(starting_index, self.segment_length):
            if curr % self.lane_length == 1:
                prev = curr - 1

            if data_independent:
                pseudo_rand = pseudo_rands[index]
            else:
                pseudo_rand = memory[prev][0]

            ref_lane = lane if first_slice else (pseudo_rand >> 32) % self.lanes
            ref_index = self._index_alpha(
                pass_, slice_, index, pseudo_rand & _MASK32, ref_lane == lane
            )
            ref_block = memory[self.lane_length * ref_lane + ref_index]
            memory[curr] = _fill_block(
                memory[prev], ref_block, memory[curr] if pass_ != 0 else None
            )

            curr += 1
            prev += 1


def _initial_hash(
    t_cost: int,
    m_cost: int,
    lanes: int,
    outlen: int,
    password: bytes,
    salt: bytes,
    secret: bytes | None,
    ad: bytes | None,
    type_: Argon2Type,
) -> bytes:
    state = Blake2bState(_PREHASH_DIGEST_LENGTH)
    state.update(
        struct.pack(
            "<6I", lanes, outlen, m_cost, t_cost, ARGON2_VERSION_NUMBER, int(type_)
        )
    )
    for field in (password, salt, secret or b"", ad or b""):
        state.update(struct.pack("<I", len(field)))
        state.update(field)
    return state.finalize(_PREHASH_DIGEST_LENGTH)


def argon2_hash(
    t_cost: int,
    m_cost: int,
    parallelism: int,
    password: bytes,
    salt: bytes,
    secret: bytes | None = None,
    ad: bytes | None = None,
    outlen: int = 32,
    type_: Argon2Type = Argon2Type.ARGON2ID,
) -> bytes:
    """Derive ``outlen`` bytes from ``password`` and ``salt`` with Argon2."""
    type_ = Argon2Type(type_)
    password = bytes(password)
    salt = bytes(salt)
    secret = None if secret is None else bytes(secret)
    ad = None if ad is None else bytes(ad)

    _validate(_MIN_OUTLEN, _MAX_OUTLEN, outlen, "output")
    _validate(_MIN_PWD_LENGTH, _MAX_PWD_LENGTH, len(password), "password")
    _validate(_MIN_SALT_LENGTH, _MAX_SALT_LENGTH, len(salt), "salt")
    if secret is not None:
        _validate(_MIN_SECRET, _MAX_SECRET, len(secret), "secret")
    if ad is not None:
        _validate(_MIN_AD_LENGTH, _MAX_AD_LENGTH, len(ad), "ad")
    _validate(_MIN_LANES, _MAX_LANES, parallelism, "parallelism")
    _validate(_MIN_MEMORY, _MAX_MEMORY, m_cost, "m_cost")
    _validate(_MIN_TIME, _MAX_TIME, t_cost, "t_cost")

    memory_blocks = max(m_cost, 2 * _SYNC_POINTS * parallelism)
    segment_length = memory_blocks // (parallelism * _SYNC_POINTS)
    memory_blocks = segment_length * parallelism * _SYNC_POINTS

    instance = _Instance(memory_blocks, segment_length, type_, t_cost, parallelism)
    h0 = _initial_hash(
        t_cost, m_cost, parallelism, outlen, password, salt, secret, ad, type_
    )
    instance.fill_first_blocks(h0)
    for pass_ in range(instance.passes):
        instance.fill_memory_blocks(pass_)
    return instance.finalize(outlen)