"""Deterministic pseudo-random numbers for tests, driven by RFC 6979."""

from __future__ import annotations

import struct

from ksecp.hashing import Rfc6979HmacSha256

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

# Indexed by the bit width of the range: 0 means plain rejection sampling,
# otherwise the number of extra bits drawn to reduce the rejection rate.
_ADDBITS = (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 2, 2, 2, 2, 2, 2, 2, 2, 2,
            3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 2, 1, 0)


class TestRandom:
    """A seeded random source giving reproducible test data."""

    __test__ = False

    def __init__(self, seed16: bytes) -> None:
        seed16 = bytes(seed16)
        if len(seed16) != 16:
            raise ValueError("seed must be exactly 16 bytes")
        self._rng = Rfc6979HmacSha256(seed16)
        self._precomputed: list[int] = []
        self._integer = 0
        self._bits_left = 0

    def rand32(self) -> int:
        """Return a uniform 32-bit unsigned integer."""
        if not self._precomputed:
            block = self._rng.generate(32)
            self._precomputed = list(reversed(struct.unpack("<8I", block)))
        return self._precomputed.pop()

    def rand_bits(self, bits: int) -> int:
        """Return an integer of ``bits`` random bits (1 to 32)."""
        if not 1 <= bits <= 32:
            raise ValueError("bits must be between 1 and 32")
        if self._bits_left < bits:
            self._integer |= self.rand32() << self._bits_left
            self._integer &= _MASK64
            self._bits_left += 32
        result = self._integer & _MASK32
        self._integer >>= bits
        self._bits_left -= bits
        return result & (_MASK32 >> (32 - bits))

    def rand_int(self, range_: int) -> int:
        """Return a uniform integer in ``[0, range_)``; 0 when ``range_ <= 1``."""
        if range_ < 0 or range_ > _MASK32:
            raise ValueError("range must fit in 32 unsigned bits")
        if range_ <= 1:
            return 0
        bits = (range_ - 1).bit_length()
        extra = _ADDBITS[bits]
        if extra:
            bits += extra
            mult = (_MASK32 >> (32 - bits)) // range_
            limit = range_ * mult
        else:
            limit = range_
            mult = 1
        while True:
            x = self.rand_bits(bits)
            if x < limit:
                return x if mult == 1 else x % range_

    def rand256(self) -> bytes:
        """Return 32 uniformly random bytes."""
        return self._rng.generate(32)

    def rand_bytes_test(self, length: int) -> bytes:
        """Return ``length`` bytes made of long runs of equal bits."""
        if length < 0:
            raise ValueError("length must not be negative")
        out = bytearray(length)
        total = length * 8
        bit = 0
        while bit < total:
            run = 1 + (self.rand_bits(6) * self.rand_bits(5) + 16) // 31
            value = self.rand_bits(1)
            end = min(bit + run, total)
            if value:
                for position in range(bit, end):
                    out[position // 8] |= 1 << (position % 8)
            bit = end
        return bytes(out)

    def rand256_test(self) -> bytes:
        """Return 32 bytes made of long runs of equal bits."""
        return self.rand_bytes_test(32)