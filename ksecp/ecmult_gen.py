"""Blinded multiplication of the generator using a 64x16 precomputed table."""

from __future__ import annotations

from ksecp.curve import FIELD_P, GENERATOR, INFINITY, ORDER, Point
from ksecp.hashing import Rfc6979HmacSha256

# A curve point whose discrete logarithm nobody knows.
_NUMS_X = int.from_bytes(b"The scalar for this x is unknown", "big")


def _build_table() -> tuple[tuple[Point, ...], ...]:
    # Adding G makes the bits of the starting point uniformly distributed.
    nums = Point.from_x(_NUMS_X, False).add(GENERATOR)
    gbase = GENERATOR
    numsbase = nums
    rows = []
    for j in range(64):
        row = [numsbase]
        for _ in range(15):
            row.append(row[-1].add(gbase))
        rows.append(tuple(row))
        for _ in range(4):
            gbase = gbase.double()
        numsbase = numsbase.double()
        if j == 62:
            # The last row uses (1 - 2^63) * nums so that all offsets cancel.
            numsbase = numsbase.negate().add(nums)
    return tuple(rows)


class EcmultGenContext:
    """Context for computing ``a*G`` with a randomized blinding offset."""

    def __init__(self) -> None:
        self._prec: tuple[tuple[Point, ...], ...] | None = None
        self._blind = 0
        self._initial = INFINITY

    def build(self) -> None:
        """Compute the table and reset blinding; does nothing if already built."""
        if self._prec is not None:
            return
        self._prec = _build_table()
        self.blind(None)

    def is_built(self) -> bool:
        """True once the table exists."""
        return self._prec is not None

    def clone(self) -> "EcmultGenContext":
        """Return an independent context with the same table and blinding."""
        copy = EcmultGenContext()
        if self._prec is not None:
            copy._prec = self._prec
            copy._blind = self._blind
            copy._initial = self._initial
        return copy

    def clear(self) -> None:
        """Drop the table and blinding state."""
        self._prec = None
        self._blind = 0
        self._initial = INFINITY

    def multiply(self, scalar: int) -> Point:
        """Return ``scalar * G``."""
        if not 0 <= scalar < ORDER:
            raise ValueError("scalar out of range")
        if self._prec is None:
            raise RuntimeError("context is not built")
        # Compute (n - b)G + bG instead of nG.
        blinded = (scalar + self._blind) % ORDER
        result = self._initial
        for j, row in enumerate(self._prec):
            result = result.add(row[(blinded >> (4 * j)) & 0xF])
        return result

    def blind(self, seed32: bytes | None) -> None:
        """Update the blinding value; ``None`` resets it to the initial state."""
        if self._prec is None:
            raise RuntimeError("context is not built")
        if seed32 is not None:
            seed32 = bytes(seed32)
            if len(seed32) != 32:
                raise ValueError("seed must be exactly 32 bytes")
        if seed32 is None:
            self._initial = GENERATOR.negate()
            self._blind = 1
        # The prior blinding value is chained forward through the hash.
        keydata = self._blind.to_bytes(32, "big")
        if seed32 is not None:
            keydata += seed32
        rng = Rfc6979HmacSha256(keydata)
        # The projective rescaling factor changes only the internal Jacobian
        # form, never the affine point; it is still drawn so the blinding
        # scalar comes from the same position in the stream.
        while True:
            s = int.from_bytes(rng.generate(32), "big")
            if 0 < s < FIELD_P:
                break
        while True:
            b = int.from_bytes(rng.generate(32), "big")
            if 0 < b < ORDER:
                break
        rng.finalize()
        gb = self.multiply(b)
        self._blind = (ORDER - b) % ORDER
        self._initial = gb