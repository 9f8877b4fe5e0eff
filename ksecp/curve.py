"""Points on secp256k1 and the combined multiplication a*P + b*G."""

from __future__ import annotations

from dataclasses import dataclass

FIELD_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
CURVE_B = 7

WINDOW_A = 5
WINDOW_G = 16


def table_size(w: int) -> int:
    """Number of entries in a table of odd multiples for window ``w``."""
    return 1 << (w - 2)


@dataclass(frozen=True)
class Point:
    """An affine point on secp256k1, or the point at infinity."""

    x: int = 0
    y: int = 0
    infinity: bool = False

    @classmethod
    def from_x(cls, x: int, odd: bool) -> "Point":
        """Return the point with coordinate ``x`` and a ``y`` of the given parity."""
        if not 0 <= x < FIELD_P:
            raise ValueError("x coordinate out of field range")
        y2 = (pow(x, 3, FIELD_P) + CURVE_B) % FIELD_P
        y = pow(y2, (FIELD_P + 1) // 4, FIELD_P)
        if y * y % FIELD_P != y2:
            raise ValueError("x coordinate is not on the curve")
        if (y & 1) != bool(odd):
            y = FIELD_P - y
        return cls(x, y)

    def is_valid(self) -> bool:
        """True for a finite point whose coordinates satisfy the curve equation."""
        if self.infinity:
            return False
        if not (0 <= self.x < FIELD_P and 0 <= self.y < FIELD_P):
            return False
        return (self.y * self.y - pow(self.x, 3, FIELD_P) - CURVE_B) % FIELD_P == 0

    def negate(self) -> "Point":
        """Return the additive inverse."""
        if self.infinity:
            return self
        return Point(self.x, (-self.y) % FIELD_P)

    def double(self) -> "Point":
        """Return twice this point."""
        if self.infinity or self.y % FIELD_P == 0:
            return INFINITY
        slope = 3 * self.x * self.x * pow(2 * self.y, -1, FIELD_P) % FIELD_P
        x3 = (slope * slope - 2 * self.x) % FIELD_P
        y3 = (slope * (self.x - x3) - self.y) % FIELD_P
        return Point(x3, y3)

    def add(self, other: "Point") -> "Point":
        """Return the sum of this point and ``other``."""
        if self.infinity:
            return other
        if other.infinity:
            return self
        if (self.x - other.x) % FIELD_P == 0:
            if (self.y - other.y) % FIELD_P == 0:
                return self.double()
            return INFINITY
        slope = (other.y - self.y) * pow(other.x - self.x, -1, FIELD_P) % FIELD_P
        x3 = (slope * slope - self.x - other.x) % FIELD_P
        y3 = (slope * (self.x - x3) - self.y) % FIELD_P
        return Point(x3, y3)


INFINITY = Point(0, 0, True)

GENERATOR = Point(
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)


def odd_multiples_table(n: int, a: Point) -> list[Point]:
    """Return ``[1*a, 3*a, ..., (2n-1)*a]``."""
    if a.infinity:
        raise ValueError("cannot tabulate multiples of the point at infinity")
    if n < 1:
        raise ValueError("table must have at least one entry")
    twice = a.double()
    table = [a]
    for _ in range(n - 1):
        table.append(table[-1].add(twice))
    return table


def _check_scalar(scalar: int) -> None:
    if not 0 <= scalar < ORDER:
        raise ValueError("scalar out of range")


def ecmult_wnaf(scalar: int, length: int, w: int) -> list[int]:
    """Return the width-``w`` NAF digits of ``scalar``, least significant first.

    The scalar equals ``sum(d * 2**i)`` modulo the group order. Every nonzero
    digit is odd and below ``2**(w-1)`` in absolute value, and two nonzero
    digits are separated by at least ``w - 1`` zeros. The list ends at the
    highest nonzero digit, so its length is at most ``length``.
    """
    _check_scalar(scalar)
    if not 0 <= length <= 256:
        raise ValueError("length must be between 0 and 256")
    if not 2 <= w <= 31:
        raise ValueError("window must be between 2 and 31")

    s = scalar
    sign = 1
    if (s >> 255) & 1:
        s = (ORDER - s) % ORDER
        sign = -1

    wnaf = [0] * length
    last_set_bit = -1
    bit = 0
    carry = 0
    while bit < length:
        if (s >> bit) & 1 == carry:
            bit += 1
            continue
        now = min(w, length - bit)
        word = ((s >> bit) & ((1 << now) - 1)) + carry
        carry = (word >> (w - 1)) & 1
        word -= carry << w
        wnaf[bit] = sign * word
        last_set_bit = bit
        bit += now

    if carry or (s >> length):
        raise ValueError("scalar does not fit in the requested length")
    return wnaf[: last_set_bit + 1]


def _table_get(table: list[Point] | tuple[Point, ...], n: int) -> Point:
    if n > 0:
        return table[(n - 1) // 2]
    return table[(-n - 1) // 2].negate()


class EcmultContext:
    """Precomputed odd multiples of the generator for fast ``a*P + b*G``."""

    def __init__(self) -> None:
        self._pre_g: tuple[Point, ...] | None = None

    def build(self) -> None:
        """Compute the generator table; does nothing if already built."""
        if self._pre_g is not None:
            return
        self._pre_g = tuple(odd_multiples_table(table_size(WINDOW_G), GENERATOR))

    def is_built(self) -> bool:
        """True once the generator table exists."""
        return self._pre_g is not None

    def clone(self) -> "EcmultContext":
        """Return an independent context with the same table."""
        copy = EcmultContext()
        copy._pre_g = self._pre_g
        return copy

    def clear(self) -> None:
        """Drop the generator table."""
        self._pre_g = None

    def multiply(self, a: Point, na: int, ng: int) -> Point:
        """Return ``na*a + ng*G``."""
        _check_scalar(na)
        _check_scalar(ng)
        if self._pre_g is None:
            raise RuntimeError("context is not built")

        if a.infinity or na == 0:
            wnaf_na: list[int] = []
            pre_a: list[Point] = []
        else:
            wnaf_na = ecmult_wnaf(na, 256, WINDOW_A)
            pre_a = odd_multiples_table(table_size(WINDOW_A), a)
        wnaf_ng = ecmult_wnaf(ng, 256, WINDOW_G)
        bits = max(len(wnaf_na), len(wnaf_ng))

        result = INFINITY
        for i in reversed(range(bits)):
            result = result.double()
            if i < len(wnaf_na) and (n := wnaf_na[i]):
                result = result.add(_table_get(pre_a, n))
            if i < len(wnaf_ng) and (n := wnaf_ng[i]):
                result = result.add(_table_get(self._pre_g, n))
        return result