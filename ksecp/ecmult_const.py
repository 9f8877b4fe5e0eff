"""Fixed-shape point multiplication driven by a signed odd-digit window NAF."""

from __future__ import annotations

from ksecp.curve import (
    INFINITY,
    ORDER,
    WINDOW_A,
    Point,
    odd_multiples_table,
    table_size,
)

WNAF_BITS = 256


def wnaf_size(w: int) -> int:
    """Number of words needed to cover ``WNAF_BITS`` bits in windows of ``w``."""
    return (WNAF_BITS + w - 1) // w


def _check_scalar(scalar: int) -> None:
    if not 0 <= scalar < ORDER:
        raise ValueError("scalar out of range")


def wnaf_const(scalar: int, w: int) -> tuple[int, list[int]]:
    """Return ``(skew, digits)`` for the odd-digit window NAF of ``scalar``.

    Every digit is odd and nonzero with an absolute value below ``2**w``, and
    there are always ``wnaf_size(w) + 1`` of them, least significant first.
    ``sum(d * 2**(w*i))`` equals ``scalar + skew`` modulo the group order,
    where ``skew`` is 1 or 2; the caller subtracts ``skew`` times the base.
    """
    _check_scalar(scalar)
    if not 1 <= w <= 31:
        raise ValueError("window must be between 1 and 31")

    s = scalar
    # Scalars above half the order are negated so their width stays small.
    flip = s > ORDER // 2
    # Even numbers get 1 added, odd ones 2; negation flips the parity.
    bit = int(flip) ^ (s & 1)
    not_neg_one = (ORDER - s) % ORDER != 1
    if not_neg_one:
        s = (s + (1 << bit)) % ORDER
    global_sign = 1
    if flip:
        s = (ORDER - s) % ORDER
        global_sign = -1
    # For -1 only the flip happened, which is the same as skewing by two.
    global_sign *= 1 if not_neg_one else -1
    skew = 1 << bit

    mask = (1 << w) - 1
    u_last = s & mask
    s >>= w
    digits: list[int] = []
    u = 0
    while len(digits) * w < WNAF_BITS:
        u = s & mask
        s >>= w
        even = 1 if (u & 1) == 0 else 0
        sign = 1 if u_last > 0 else -1
        u += sign * even
        u_last -= sign * even * (1 << w)
        digits.append(u_last * global_sign)
        u_last = u
    digits.append(u * global_sign)
    return skew, digits


def _lookup(table: list[Point], n: int) -> Point:
    point = table[abs(n) // 2]
    return point if n > 0 else point.negate()


def ecmult_const(a: Point, scalar: int) -> Point:
    """Return ``scalar * a`` using a fixed sequence of doublings and additions."""
    _check_scalar(scalar)
    if a.infinity:
        raise ValueError("cannot multiply the point at infinity")

    w = WINDOW_A - 1
    skew, digits = wnaf_const(scalar, w)
    pre_a = odd_multiples_table(table_size(WINDOW_A), a)

    result = _lookup(pre_a, digits[-1])
    for n in reversed(digits[:-1]):
        for _ in range(w):
            result = result.double()
        result = result.add(_lookup(pre_a, n))

    # The digits encode scalar + skew; remove the skew.
    correction = a.double() if skew == 2 else a
    return result.add(correction.negate())


__all__ = ["wnaf_const", "ecmult_const", "wnaf_size", "WNAF_BITS", "INFINITY"]