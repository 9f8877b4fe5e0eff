"""Public key encoding and additive or multiplicative key tweaks."""

from __future__ import annotations

from ksecp.curve import FIELD_P, ORDER, EcmultContext, Point


class EcKeyError(ValueError):
    """A key could not be parsed, serialized or tweaked."""


def _check_scalar(value: int, name: str) -> None:
    if not 0 <= value < ORDER:
        raise ValueError(f"{name} out of range")


def pubkey_parse(data: bytes) -> Point:
    """Parse a compressed, uncompressed or hybrid public key."""
    data = bytes(data)
    if len(data) == 33 and data[0] in (0x02, 0x03):
        x = int.from_bytes(data[1:], "big")
        if x >= FIELD_P:
            raise EcKeyError("x coordinate out of range")
        try:
            return Point.from_x(x, data[0] == 0x03)
        except ValueError as exc:
            raise EcKeyError("x coordinate is not on the curve") from exc
    if len(data) == 65 and data[0] in (0x04, 0x06, 0x07):
        x = int.from_bytes(data[1:33], "big")
        y = int.from_bytes(data[33:], "big")
        if x >= FIELD_P or y >= FIELD_P:
            raise EcKeyError("coordinate out of range")
        if data[0] in (0x06, 0x07) and bool(y & 1) != (data[0] == 0x07):
            raise EcKeyError("hybrid prefix does not match y parity")
        point = Point(x, y)
        if not point.is_valid():
            raise EcKeyError("point is not on the curve")
        return point
    raise EcKeyError("unrecognised public key encoding")


def pubkey_serialize(point: Point, compressed: bool) -> bytes:
    """Encode a point as a 33-byte compressed or 65-byte uncompressed key."""
    if point.infinity:
        raise EcKeyError("cannot serialize the point at infinity")
    x = point.x.to_bytes(32, "big")
    if compressed:
        return bytes([0x02 | (point.y & 1)]) + x
    return b"\x04" + x + point.y.to_bytes(32, "big")


def privkey_tweak_add(key: int, tweak: int) -> int:
    """Return ``key + tweak`` modulo the order; a zero result is an error."""
    _check_scalar(key, "key")
    _check_scalar(tweak, "tweak")
    result = (key + tweak) % ORDER
    if result == 0:
        raise EcKeyError("tweaked key is zero")
    return result


def pubkey_tweak_add(ctx: EcmultContext, key: Point, tweak: int) -> Point:
    """Return ``key + tweak*G``; the point at infinity is an error."""
    _check_scalar(tweak, "tweak")
    result = ctx.multiply(key, 1, tweak)
    if result.infinity:
        raise EcKeyError("tweaked key is the point at infinity")
    return result


def privkey_tweak_mul(key: int, tweak: int) -> int:
    """Return ``key * tweak`` modulo the order; a zero tweak is an error."""
    _check_scalar(key, "key")
    _check_scalar(tweak, "tweak")
    if tweak == 0:
        raise EcKeyError("tweak is zero")
    return key * tweak % ORDER


def pubkey_tweak_mul(ctx: EcmultContext, key: Point, tweak: int) -> Point:
    """Return ``tweak * key``; a zero tweak is an error."""
    _check_scalar(tweak, "tweak")
    if tweak == 0:
        raise EcKeyError("tweak is zero")
    return ctx.multiply(key, tweak, 0)