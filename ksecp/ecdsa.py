"""ECDSA signature encoding, signing and verification on secp256k1."""

from __future__ import annotations

from ksecp.curve import FIELD_P, ORDER, EcmultContext, Point
from ksecp.ecmult_gen import EcmultGenContext

# Difference between the field size and the group order.
_P_MINUS_ORDER = FIELD_P - ORDER

# The widest long-form length the decoder accepts, in bytes.
_MAX_LENGTH_BYTES = 8


class SignatureError(ValueError):
    """A signature could not be parsed, produced or used."""


def _check_scalar(value: int, name: str) -> None:
    if not 0 <= value < ORDER:
        raise ValueError(f"{name} out of range")


def _read_len(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a DER length at ``pos``; return ``(length, new_pos)``."""
    end = len(data)
    if pos >= end:
        raise SignatureError("missing length")
    first = data[pos]
    pos += 1
    if first == 0xFF:
        raise SignatureError("reserved length octet")
    if first & 0x80 == 0:
        return first, pos
    if first == 0x80:
        raise SignatureError("indefinite length is not allowed")
    remaining = first & 0x7F
    if remaining > end - pos:
        raise SignatureError("length exceeds input")
    if data[pos] == 0:
        raise SignatureError("length is not minimally encoded")
    if remaining > _MAX_LENGTH_BYTES:
        raise SignatureError("length too large")
    length = 0
    while remaining > 0:
        length = (length << 8) | data[pos]
        if length + remaining > end - pos:
            raise SignatureError("length exceeds input")
        pos += 1
        remaining -= 1
    if length < 128:
        raise SignatureError("length is not minimally encoded")
    return length, pos


def _parse_integer(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a DER INTEGER at ``pos``; out-of-range values become 0."""
    end = len(data)
    if pos == end or data[pos] != 0x02:
        raise SignatureError("expected an integer")
    pos += 1
    length, pos = _read_len(data, pos)
    if length <= 0 or pos + length > end:
        raise SignatureError("integer length out of bounds")
    if data[pos] == 0x00 and length > 1 and data[pos + 1] & 0x80 == 0x00:
        raise SignatureError("excessive zero padding")
    if data[pos] == 0xFF and length > 1 and data[pos + 1] & 0x80 == 0x80:
        raise SignatureError("excessive 0xFF padding")
    overflow = data[pos] & 0x80 == 0x80
    while length > 0 and data[pos] == 0:
        length -= 1
        pos += 1
    if length > 32:
        overflow = True
    value = 0
    if not overflow:
        value = int.from_bytes(data[pos:pos + length], "big")
        if value >= ORDER:
            value = 0
    return value, pos + length


def sig_parse(data: bytes) -> tuple[int, int]:
    """Parse a DER signature into ``(r, s)``.

    Numbers that are negative or not below the group order are returned as 0,
    which no verification accepts.
    """
    data = bytes(data)
    end = len(data)
    if end == 0 or data[0] != 0x30:
        raise SignatureError("signature is not a DER sequence")
    length, pos = _read_len(data, 1)
    if pos + length > end:
        raise SignatureError("sequence exceeds input")
    if pos + length != end:
        raise SignatureError("garbage after sequence")
    r, pos = _parse_integer(data, pos)
    s, pos = _parse_integer(data, pos)
    if pos != end:
        raise SignatureError("garbage inside sequence")
    return r, s


def _der_integer_body(value: int) -> bytes:
    body = b"\x00" + value.to_bytes(32, "big")
    start = 0
    while len(body) - start > 1 and body[start] == 0 and body[start + 1] < 0x80:
        start += 1
    return body[start:]


def sig_serialize(r: int, s: int) -> bytes:
    """Encode ``(r, s)`` as a DER signature."""
    _check_scalar(r, "r")
    _check_scalar(s, "s")
    r_body = _der_integer_body(r)
    s_body = _der_integer_body(s)
    return (
        bytes((0x30, 4 + len(r_body) + len(s_body), 0x02, len(r_body)))
        + r_body
        + bytes((0x02, len(s_body)))
        + s_body
    )


def sig_verify(ctx: EcmultContext, r: int, s: int, pubkey: Point, message: int) -> bool:
    """Return True when ``(r, s)`` is a valid signature of ``message`` by ``pubkey``.

    High ``s`` values are accepted here; low-S enforcement is left to callers.
    """
    _check_scalar(r, "r")
    _check_scalar(s, "s")
    _check_scalar(message, "message")
    if r == 0 or s == 0:
        return False
    s_inv = pow(s, -1, ORDER)
    u1 = s_inv * message % ORDER
    u2 = s_inv * r % ORDER
    point = ctx.multiply(pubkey, u2, u1)
    if point.infinity:
        return False
    # X(R) mod n == r, with X(R) < p < 2n, leaves two candidates for X(R).
    if point.x == r:
        return True
    if r >= _P_MINUS_ORDER:
        return False
    return point.x == r + ORDER


def sig_sign(
    gen_ctx: EcmultGenContext, seckey: int, message: int, nonce: int
) -> tuple[int, int, int]:
    """Sign ``message`` with ``seckey`` and ``nonce``; return ``(r, s, recid)``.

    ``s`` is always in lower-S form, and ``recid`` is adjusted to match.
    """
    _check_scalar(seckey, "secret key")
    _check_scalar(message, "message")
    _check_scalar(nonce, "nonce")
    if nonce == 0:
        raise ValueError("nonce must not be zero")
    point = gen_ctx.multiply(nonce)
    overflow = point.x >= ORDER
    r = point.x % ORDER
    if r == 0:
        raise SignatureError("nonce produced a zero r value")
    recid = (2 if overflow else 0) | (point.y & 1)
    s = pow(nonce, -1, ORDER) * (r * seckey + message) % ORDER
    if s == 0:
        raise SignatureError("signature has a zero s value")
    if s > ORDER // 2:
        s = ORDER - s
        recid ^= 1
    return r, s, recid