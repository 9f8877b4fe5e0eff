import pytest

from ksecp.curve import FIELD_P, GENERATOR, ORDER, EcmultContext
from ksecp.ecdsa import SignatureError, sig_parse, sig_serialize, sig_sign, sig_verify
from ksecp.ecmult_gen import EcmultGenContext


@pytest.fixture(scope="module")
def ctx():
    context = EcmultContext()
    context.build()
    return context


@pytest.fixture(scope="module")
def gen_ctx():
    context = EcmultGenContext()
    context.build()
    return context


def test_serialize_small_values():
    assert sig_serialize(1, 1) == bytes([0x30, 0x06, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01])


def test_serialize_pads_high_bit():
    encoded = sig_serialize(0x80, 1)
    assert encoded[2:6] == bytes([0x02, 0x02, 0x00, 0x80])
    assert encoded[1] == len(encoded) - 2


@pytest.mark.parametrize(
    "r,s",
    [(1, 1), (0x80, 0x7F), (ORDER - 1, ORDER // 2), (2**255, 12345), (0, 0)],
)
def test_serialize_parse_round_trip(r, s):
    assert sig_parse(sig_serialize(r, s)) == (r, s)


def test_serialize_rejects_out_of_range():
    with pytest.raises(ValueError):
        sig_serialize(ORDER, 1)


@pytest.mark.parametrize(
    "data",
    [
        b"",
        bytes([0x31, 0x06, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x06, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01, 0x00]),
        bytes([0x30, 0x07, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x80, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x81, 0x06, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x07, 0x02, 0x02, 0x00, 0x01, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x07, 0x02, 0x02, 0xFF, 0x80, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x05, 0x02, 0x00, 0x02, 0x01, 0x01]),
        bytes([0x30, 0x09, 0x02, 0x01, 0x01, 0x02, 0x01, 0x01, 0x05, 0x00, 0x00]),
        bytes([0x30, 0x03, 0x02, 0x01, 0x01]),
    ],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(SignatureError):
        sig_parse(data)


def test_parse_negative_integer_becomes_zero():
    data = bytes([0x30, 0x06, 0x02, 0x01, 0x81, 0x02, 0x01, 0x01])
    assert sig_parse(data) == (0, 1)


def test_sign_verify_round_trip(ctx, gen_ctx):
    seckey = 0x1234567890ABCDEF
    message = 0xDEADBEEF
    nonce = 0x42424242
    pubkey = gen_ctx.multiply(seckey)
    r, s, recid = sig_sign(gen_ctx, seckey, message, nonce)
    assert 0 < r < ORDER
    assert 0 < s <= ORDER // 2
    assert recid in (0, 1)
    assert sig_verify(ctx, r, s, pubkey, message) is True


def test_verify_accepts_high_s(ctx, gen_ctx):
    seckey, message, nonce = 77, 99, 1001
    pubkey = gen_ctx.multiply(seckey)
    r, s, _ = sig_sign(gen_ctx, seckey, message, nonce)
    assert sig_verify(ctx, r, ORDER - s, pubkey, message) is True


def test_verify_rejects_wrong_message(ctx, gen_ctx):
    seckey, message, nonce = 5, 6, 7
    pubkey = gen_ctx.multiply(seckey)
    r, s, _ = sig_sign(gen_ctx, seckey, message, nonce)
    assert sig_verify(ctx, r, s, pubkey, message + 1) is False


def test_verify_rejects_wrong_key(ctx, gen_ctx):
    r, s, _ = sig_sign(gen_ctx, 5, 6, 7)
    assert sig_verify(ctx, r, s, gen_ctx.multiply(8), 6) is False


def test_verify_rejects_zero_values(ctx):
    assert sig_verify(ctx, 0, 1, GENERATOR, 1) is False
    assert sig_verify(ctx, 1, 0, GENERATOR, 1) is False


def test_sign_r_matches_nonce_point(gen_ctx):
    nonce = 31337
    r, _, _ = sig_sign(gen_ctx, 3, 4, nonce)
    assert r == gen_ctx.multiply(nonce).x % ORDER


def test_sign_zero_s_raises(gen_ctx):
    seckey, nonce = 11, 13
    r = gen_ctx.multiply(nonce).x % ORDER
    message = (-r * seckey) % ORDER
    with pytest.raises(SignatureError):
        sig_sign(gen_ctx, seckey, message, nonce)


def test_sign_zero_nonce_raises(gen_ctx):
    with pytest.raises(ValueError):
        sig_sign(gen_ctx, 1, 1, 0)


def test_sign_rejects_out_of_range_key(gen_ctx):
    with pytest.raises(ValueError):
        sig_sign(gen_ctx, ORDER, 1, 1)


def test_der_round_trip_of_real_signature(ctx, gen_ctx):
    seckey, message, nonce = 2**200 + 3, 2**250 + 7, 2**100 + 9
    r, s, _ = sig_sign(gen_ctx, seckey, message, nonce)
    parsed = sig_parse(sig_serialize(r, s))
    assert parsed == (r, s)
    assert sig_verify(ctx, *parsed, gen_ctx.multiply(seckey), message) is True
    assert FIELD_P > ORDER