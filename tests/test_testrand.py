import struct

import pytest

from ksecp.hashing import Rfc6979HmacSha256
from ksecp.testrand import TestRandom

SEED = bytes(range(16))


def test_seed_length_enforced():
    with pytest.raises(ValueError):
        TestRandom(b"short")


def test_same_seed_same_sequence():
    a = TestRandom(SEED)
    b = TestRandom(SEED)
    assert [a.rand32() for _ in range(20)] == [b.rand32() for _ in range(20)]


def test_rand32_comes_from_generator_little_endian():
    rng = TestRandom(SEED)
    block = Rfc6979HmacSha256(SEED).generate(32)
    expected = list(struct.unpack("<8I", block))
    assert [rng.rand32() for _ in range(8)] == expected


def test_rand_bits_32_matches_rand32():
    a = TestRandom(SEED)
    b = TestRandom(SEED)
    assert a.rand_bits(32) == b.rand32()


def test_rand_bits_low_bits_of_first_word():
    a = TestRandom(SEED)
    b = TestRandom(SEED)
    word = b.rand32()
    assert a.rand_bits(8) == word & 0xFF
    assert a.rand_bits(8) == (word >> 8) & 0xFF


@pytest.mark.parametrize("bits", [1, 5, 17, 32])
def test_rand_bits_in_range(bits):
    rng = TestRandom(SEED)
    assert all(0 <= rng.rand_bits(bits) < (1 << bits) for _ in range(200))


@pytest.mark.parametrize("bits", [0, 33])
def test_rand_bits_rejects_bad_width(bits):
    with pytest.raises(ValueError):
        TestRandom(SEED).rand_bits(bits)


@pytest.mark.parametrize("limit", [2, 3, 10, 1000, 70000, 2**31 + 5, 2**32 - 1])
def test_rand_int_in_range(limit):
    rng = TestRandom(SEED)
    assert all(0 <= rng.rand_int(limit) < limit for _ in range(100))


def test_rand_int_trivial_ranges():
    rng = TestRandom(SEED)
    assert rng.rand_int(0) == 0
    assert rng.rand_int(1) == 0


def test_rand_int_covers_small_range():
    rng = TestRandom(SEED)
    assert {rng.rand_int(4) for _ in range(200)} == {0, 1, 2, 3}


def test_rand_int_rejects_oversized_range():
    with pytest.raises(ValueError):
        TestRandom(SEED).rand_int(2**32)


def test_rand256_matches_generator():
    rng = TestRandom(SEED)
    assert rng.rand256() == Rfc6979HmacSha256(SEED).generate(32)


def test_rand_bytes_test_length_and_determinism():
    a = TestRandom(SEED)
    b = TestRandom(SEED)
    out = a.rand_bytes_test(45)
    assert len(out) == 45
    assert out == b.rand_bytes_test(45)


def test_rand256_test_length():
    rng = TestRandom(SEED)
    assert len(rng.rand256_test()) == 32


def test_rand_bytes_test_empty():
    assert TestRandom(SEED).rand_bytes_test(0) == b""