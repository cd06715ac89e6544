"""Tests for the shared HMAC truncation engine."""

from __future__ import annotations

import pytest

from otp_std import Algorithm, Base, Secret
from otp_std.errors import InvalidCounter, InvalidDigits, UnsupportedAlgorithm

from .conftest import RFC_SECRET

# RFC 4226, Appendix D
HOTP_CODES = [
    "755224",
    "287082",
    "359152",
    "969429",
    "338314",
    "254676",
    "287922",
    "162583",
    "399871",
    "520489",
]


@pytest.fixture
def base():
    return Base(Secret(RFC_SECRET))


def test_defaults(base):
    assert base.algorithm is Algorithm.SHA1
    assert base.digits == 6


def test_rfc4226_vectors(base):
    for counter, code in enumerate(HOTP_CODES):
        assert base.generate(counter) == code
        assert base.generate_int(counter) == int(code)
        assert base.verify(counter, code)
        assert base.verify(counter, int(code))


def test_generate_is_deterministic(base):
    other = Base(Secret(RFC_SECRET))
    assert base.generate(42) == base.generate(42) == other.generate(42)


def test_verify_rejects_other_codes(base):
    code = base.generate(0)
    assert not base.verify(1, code)
    assert not base.verify(0, "000000" if code != "000000" else "111111")
    assert not base.verify(0, code[:-1])
    assert not base.verify(0, code + "0")
    assert not base.verify(0, "")
    assert not base.verify(0, -1)


def test_verify_normalizes_unicode_digits(base):
    fullwidth = "".join(chr(ord(c) + 0xFEE0) for c in HOTP_CODES[0])
    assert base.verify(0, fullwidth)


def test_zero_padding():
    base = Base(Secret(RFC_SECRET), digits=8)
    for counter in range(50):
        code = base.generate(counter)
        assert len(code) == 8
        assert code.isdigit()


def test_sixteen_byte_secret_scenario():
    base = Base(Secret.decode("JEQDYMZAN5YGK3RAONXXK4TDMU"), algorithm=Algorithm.SHA1, digits=6)
    result = base.generate(0)
    recomputed = Base(Secret.decode("JEQDYMZAN5YGK3RAONXXK4TDMU")).generate(0)
    assert result == recomputed
    assert base.verify(0, result)
    assert not base.verify(1, result)


@pytest.mark.parametrize("digits", [0, 5, 9, 10, -6, "6", True])
def test_invalid_digits(digits):
    with pytest.raises(InvalidDigits):
        Base(Secret(RFC_SECRET), digits=digits)


def test_algorithm_by_name():
    assert Base(Secret(RFC_SECRET), algorithm="SHA256").algorithm is Algorithm.SHA256
    with pytest.raises(UnsupportedAlgorithm):
        Base(Secret(RFC_SECRET), algorithm="MD5")


def test_recommended_length():
    assert Algorithm.SHA1.recommended_length == 20
    assert Algorithm.SHA256.recommended_length == 32
    assert Algorithm.SHA512.recommended_length == 64


@pytest.mark.parametrize("counter", [-1, 2**64])
def test_counter_out_of_range(base, counter):
    with pytest.raises(InvalidCounter):
        base.generate(counter)


def test_max_counter(base):
    assert len(base.generate(2**64 - 1)) == 6


def test_base_is_frozen(base):
    with pytest.raises(AttributeError):
        base.digits = 8
