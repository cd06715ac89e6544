"""Tests for secret encoding, length policy and generation."""

from __future__ import annotations

import pytest

from otp_std import Secret, random_base32
from otp_std.config import Settings, get_settings
from otp_std.errors import DecodeError, LengthError

from .conftest import RFC_SECRET


def test_decode_known_secret():
    secret = Secret.decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
    assert bytes(secret) == RFC_SECRET


def test_decode_is_case_insensitive_and_accepts_missing_padding():
    upper = Secret.decode("JEQDYMZAN5YGK3RAONXXK4TDMU")
    lower = Secret.decode("jeqdymzan5ygk3raonxxk4tdmu")
    assert upper == lower
    assert len(upper) == 16


def test_encode_round_trip():
    for data in (RFC_SECRET, bytes(range(16)), bytes(range(255, 222, -1)), b"\x00" * 17):
        secret = Secret(data)
        assert Secret.decode(secret.encode()) == secret
        assert "=" not in secret.encode()


@pytest.mark.parametrize("text", ["not base32!", "ABC1", "A", ""])
def test_decode_rejects_malformed_text(text):
    with pytest.raises(DecodeError):
        Secret.decode(text)


def test_decode_error_is_not_a_length_error():
    with pytest.raises(LengthError):
        Secret.decode("GEZDGNBVGY3TQOJQ")  # 10 bytes
    assert not issubclass(DecodeError, LengthError)


def test_ten_byte_secret_rejected_by_default():
    with pytest.raises(LengthError) as info:
        Secret(b"0123456789")
    assert info.value.length == 10
    assert info.value.minimum == 16


def test_ten_byte_secret_accepted_with_unsafe_length():
    secret = Secret(b"0123456789", unsafe_length=True)
    assert len(secret) == 10


def test_unsafe_length_from_environment(monkeypatch):
    monkeypatch.setenv("OTP_STD_UNSAFE_LENGTH", "true")
    get_settings.cache_clear()
    assert len(Secret.new(b"0123456789")) == 10


def test_empty_secret_always_rejected():
    with pytest.raises(LengthError):
        Secret(b"", unsafe_length=True)


def test_generate_uses_default_length():
    secret = Secret.generate()
    assert len(secret) == 20
    assert Secret.generate() != secret


def test_generate_applies_length_policy():
    with pytest.raises(LengthError):
        Secret.generate(8)
    assert len(Secret.generate(8, unsafe_length=True)) == 8


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.unsafe_length is False
    assert settings.secret_length == 20


def test_random_base32():
    text = random_base32()
    assert len(Secret.decode(text)) == 20
    assert len(Secret.decode(random_base32(32))) == 32


def test_repr_hides_secret():
    secret = Secret(RFC_SECRET)
    assert repr(secret) == "Secret(<20 bytes>)"
    assert secret.encode() not in repr(secret)


def test_secret_is_immutable():
    secret = Secret(RFC_SECRET)
    with pytest.raises(AttributeError):
        secret._value = b"x" * 20


@pytest.mark.parametrize("data", [16, "0123456789abcdef", None])
def test_secret_requires_bytes(data):
    with pytest.raises(TypeError):
        Secret(data, unsafe_length=True)


def test_secret_accepts_bytearray():
    assert bytes(Secret(bytearray(RFC_SECRET))) == RFC_SECRET
