from __future__ import annotations

import pytest

from otp_std.config import get_settings

RFC_SECRET = b"12345678901234567890"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("OTP_STD_UNSAFE_LENGTH", raising=False)
    monkeypatch.delenv("OTP_STD_SECRET_LENGTH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
