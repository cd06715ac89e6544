"""Library settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_LENGTH = 16
DEFAULT_SECRET_LENGTH = 20


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OTP_STD_", extra="ignore")

    # Allows secrets shorter than MIN_SECRET_LENGTH bytes. Weakens security.
    unsafe_length: bool = False
    # Number of bytes drawn by Secret.generate() when no length is given.
    secret_length: int = Field(default=DEFAULT_SECRET_LENGTH, ge=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()
