"""Serializable records for Base, Hotp and Totp."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidValue, MissingField
from .hotp import Hotp
from .otp import DEFAULT_DIGITS, Algorithm, Base
from .secret import Secret
from .totp import DEFAULT_PERIOD, DEFAULT_SKEW, Totp
from .utils import MAX_COUNTER


class BaseRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    secret: str
    algorithm: Algorithm = Algorithm.SHA1
    digits: int = DEFAULT_DIGITS

    @classmethod
    def of(cls, base: Base) -> BaseRecord:
        return cls(secret=base.secret.encode(), algorithm=base.algorithm, digits=base.digits)

    def build(self) -> Base:
        return Base(Secret.decode(self.secret), algorithm=self.algorithm, digits=self.digits)


class HotpRecord(BaseRecord):
    counter: int = Field(ge=0, le=MAX_COUNTER)

    @classmethod
    def of(cls, hotp: Hotp) -> HotpRecord:  # type: ignore[override]
        base = BaseRecord.of(hotp.base)
        return cls(**base.model_dump(), counter=hotp.counter)

    def build(self) -> Hotp:  # type: ignore[override]
        return Hotp(super().build(), counter=self.counter)


class TotpRecord(BaseRecord):
    skew: int = DEFAULT_SKEW
    period: int = DEFAULT_PERIOD

    @classmethod
    def of(cls, totp: Totp) -> TotpRecord:  # type: ignore[override]
        base = BaseRecord.of(totp.base)
        return cls(**base.model_dump(), skew=totp.skew, period=totp.period)

    def build(self) -> Totp:  # type: ignore[override]
        return Totp(super().build(), skew=self.skew, period=self.period)


def dump(otp: Union[Base, Hotp, Totp]) -> dict[str, Any]:
    """Structured form of ``otp``; fields equal to their defaults are left out."""
    record: BaseRecord
    if isinstance(otp, Hotp):
        record = HotpRecord.of(otp)
    elif isinstance(otp, Totp):
        record = TotpRecord.of(otp)
    else:
        record = BaseRecord.of(otp)
    return record.model_dump(mode="json", exclude_defaults=True)


def _validate(model: type[BaseRecord], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(item) for item in error["loc"]) or "?"
        if error["type"] == "missing":
            raise MissingField(field) from e
        value = None if field == "secret" else error.get("input")
        raise InvalidValue(field, value, error["msg"]) from e


def load_base(data: dict[str, Any]) -> Base:
    return _validate(BaseRecord, data).build()


def load_hotp(data: dict[str, Any]) -> Hotp:
    return _validate(HotpRecord, data).build()


def load_totp(data: dict[str, Any]) -> Totp:
    return _validate(TotpRecord, data).build()
