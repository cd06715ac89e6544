"""
Provisioning URIs for authenticator apps.

The URL looks like this::

    otpauth://totp/FooCorp:alice%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=FooCorp&algorithm=SHA256

See also:
    https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Union
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from .errors import (
    DecodeError,
    InvalidCounter,
    InvalidDigits,
    InvalidLabel,
    InvalidPeriod,
    InvalidValue,
    LengthError,
    MissingField,
    UnsupportedScheme,
    UnsupportedType,
    UrlSyntaxError,
)
from .hotp import Hotp
from .otp import DEFAULT_DIGITS, Algorithm, Base
from .secret import Secret
from .totp import DEFAULT_PERIOD, Totp

logger = logging.getLogger(__name__)

SCHEME = "otpauth"
SEPARATOR = ":"


class OtpType(str, enum.Enum):
    HOTP = "hotp"
    TOTP = "totp"

    def __str__(self) -> str:
        return self.value


class Part(str):
    """
    One side of a label: non-empty text without the ``:`` separator.
    """

    def __new__(cls, value: str) -> "Part":
        if not isinstance(value, str):
            raise TypeError("label part must be a string, got {}".format(type(value).__name__))
        if not value:
            raise InvalidLabel(value, "the part is empty")
        if SEPARATOR in value:
            raise InvalidLabel(value, "unexpected {!r}".format(SEPARATOR))
        return super().__new__(cls, value)

    @classmethod
    def decode(cls, text: str) -> "Part":
        try:
            value = unquote(text, errors="strict")
        except UnicodeDecodeError:
            raise InvalidLabel(text, "invalid utf-8 encountered when decoding") from None
        return cls(value)

    def quoted(self) -> str:
        return quote(str(self), safe="")


@dataclass(frozen=True)
class Label(object):
    """
    Account identification shown by authenticator apps.
    """

    user: Part
    issuer: Optional[Part] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "user", Part(self.user))
        if self.issuer is not None:
            object.__setattr__(self, "issuer", Part(self.issuer))

    @classmethod
    def decode(cls, text: str) -> "Label":
        """
        Parses a percent-encoded label, splitting the issuer off at the first separator.
        """
        if not text:
            raise InvalidLabel(text, "empty label encountered")
        parts = re.split(":|%3A", text, maxsplit=1, flags=re.IGNORECASE)
        if len(parts) == 1:
            return cls(user=Part.decode(parts[0]))
        return cls(user=Part.decode(parts[1]), issuer=Part.decode(parts[0]))

    def encode(self) -> str:
        if self.issuer is None:
            return self.user.quoted()
        return self.issuer.quoted() + SEPARATOR + self.user.quoted()

    def __str__(self) -> str:
        if self.issuer is None:
            return str(self.user)
        return self.issuer + SEPARATOR + self.user


Otp = Union[Hotp, Totp]


@dataclass
class Auth(object):
    """
    An HOTP or TOTP handler together with the label identifying its account.
    """

    otp: Otp
    label: Label

    def __post_init__(self) -> None:
        if not isinstance(self.otp, (Hotp, Totp)):
            raise TypeError("otp must be Hotp or Totp, got {}".format(type(self.otp).__name__))

    @property
    def type_of(self) -> OtpType:
        return OtpType.HOTP if isinstance(self.otp, Hotp) else OtpType.TOTP

    @property
    def base(self) -> Base:
        return self.otp.base

    def build_url(self) -> str:
        return build_url(self)

    @classmethod
    def parse_url(cls, url: str) -> "Auth":
        return parse_url(url)


def build_url(auth: Auth) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision an OTP app like
    Google Authenticator. Parameters equal to their defaults are left out; the
    verification skew is never part of the URI.

    :param auth: the OTP handler and its label
    :returns: provisioning uri
    """
    otp = auth.otp
    base = otp.base

    url_args: Dict[str, Union[int, str]] = {"secret": base.secret.encode()}
    if auth.label.issuer is not None:
        url_args["issuer"] = str(auth.label.issuer)
    if base.algorithm != Algorithm.SHA1:
        url_args["algorithm"] = base.algorithm.value
    if base.digits != DEFAULT_DIGITS:
        url_args["digits"] = base.digits
    if isinstance(otp, Hotp):
        url_args["counter"] = otp.counter
    elif otp.period != DEFAULT_PERIOD:
        url_args["period"] = otp.period

    base_uri = "{0}://{1}/{2}?{3}"
    return base_uri.format(SCHEME, auth.type_of, auth.label.encode(), urlencode(url_args).replace("+", "%20"))


def _parse_int(field: str, value: str) -> int:
    # u64 max has 20 digits
    if not (value.isascii() and value.isdigit()) or len(value) > 20:
        raise InvalidValue(field, value, "expected a non-negative integer")
    return int(value)


def _parse_query(query: str) -> Dict[str, str]:
    result: Dict[str, str] = {}
    # Undecodable bytes survive as lone surrogates, which cannot be re-encoded.
    for key, value in parse_qsl(query, keep_blank_values=True, errors="surrogateescape"):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidValue(key, None, "invalid utf-8 encountered when decoding") from None
        result[key] = value
    return result


def _extract_base(query: Dict[str, str]) -> Base:
    secret_text = query.get("secret")
    if not secret_text:
        raise MissingField("secret")
    try:
        secret = Secret.decode(secret_text)
    except (DecodeError, LengthError) as e:
        raise InvalidValue("secret", None, str(e)) from e

    algorithm = Algorithm.parse(query.get("algorithm", Algorithm.SHA1.value))

    digits_text = query.get("digits")
    digits = DEFAULT_DIGITS if digits_text is None else _parse_int("digits", digits_text)
    try:
        return Base(secret, algorithm=algorithm, digits=digits)
    except InvalidDigits as e:
        raise InvalidValue("digits", digits_text, str(e)) from e


def _extract_hotp(query: Dict[str, str]) -> Hotp:
    base = _extract_base(query)
    counter_text = query.get("counter")
    if counter_text is None:
        raise MissingField("counter")
    try:
        return Hotp(base, counter=_parse_int("counter", counter_text))
    except InvalidCounter as e:
        raise InvalidValue("counter", counter_text, str(e)) from e


def _extract_totp(query: Dict[str, str]) -> Totp:
    base = _extract_base(query)
    period_text = query.get("period")
    period = DEFAULT_PERIOD if period_text is None else _parse_int("period", period_text)
    try:
        return Totp(base, period=period)
    except InvalidPeriod as e:
        raise InvalidValue("period", period_text, str(e)) from e


def parse_url(url: str) -> Auth:
    """
    Parses the provisioning URI for the OTP; works for either TOTP or HOTP.

    :param url: the hotp/totp URI to parse
    :returns: Auth object
    """
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise UrlSyntaxError(url, str(e)) from e

    if parsed.scheme != SCHEME:
        raise UnsupportedScheme(url, parsed.scheme)
    if not parsed.netloc:
        raise UrlSyntaxError(url, "missing OTP type")
    try:
        otp_type = OtpType(parsed.netloc.lower())
    except ValueError:
        raise UnsupportedType(parsed.netloc) from None

    path = parsed.path[1:]
    if not path:
        raise UrlSyntaxError(url, "missing label")
    label = Label.decode(path)

    query = _parse_query(parsed.query)

    issuer = query.get("issuer")
    if issuer is not None:
        if label.issuer is None:
            try:
                label = Label(user=label.user, issuer=Part(issuer))
            except InvalidLabel as e:
                raise InvalidValue("issuer", issuer, e.reason) from e
        elif label.issuer != issuer:
            raise InvalidValue("issuer", issuer, "if issuer is specified in both label and parameters, it should be equal")

    otp: Otp
    if otp_type is OtpType.HOTP:
        otp = _extract_hotp(query)
    else:
        otp = _extract_totp(query)

    logger.debug("Parsed %s URI (issuer present: %s)", otp_type, label.issuer is not None)
    return Auth(otp=otp, label=label)
