from typing import Any, Optional


class OtpError(ValueError):
    """
    Base class for every error raised by otp_std.
    """


class LengthError(OtpError):
    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__("expected secret length of at least {}, got {}".format(minimum, length))


class DecodeError(OtpError):
    # The offending text is the secret itself, so it is not kept.
    def __init__(self) -> None:
        super().__init__("failed to decode base32 secret")


class InvalidDigits(OtpError):
    def __init__(self, value: Any, minimum: int, maximum: int) -> None:
        self.value = value
        super().__init__("expected digits in [{}, {}] range, got {!r}".format(minimum, maximum, value))


class InvalidCounter(OtpError):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("counter must be an unsigned 64-bit integer, got {!r}".format(value))


class InvalidPeriod(OtpError):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("expected period of at least 1 second, got {!r}".format(value))


class InvalidSkew(OtpError):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("skew must be a non-negative integer, got {!r}".format(value))


class ClockError(OtpError):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__("time {!r} is before the epoch".format(value))


class InvalidLabel(OtpError):
    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__("invalid label part {!r}: {}".format(value, reason))


class UrlSyntaxError(OtpError):
    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        # The query string carries the secret; only the reason is reported.
        super().__init__("failed to parse OTP URL: {}".format(reason))


class UnsupportedScheme(UrlSyntaxError):
    def __init__(self, url: str, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(url, "unexpected scheme {!r}; expected 'otpauth'".format(scheme))


class UnsupportedType(OtpError):
    def __init__(self, value: Optional[str]) -> None:
        self.value = value
        super().__init__("unsupported OTP type {!r}; expected 'hotp' or 'totp'".format(value))


class MissingField(OtpError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__("missing required field {!r}".format(field))


class InvalidValue(OtpError):
    def __init__(self, field: str, value: Any, reason: Optional[str] = None) -> None:
        self.field = field
        self.value = value
        if value is None:
            message = "invalid value for field {!r}".format(field)
        else:
            message = "invalid value {!r} for field {!r}".format(value, field)
        if reason:
            message += ": " + reason
        super().__init__(message)


class UnsupportedAlgorithm(InvalidValue):
    def __init__(self, value: Any) -> None:
        super().__init__("algorithm", value, "must be SHA1, SHA256 or SHA512")
