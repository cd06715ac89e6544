import base64
import binascii
import logging
import secrets
from hmac import compare_digest
from typing import Optional

from .config import MIN_SECRET_LENGTH, get_settings
from .errors import DecodeError, LengthError

logger = logging.getLogger(__name__)


def check_length(length: int, unsafe_length: Optional[bool] = None) -> int:
    """
    Applies the secret length policy.

    :param length: number of secret bytes
    :param unsafe_length: allow lengths below the minimum; ``None`` reads the setting
    :returns: the validated length
    """
    if unsafe_length is None:
        unsafe_length = get_settings().unsafe_length
    # Empty keys are never accepted, even with the relaxed policy.
    minimum = 1 if unsafe_length else MIN_SECRET_LENGTH
    if length < minimum:
        raise LengthError(length, minimum)
    return length


class Secret(object):
    """
    Immutable raw key material for HMAC.

    The bytes are never part of ``repr()`` or of any error message.
    """

    __slots__ = ("_value",)

    def __init__(self, data: bytes, unsafe_length: Optional[bool] = None) -> None:
        """
        :param data: raw secret bytes
        :param unsafe_length: allow secrets shorter than 16 bytes; ``None`` reads the setting
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("secret must be bytes, got {}".format(type(data).__name__))
        value = bytes(data)
        check_length(len(value), unsafe_length)
        object.__setattr__(self, "_value", value)

    @classmethod
    def new(cls, data: bytes, unsafe_length: Optional[bool] = None) -> "Secret":
        return cls(data, unsafe_length=unsafe_length)

    @classmethod
    def decode(cls, text: str, unsafe_length: Optional[bool] = None) -> "Secret":
        """
        Parses base32 text (any case, padding optional) into a secret.

        :param text: the base32 encoded secret
        :returns: Secret
        """
        secret = text.strip().replace(" ", "")
        # The otpauth scheme does not use base32 padding.
        missing_padding = len(secret) % 8
        if missing_padding != 0:
            secret += "=" * (8 - missing_padding)
        try:
            value = base64.b32decode(secret, casefold=True)
        except (binascii.Error, ValueError):
            raise DecodeError() from None
        if not value:
            raise DecodeError()
        return cls(value, unsafe_length=unsafe_length)

    @classmethod
    def generate(cls, length: Optional[int] = None, unsafe_length: Optional[bool] = None) -> "Secret":
        """
        Draws a new secret from the operating system's secure random source.

        :param length: number of bytes, defaults to the ``secret_length`` setting (20)
        :returns: Secret
        """
        if length is None:
            length = get_settings().secret_length
        check_length(length, unsafe_length)
        logger.debug("Generating %d byte secret", length)
        return cls(secrets.token_bytes(length), unsafe_length=unsafe_length)

    def encode(self) -> str:
        return base64.b32encode(self._value).decode("ascii").rstrip("=")

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return compare_digest(self._value, other._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Secret is immutable")

    def __repr__(self) -> str:
        return "Secret(<{} bytes>)".format(len(self._value))
