import enum
import hashlib
import hmac
from dataclasses import dataclass
from typing import Any, Callable, Union

from . import utils
from .errors import InvalidDigits, UnsupportedAlgorithm
from .secret import Secret

MIN_DIGITS = 6
MAX_DIGITS = 8
DEFAULT_DIGITS = MIN_DIGITS


class Algorithm(str, enum.Enum):
    """
    Hash function used by the HMAC.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, Algorithm):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedAlgorithm(value) from None

    @property
    def digest(self) -> Callable[..., Any]:
        return _DIGESTS[self]

    @property
    def recommended_length(self) -> int:
        """Secret length in bytes matching the digest size."""
        return self.digest().digest_size

    def __str__(self) -> str:
        return self.value


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}


@dataclass(frozen=True)
class Base(object):
    """
    Shared engine for OTP handlers.

    Holds the secret, the HMAC algorithm and the number of digits; every
    HOTP and TOTP code is computed here.
    """

    secret: Secret
    algorithm: Algorithm = Algorithm.SHA1
    digits: int = DEFAULT_DIGITS

    def __post_init__(self) -> None:
        if not isinstance(self.secret, Secret):
            raise TypeError("secret must be a Secret, got {}".format(type(self.secret).__name__))
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))
        digits = self.digits
        if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise InvalidDigits(digits, MIN_DIGITS, MAX_DIGITS)

    def generate_int(self, counter: int) -> int:
        """
        :param counter: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        # Implements RFC 4226
        hmac_hash = hmac.new(bytes(self.secret), utils.int_to_bytestring(counter), self.algorithm.digest).digest()
        offset = hmac_hash[-1] & 0xF
        code = int.from_bytes(hmac_hash[offset : offset + 4], "big") & 0x7FFFFFFF
        return code % 10**self.digits

    def generate(self, counter: int) -> str:
        """
        Generates the OTP for the given counter, zero padded to ``digits``.

        :param counter: the OTP HMAC counter
        :returns: OTP
        """
        return str(self.generate_int(counter)).rjust(self.digits, "0")

    def verify(self, counter: int, code: Union[str, int]) -> bool:
        """
        Verifies the OTP passed in against the OTP for ``counter``.

        :param counter: the OTP HMAC counter
        :param code: the OTP to check against
        """
        expected = self.generate(counter)
        # An unusable candidate still goes through the full comparison.
        candidate = utils.code_to_string(code, self.digits) or ""
        return utils.strings_equal(expected, candidate)
