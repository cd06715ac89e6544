from typing import Optional

from .auth import Auth as Auth
from .auth import Label as Label
from .auth import OtpType as OtpType
from .auth import Part as Part
from .auth import build_url as build_url
from .auth import parse_url as parse_url
from .errors import OtpError as OtpError
from .hotp import Hotp as Hotp
from .otp import Algorithm as Algorithm
from .otp import Base as Base
from .secret import Secret as Secret
from .totp import Totp as Totp


def random_base32(length: Optional[int] = None) -> str:
    """
    Base32 text of a freshly generated secret.

    :param length: number of secret bytes, defaults to the ``secret_length`` setting (20)
    """
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 5 bytes.
    return Secret.generate(length).encode()
