import datetime
import time
import unicodedata
from hmac import compare_digest
from typing import Optional, Union

from .errors import ClockError, InvalidCounter

MAX_COUNTER = 2**64 - 1

Instant = Union[None, int, float, datetime.datetime]


def check_counter(counter: int) -> int:
    if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= MAX_COUNTER:
        raise InvalidCounter(counter)
    return counter


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    return check_counter(i).to_bytes(padding, "big")


def timestamp(instant: Instant = None) -> int:
    """
    Whole seconds since the epoch for the given instant.

    :param instant: ``None`` for now, a Unix timestamp, or a datetime
        (naive datetimes are taken as local time)
    """
    if instant is None:
        value: Union[int, float] = time.time()
    elif isinstance(instant, datetime.datetime):
        value = instant.timestamp()
    else:
        value = instant
    if value < 0:
        raise ClockError(instant)
    return int(value)


def strings_equal(expected: str, candidate: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string. When the
    lengths differ the expected value is scanned against itself, so the
    time spent depends only on the length of ``expected``.
    """
    s1 = unicodedata.normalize("NFKC", expected).encode("utf-8")
    s2 = unicodedata.normalize("NFKC", candidate).encode("utf-8")
    same_length = len(s1) == len(s2)
    return compare_digest(s1, s2 if same_length else s1) and same_length


def code_to_string(code: Union[int, str], digits: int) -> Optional[str]:
    if isinstance(code, str):
        return code
    if isinstance(code, bool) or not isinstance(code, int) or code < 0:
        return None
    return str(code).rjust(digits, "0")
