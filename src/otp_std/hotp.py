import logging
from dataclasses import dataclass
from typing import Union

from . import utils
from .errors import InvalidCounter, InvalidValue
from .otp import Base

logger = logging.getLogger(__name__)


@dataclass
class Hotp(object):
    """
    Handler for HMAC-based OTP counters.

    The counter is plain mutable state; sharing one instance between threads
    needs an external lock.
    """

    base: Base
    counter: int = 0

    def __post_init__(self) -> None:
        utils.check_counter(self.counter)

    def generate(self) -> str:
        """
        Generates the OTP for the current counter. Does not advance it.

        :returns: OTP
        """
        return self.base.generate(self.counter)

    def increment(self) -> None:
        """
        Advances the counter by one; call it once a code has been accepted.
        """
        if self.counter >= utils.MAX_COUNTER:
            raise InvalidCounter(self.counter + 1)
        self.counter += 1

    def verify(self, code: Union[str, int]) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        Only the current counter is checked and the counter is left as is;
        see :meth:`verify_window` for resynchronization.

        :param code: the OTP to check against
        """
        return self.base.verify(self.counter, code)

    def verify_window(self, code: Union[str, int], window: int) -> bool:
        """
        Verifies the OTP against ``counter .. counter + window`` (RFC 4226 section 7.4).

        Every counter in the window is compared. On a match the counter moves
        past the matched value, otherwise it is unchanged.

        :param code: the OTP to check against
        :param window: how many counters ahead of the current one to accept
        """
        if isinstance(window, bool) or not isinstance(window, int) or window < 0:
            raise InvalidValue("window", window, "must be a non-negative integer")
        matched = None
        for counter in range(self.counter, min(self.counter + window, utils.MAX_COUNTER) + 1):
            if self.base.verify(counter, code) and matched is None:
                matched = counter
        if matched is None:
            return False
        if matched > self.counter:
            logger.debug("Resynchronized HOTP counter by %d", matched - self.counter)
        if matched >= utils.MAX_COUNTER:
            raise InvalidCounter(matched + 1)
        self.counter = matched + 1
        return True
