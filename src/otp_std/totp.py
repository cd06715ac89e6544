from dataclasses import dataclass
from typing import Iterator, Union

from . import utils
from .errors import InvalidPeriod, InvalidSkew
from .otp import Base

DEFAULT_PERIOD = 30
DEFAULT_SKEW = 1


@dataclass(frozen=True)
class Totp(object):
    """
    Handler for time-based OTP counters.

    Time is never stored; every method takes the instant to work with,
    defaulting to now.
    """

    base: Base
    skew: int = DEFAULT_SKEW
    period: int = DEFAULT_PERIOD

    def __post_init__(self) -> None:
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period < 1:
            raise InvalidPeriod(self.period)
        if isinstance(self.skew, bool) or not isinstance(self.skew, int) or self.skew < 0:
            raise InvalidSkew(self.skew)

    def time_counter(self, instant: utils.Instant = None) -> int:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param instant: the time to generate the counter for, defaults to now
        :returns: the OTP HMAC counter for that time step
        """
        return utils.timestamp(instant) // self.period

    def generate(self, instant: utils.Instant = None) -> str:
        """
        Generate the OTP for the given time.

        :param instant: the time to generate an OTP for, defaults to now
        :returns: OTP value
        """
        return self.base.generate(self.time_counter(instant))

    def now(self) -> str:
        return self.generate()

    def _window(self, counter: int) -> Iterator[int]:
        yield counter
        for delta in range(1, self.skew + 1):
            yield counter - delta
            yield counter + delta

    def verify(self, code: Union[str, int], instant: utils.Instant = None) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        Codes from ``skew`` time steps before or after the instant are
        accepted. Every step of the window is compared regardless of where
        a match occurs.

        :param code: the OTP to check against
        :param instant: time to check OTP at, defaults to now
        """
        matched = False
        for counter in self._window(self.time_counter(instant)):
            if 0 <= counter <= utils.MAX_COUNTER:
                matched |= self.base.verify(counter, code)
        return matched

    def verify_exact(self, code: Union[str, int], instant: utils.Instant = None) -> bool:
        """
        Verifies the OTP against the time step of ``instant`` only.
        """
        return self.base.verify(self.time_counter(instant), code)

    def next_period(self, instant: utils.Instant = None) -> int:
        """
        :returns: Unix timestamp at which the next time step starts
        """
        return (self.time_counter(instant) + 1) * self.period

    def time_to_live(self, instant: utils.Instant = None) -> int:
        """
        :returns: seconds left before the code for ``instant`` expires
        """
        return self.period - utils.timestamp(instant) % self.period
