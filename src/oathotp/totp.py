import datetime
import math
import time
from typing import Any, Mapping, Optional, Union

from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_EPOCH,
    DEFAULT_PERIOD,
    DEFAULT_WINDOW,
    HashAlgorithm,
    normalize_options,
    validate_epoch,
    validate_period,
)
from .exceptions import InvalidArgument
from .otp import OTP, SecretType, VerifyResult, delegated

TimeType = Union[int, float, datetime.datetime]


def _timestamp(for_time: Optional[TimeType]) -> float:
    if for_time is None:
        return time.time()
    if isinstance(for_time, datetime.datetime):
        # naive datetimes are taken as local time
        return for_time.timestamp()
    if isinstance(for_time, bool) or not isinstance(for_time, (int, float)):
        raise InvalidArgument("time must be a Unix timestamp or datetime, got {!r}".format(for_time))
    if not math.isfinite(for_time):
        raise InvalidArgument("time must be finite, got {!r}".format(for_time))
    return for_time


class TOTP(object):
    """
    Handler for time-based OTP counters.
    """

    digits = delegated("digits")
    algorithm = delegated("algorithm")
    window = delegated("window")
    seed = delegated("seed")

    def __init__(
        self,
        secret: SecretType,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[str, HashAlgorithm] = DEFAULT_ALGORITHM,
        window: int = DEFAULT_WINDOW,
        period: int = DEFAULT_PERIOD,
        epoch: int = DEFAULT_EPOCH,
    ) -> None:
        """
        :param secret: shared secret as a Seed, raw bytes or base32 string
        :param digits: number of integers in the OTP, 1 to 10
        :param algorithm: hash used in the HMAC, sha1 by default
        :param window: how many time steps either side of now verify() accepts
        :param period: the time step in seconds
        :param epoch: Unix time at which step 0 starts
        """
        self.generator = OTP(secret, digits=digits, algorithm=algorithm, window=window)
        self.period = period
        self.epoch = epoch

    @classmethod
    def from_options(cls, secret: SecretType, options: Optional[Mapping[str, Any]] = None) -> "TOTP":
        return cls(secret, **normalize_options(options, ("algorithm", "digits", "window", "period", "epoch")))

    @property
    def period(self) -> int:
        return self._period

    @period.setter
    def period(self, value: int) -> None:
        self._period = validate_period(value)

    @property
    def epoch(self) -> int:
        return self._epoch

    @epoch.setter
    def epoch(self, value: int) -> None:
        self._epoch = validate_epoch(value)

    def timecode(self, for_time: TimeType) -> int:
        """
        Maps a point in time to its time-step counter.

        :param for_time: Unix timestamp or datetime
        :returns: floor((for_time - epoch) / period)
        """
        elapsed = _timestamp(for_time) - self._epoch
        if elapsed < 0:
            raise InvalidArgument("time is before the configured epoch")
        return int(elapsed // self._period)

    def calculate(self, for_time: Optional[TimeType] = None) -> str:
        """
        Generates the OTP for the given time, now by default.

        :param for_time: Unix timestamp or datetime
        :returns: OTP
        """
        return self.generator.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        return self.calculate()

    def verify(self, otp: str, for_time: Optional[TimeType] = None) -> VerifyResult:
        """
        Verifies the OTP against the given time, now by default.

        A match at offset ``k`` means the code belongs to the step ``k``
        periods away, which hints at clock skew on the client.

        :param otp: the OTP to check against
        :param for_time: Unix timestamp or datetime
        """
        return self.generator.search(otp, self.timecode(for_time))

    def remaining(self, for_time: Optional[TimeType] = None) -> float:
        """
        Seconds until the code for ``for_time`` expires.
        """
        elapsed = _timestamp(for_time) - self._epoch
        if elapsed < 0:
            raise InvalidArgument("time is before the configured epoch")
        return self._period - elapsed % self._period

    def __repr__(self) -> str:
        return "<TOTP: {} digits, {}, window {}, period {}s>".format(
            self.digits, self.algorithm.value, self.window, self.period
        )
