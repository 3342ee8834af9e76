import hmac
import logging
from typing import Any, Iterator, NamedTuple, Optional, Union

from . import utils
from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_WINDOW,
    HashAlgorithm,
    validate_digits,
    validate_window,
)
from .exceptions import InvalidArgument
from .seed import Seed

logger = logging.getLogger(__name__)

SecretType = Union[Seed, bytes, str]


class VerifyResult(NamedTuple):
    """
    Outcome of a verification.

    ``offset`` is the signed distance from the expected counter (or time
    step) at which the code matched, or None when nothing matched. The
    result is truthy only on a match, so an offset of 0 still reads as
    success.
    """

    offset: Optional[int]

    @property
    def matched(self) -> bool:
        return self.offset is not None

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = VerifyResult(None)


def to_seed(secret: SecretType) -> Seed:
    """
    :param secret: a Seed, raw key bytes, or a base32 string
    """
    if isinstance(secret, Seed):
        return secret
    if isinstance(secret, (bytes, bytearray)):
        return Seed.from_raw(bytes(secret))
    if isinstance(secret, str):
        return Seed.from_base32(secret)
    raise InvalidArgument("secret must be a Seed, bytes or base32 str, got {}".format(type(secret).__name__))


def search_order(window: int) -> Iterator[int]:
    """
    Yields 0, 1, -1, 2, -2, ... up to +/- window.
    """
    yield 0
    for distance in range(1, window + 1):
        yield distance
        yield -distance


class OTP(object):
    """
    HOTP engine shared by the counter and time based front ends.

    Holds the validated configuration and turns a counter into a code.
    Assigning to ``digits``, ``algorithm``, ``window`` or ``seed``
    re-validates and keeps the previous value if the new one is rejected.
    """

    def __init__(
        self,
        secret: SecretType,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[str, HashAlgorithm] = DEFAULT_ALGORITHM,
        window: int = DEFAULT_WINDOW,
    ) -> None:
        self.digits = digits
        self.algorithm = algorithm
        self.seed = secret
        self.window = window

    @property
    def digits(self) -> int:
        return self._digits

    @digits.setter
    def digits(self, value: int) -> None:
        self._digits = validate_digits(value)

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @algorithm.setter
    def algorithm(self, value: Union[str, HashAlgorithm]) -> None:
        self._algorithm = HashAlgorithm.from_name(value)

    @property
    def window(self) -> int:
        return self._window

    @window.setter
    def window(self, value: int) -> None:
        self._window = validate_window(value)

    @property
    def seed(self) -> Seed:
        return self._seed

    @seed.setter
    def seed(self, value: SecretType) -> None:
        self._seed = to_seed(value)

    def generate_otp(self, counter: int) -> str:
        """
        :param counter: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        message = utils.int_to_bytestring(counter)
        hmac_hash = hmac.new(self._seed.as_raw(), message, self._algorithm.digest).digest()
        return utils.format_code(utils.truncate(hmac_hash), self._digits)

    def search(self, otp: str, counter: int) -> VerifyResult:
        """
        Looks for ``otp`` among the counters ``counter - window`` to
        ``counter + window``, nearest first. Negative counters are skipped.

        :param otp: the code supplied by the user
        :param counter: the counter the server expects
        :returns: VerifyResult with the matching offset, or NO_MATCH
        """
        utils.validate_counter(counter)
        otp = str(otp)
        for offset in search_order(self._window):
            candidate = counter + offset
            if candidate < 0 or candidate > utils.MAX_COUNTER:
                continue
            if utils.strings_equal(otp, self.generate_otp(candidate)):
                if offset:
                    logger.debug("OTP matched %+d steps away from counter %d", offset, counter)
                return VerifyResult(offset)
        logger.debug("OTP did not match within %d steps of counter %d", self._window, counter)
        return NO_MATCH

    def __repr__(self) -> str:
        return "<OTP: {} digits, {}, window {}>".format(self._digits, self._algorithm.value, self._window)


def delegated(name: str) -> Any:
    """
    Property forwarding ``name`` to the wrapped ``generator``.
    """

    def fget(self):
        return getattr(self.generator, name)

    def fset(self, value):
        setattr(self.generator, name, value)

    return property(fget, fset, doc="Forwarded to the underlying OTP generator.")
