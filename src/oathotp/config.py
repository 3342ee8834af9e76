"""
Option handling shared by the HOTP and TOTP front ends.

Option names follow the Google Authenticator key URI format
(``algorithm``, ``digits``, ``period``) so values read from a provisioning
record can be passed straight through.
"""

import enum
import hashlib
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from .exceptions import InvalidArgument

DEFAULT_ALGORITHM = "sha1"
DEFAULT_DIGITS = 6
DEFAULT_WINDOW = 4
DEFAULT_PERIOD = 30
DEFAULT_EPOCH = 0

MIN_DIGITS = 1
MAX_DIGITS = 10

DEFAULTS: Dict[str, Any] = {
    "algorithm": DEFAULT_ALGORITHM,
    "digits": DEFAULT_DIGITS,
    "window": DEFAULT_WINDOW,
    "period": DEFAULT_PERIOD,
    "epoch": DEFAULT_EPOCH,
}

_ALIASES = {
    "time_step_seconds": "period",
    "interval": "period",
    "t0": "epoch",
}


class HashAlgorithm(enum.Enum):
    """
    Hash functions usable for the OTP HMAC.

    All of them produce digests of at least 20 bytes, which dynamic
    truncation requires.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digest(self) -> Callable[..., Any]:
        return getattr(hashlib, self.value)

    @classmethod
    def from_name(cls, name: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        if isinstance(name, HashAlgorithm):
            return name
        if not isinstance(name, str):
            raise InvalidArgument("hash algorithm must be given by name, got {!r}".format(name))
        normalized = name.replace("-", "").replace("_", "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidArgument("{} is not a supported hash function".format(name))


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but True digits is always a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument("{} must be an integer, got {!r}".format(name, value))
    return value


def validate_digits(digits: Any) -> int:
    digits = _require_int("digits", digits)
    if digits < MIN_DIGITS or digits > MAX_DIGITS:
        raise InvalidArgument("Digits must be a number between 1 and 10 inclusive")
    return digits


def validate_window(window: Any) -> int:
    window = _require_int("window", window)
    if window < 0:
        raise InvalidArgument("window must not be negative")
    return window


def validate_period(period: Any) -> int:
    period = _require_int("period", period)
    if period < 1:
        raise InvalidArgument("period must be a positive number of seconds")
    return period


def validate_epoch(epoch: Any) -> int:
    return _require_int("epoch", epoch)


def normalize_options(
    options: Optional[Mapping[str, Any]],
    allowed: Iterable[str],
) -> Dict[str, Any]:
    """
    Merges user options over the defaults.

    Keys are matched case-insensitively and aliases are folded into their
    canonical name. Unknown keys are rejected instead of silently ignored.

    :param options: user supplied mapping, may be None
    :param allowed: canonical option names accepted by the caller
    :returns: dict holding exactly the ``allowed`` keys
    """
    allowed = tuple(allowed)
    result = {key: DEFAULTS[key] for key in allowed}
    for key, value in (options or {}).items():
        canonical = str(key).lower()
        canonical = _ALIASES.get(canonical, canonical)
        if canonical not in allowed:
            raise InvalidArgument("unknown option: {}".format(key))
        result[canonical] = value
    return result
