import logging
import secrets
from typing import Sequence

from .config import HashAlgorithm as HashAlgorithm
from .exceptions import InvalidArgument as InvalidArgument
from .exceptions import InvalidEncoding as InvalidEncoding
from .exceptions import OTPError as OTPError
from .hotp import HOTP as HOTP
from .otp import NO_MATCH as NO_MATCH
from .otp import OTP as OTP
from .otp import VerifyResult as VerifyResult
from .seed import Seed as Seed
from .totp import TOTP as TOTP

logging.getLogger(__name__).addHandler(logging.NullHandler())


def random_base32(length: int = 32, chars: Sequence[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567") -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # Some third-party tools have bugs when dealing with such secrets.
    if length < 32:
        raise InvalidArgument("Secrets should be at least 160 bits")

    return "".join(secrets.choice(chars) for _ in range(length))


def random_hex(length: int = 40, chars: Sequence[str] = "ABCDEF0123456789") -> str:
    if length < 40:
        raise InvalidArgument("Secrets should be at least 160 bits")
    if length % 2 != 0:
        raise InvalidArgument("hex secrets need an even number of characters")
    return "".join(secrets.choice(chars) for _ in range(length))
