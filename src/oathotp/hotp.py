from typing import Any, Mapping, Optional, Union

from .config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_WINDOW, HashAlgorithm, normalize_options
from .otp import OTP, SecretType, VerifyResult, delegated


class HOTP(object):
    """
    Handler for HMAC-based OTP counters.
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
    ) -> None:
        """
        :param secret: shared secret as a Seed, raw bytes or base32 string
        :param digits: number of integers in the OTP, 1 to 10
        :param algorithm: hash used in the HMAC, sha1 by default
        :param window: how many counters either side of the expected one verify() accepts
        """
        self.generator = OTP(secret, digits=digits, algorithm=algorithm, window=window)

    @classmethod
    def from_options(cls, secret: SecretType, options: Optional[Mapping[str, Any]] = None) -> "HOTP":
        return cls(secret, **normalize_options(options, ("algorithm", "digits", "window")))

    def calculate(self, counter: int = 0) -> str:
        """
        Generates the OTP for the given counter.

        :param counter: the OTP HMAC counter
        :returns: OTP
        """
        return self.generator.generate_otp(counter)

    def verify(self, otp: str, counter: int) -> VerifyResult:
        """
        Verifies the OTP passed in against the counter, allowing drift of
        up to ``window`` counters either way.

        The caller should advance its stored counter to
        ``counter + result.offset + 1`` after a match to prevent replay.

        :param otp: the OTP to check against
        :param counter: the counter the server expects next
        """
        return self.generator.search(otp, counter)

    def __repr__(self) -> str:
        return "<HOTP: {} digits, {}, window {}>".format(self.digits, self.algorithm.value, self.window)
