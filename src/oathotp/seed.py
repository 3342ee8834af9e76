import base64
import binascii
import re
import secrets
from typing import Any

from .exceptions import InvalidArgument, InvalidEncoding

_HEX_RE = re.compile(r"\A[0-9a-fA-F]*\Z")

MIN_GENERATED_BYTES = 16


def _require_str(encoding: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidArgument("{} seed must be a str, got {}".format(encoding, type(value).__name__))


class Seed(object):
    """
    Shared secret key material.

    The raw bytes are fixed at construction time; hex and base32 are views
    over them.
    """

    __slots__ = ("_value",)

    def __init__(self, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidArgument("seed value must be bytes, got {}".format(type(value).__name__))
        if not value:
            raise InvalidArgument("seed must not be empty")
        self._value = bytes(value)

    @classmethod
    def from_raw(cls, value: bytes) -> "Seed":
        return cls(value)

    @classmethod
    def from_hex(cls, value: str) -> "Seed":
        """
        :param value: hex string, either case, no separators
        """
        _require_str("hex", value)
        if len(value) % 2 != 0 or not _HEX_RE.match(value):
            raise InvalidEncoding("seed is not a valid hex string")
        return cls(bytes.fromhex(value))

    @classmethod
    def from_base32(cls, value: str) -> "Seed":
        """
        :param value: RFC 4648 base32 string, padding optional, case-insensitive
        """
        _require_str("base32", value)
        # otpauth secrets usually come without padding; b32decode insists on it.
        secret = value.rstrip("=")
        missing_padding = len(secret) % 8
        if missing_padding != 0:
            secret += "=" * (8 - missing_padding)
        try:
            raw = base64.b32decode(secret, casefold=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidEncoding("seed is not a valid base32 string") from e
        return cls(raw)

    @classmethod
    def generate(cls, size: int = 20) -> "Seed":
        """
        Creates a random seed from the operating system CSPRNG.

        :param size: number of random bytes, 20 (160 bits) by default
        """
        if size < MIN_GENERATED_BYTES:
            raise InvalidArgument("Secrets should be at least {} bits".format(MIN_GENERATED_BYTES * 8))
        return cls(secrets.token_bytes(size))

    def as_raw(self) -> bytes:
        return self._value

    def as_hex(self) -> str:
        return self._value.hex()

    def as_base32(self) -> str:
        # Unpadded, as used by otpauth URIs and authenticator apps.
        return base64.b32encode(self._value).decode("ascii").rstrip("=")

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Seed):
            return NotImplemented
        return secrets.compare_digest(self._value, other._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return "<Seed: {} bytes>".format(len(self._value))
