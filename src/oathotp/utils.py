import unicodedata
from hmac import compare_digest

from .exceptions import InvalidArgument

MAX_COUNTER = 2**64 - 1


def validate_counter(i: int) -> int:
    if isinstance(i, bool) or not isinstance(i, int):
        raise InvalidArgument("counter must be an integer, got {!r}".format(i))
    if i < 0 or i > MAX_COUNTER:
        raise InvalidArgument("counter must be between 0 and 2**64 - 1")
    return i


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret.

    The result is always exactly ``padding`` bytes, big-endian.
    """
    i = validate_counter(i)
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def truncate(hmac_hash: bytes) -> int:
    """
    Dynamic truncation from RFC 4226, section 5.3.

    Takes an HMAC digest of at least 20 bytes and returns a non-negative
    31-bit integer.

    :param hmac_hash: raw HMAC digest
    :returns: truncated value in ``[0, 2**31 - 1]``
    """
    if len(hmac_hash) < 20:
        raise InvalidArgument("digest must be at least 20 bytes long")
    offset = hmac_hash[-1] & 0xF
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def format_code(code: int, digits: int) -> str:
    """
    Reduces a truncated value to ``digits`` decimal places, zero padded.
    """
    if digits < 10:
        code %= 10**digits
    # 10**10 exceeds any 31-bit value, so the slice keeps leading zeros.
    return str(10_000_000_000 + code)[-digits:]


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
