import logging

import pytest

from oathotp import HOTP, NO_MATCH, HashAlgorithm, InvalidArgument, InvalidEncoding, Seed

from .conftest import RFC_SECRET_SHA1

RFC4226_CODES = ["755224", "287082", "359152", "969429", "338314", "254676", "287922", "162583", "399871", "520489"]
RFC4226_TRUNCATED = [
    1284755224,
    1094287082,
    137359152,
    1726969429,
    1640338314,
    868254676,
    1918287922,
    82162583,
    673399871,
    645520489,
]


def test_rfc4226_vectors(rfc_seed):
    hotp = HOTP(rfc_seed)
    assert [hotp.calculate(counter) for counter in range(10)] == RFC4226_CODES


def test_rfc4226_vectors_ten_digits(rfc_seed):
    hotp = HOTP(rfc_seed, digits=10)
    for counter, value in enumerate(RFC4226_TRUNCATED):
        assert hotp.calculate(counter) == str(value).zfill(10)
    assert hotp.calculate(7) == "0082162583"


def test_secret_formats_agree():
    codes = {
        HOTP(RFC_SECRET_SHA1).calculate(1),
        HOTP("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ").calculate(1),
        HOTP(Seed.from_hex("3132333435363738393031323334353637383930")).calculate(1),
    }
    assert codes == {"287082"}


def test_invalid_base32_secret():
    with pytest.raises(InvalidEncoding):
        HOTP("not base32!")


@pytest.mark.parametrize("secret", [None, 12345, b""])
def test_invalid_secret(secret):
    with pytest.raises(InvalidArgument):
        HOTP(secret)


@pytest.mark.parametrize("digits", range(1, 11))
def test_length_and_determinism(rfc_seed, digits):
    hotp = HOTP(rfc_seed, digits=digits)
    for counter in (0, 1, 7, 2**32, 2**63 - 1, 2**64 - 1):
        code = hotp.calculate(counter)
        assert len(code) == digits
        assert code.isdigit()
        assert code == hotp.calculate(counter)


@pytest.mark.parametrize("digits", [0, 11, -6, "6", 6.0, True])
def test_invalid_digits(rfc_seed, digits):
    with pytest.raises(InvalidArgument):
        HOTP(rfc_seed, digits=digits)


@pytest.mark.parametrize("counter", [-1, 2**64])
def test_counter_out_of_range(rfc_seed, counter):
    with pytest.raises(InvalidArgument):
        HOTP(rfc_seed).calculate(counter)


def test_algorithms(rfc_seed):
    assert HOTP(rfc_seed, algorithm="SHA-256").algorithm is HashAlgorithm.SHA256
    assert HOTP(rfc_seed, algorithm=HashAlgorithm.SHA512).algorithm is HashAlgorithm.SHA512
    codes = {HOTP(rfc_seed, algorithm=name).calculate(0) for name in ("sha1", "sha256", "sha512")}
    assert len(codes) == 3


@pytest.mark.parametrize("algorithm", ["md5", "sha3", "", None])
def test_unsupported_algorithm(rfc_seed, algorithm):
    with pytest.raises(InvalidArgument):
        HOTP(rfc_seed, algorithm=algorithm)


def test_verify_every_offset_in_window(rfc_seed):
    hotp = HOTP(rfc_seed, window=4)
    expected = 10
    for k in range(-4, 5):
        result = hotp.verify(hotp.calculate(expected + k), expected)
        assert result
        assert result.matched
        assert result.offset == k


def test_verify_offset_zero_is_truthy(rfc_seed):
    result = HOTP(rfc_seed).verify("755224", 0)
    assert result.offset == 0
    assert bool(result) is True


def test_verify_no_match(rfc_seed):
    hotp = HOTP(rfc_seed, window=4)
    generated = {hotp.calculate(counter) for counter in range(6, 15)}
    candidate = next(code for code in ("000000", "111111", "123456", "999999") if code not in generated)
    result = hotp.verify(candidate, 10)
    assert result == NO_MATCH
    assert not result
    assert result.offset is None


def test_verify_outside_window(rfc_seed):
    hotp = HOTP(rfc_seed, window=4)
    # counter 9 is one past the window around 4
    assert not hotp.verify(RFC4226_CODES[9], 4)
    assert hotp.verify(RFC4226_CODES[8], 4).offset == 4


def test_verify_skips_negative_counters(rfc_seed):
    hotp = HOTP(rfc_seed, window=4)
    assert hotp.verify(RFC4226_CODES[0], 2).offset == -2
    assert hotp.verify(RFC4226_CODES[4], 0).offset == 4
    assert not hotp.verify(RFC4226_CODES[5], 0)


def test_verify_zero_window(rfc_seed):
    hotp = HOTP(rfc_seed, window=0)
    assert hotp.verify(RFC4226_CODES[3], 3).offset == 0
    assert not hotp.verify(RFC4226_CODES[4], 3)


def test_verify_accepts_int_candidate(rfc_seed):
    assert HOTP(rfc_seed).verify(287082, 1).offset == 0


def test_verify_rejects_negative_expected_counter(rfc_seed):
    with pytest.raises(InvalidArgument):
        HOTP(rfc_seed).verify("755224", -1)


def test_setters_revalidate(rfc_seed):
    hotp = HOTP(rfc_seed)
    hotp.digits = 8
    assert hotp.calculate(0) == "84755224"

    with pytest.raises(InvalidArgument):
        hotp.digits = 11
    assert hotp.digits == 8

    with pytest.raises(InvalidArgument):
        hotp.algorithm = "whirlpool"
    assert hotp.algorithm is HashAlgorithm.SHA1

    with pytest.raises(InvalidArgument):
        hotp.window = -1
    assert hotp.window == 4

    with pytest.raises(InvalidEncoding):
        hotp.seed = "!!!"
    assert hotp.seed == rfc_seed

    hotp.seed = b"other secret bytes!!"
    assert hotp.calculate(0) != "84755224"


def test_from_options(rfc_seed):
    hotp = HOTP.from_options(rfc_seed, {"Digits": 8, "ALGORITHM": "sha256", "window": 1})
    assert (hotp.digits, hotp.algorithm, hotp.window) == (8, HashAlgorithm.SHA256, 1)

    defaults = HOTP.from_options(rfc_seed)
    assert (defaults.digits, defaults.algorithm, defaults.window) == (6, HashAlgorithm.SHA1, 4)

    with pytest.raises(InvalidArgument):
        HOTP.from_options(rfc_seed, {"period": 30})


def test_verify_near_counter_limit(rfc_seed):
    hotp = HOTP(rfc_seed, window=3)
    top = 2**64 - 1
    assert hotp.verify(hotp.calculate(top), top - 1).offset == 1
    assert hotp.verify(hotp.calculate(top - 3), top).offset == -3
    assert hotp.verify(hotp.calculate(top), top).offset == 0


def test_verify_logs_drift_without_code(rfc_seed, caplog):
    hotp = HOTP(rfc_seed)
    with caplog.at_level(logging.DEBUG, logger="oathotp.otp"):
        assert hotp.verify(RFC4226_CODES[2], 0).offset == 2
        assert not hotp.verify(RFC4226_CODES[9], 0)
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 2
    assert "+2 steps" in messages[0]
    assert all(code not in message for message in messages for code in RFC4226_CODES)
