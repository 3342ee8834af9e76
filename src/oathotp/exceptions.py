class OTPError(ValueError):
    """
    Base class for errors raised by oathotp.
    """


class InvalidArgument(OTPError):
    """
    A configuration value or input is outside its allowed range.
    """


class InvalidEncoding(OTPError):
    """
    A hex or base32 secret could not be decoded.
    """
