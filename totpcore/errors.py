"""
errors.py — Error kinds raised by the OTP core.

No error here is retryable: every core call is a pure function of its inputs.
Callers (CLI, web API) decide what to display after catching one of these.
"""


class OTPError(Exception):
    """Base class for every error raised by totpcore."""


class InvalidSecret(OTPError, ValueError):
    """The Base32 secret decoded to zero bytes (blank or no valid characters)."""

    def __init__(self, message: str = "Invalid Base32 secret"):
        super().__init__(message)


class CryptoError(OTPError):
    """The HMAC-SHA1 primitive refused its input (e.g. an empty key)."""
