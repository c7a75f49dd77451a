"""
totpcore package
================

Generate and verify OTP codes (HOTP/TOTP) per RFC 4226 & RFC 6238, from a
Base32 secret as a human would type or paste it.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^digits

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(floor(now_millis / 1000) / step)
  → step = 30 seconds, 6 digits, SHA-1.

- Verification:
  accepts the codes for counters base-1, base and base+1 (±1 step of skew).

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totpcore import totp, verify, current_millis
>>> now = current_millis()
>>> code, remaining = totp("JBSWY3DPEHPK3PXP", now)
>>> verify("JBSWY3DPEHPK3PXP", code, now)
True
"""
from totpcore.errors import OTPError, InvalidSecret, CryptoError
from totpcore.otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    TotpResult,
    current_millis,
    decode_secret,
    hmac_sha1,
    hotp,
    totp,
    verify,
    verify_label,
)

__all__ = [
    "OTPError",
    "InvalidSecret",
    "CryptoError",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "TotpResult",
    "current_millis",
    "decode_secret",
    "hmac_sha1",
    "hotp",
    "totp",
    "verify",
    "verify_label",
]
