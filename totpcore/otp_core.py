#!/usr/bin/env python3
"""
otp_core.py — Core library for TOTP / HOTP (RFC 6238 / RFC 4226, HMAC-SHA1).

Goals:
- Pure functions only, shared by the CLI (otp_cli.py) and the web API (totpweb).
- No clock reads inside the algorithms: callers pass `now_millis` explicitly,
  so every result is reproducible in tests. `current_millis()` is the one place
  the glue layers get the wall-clock time from.
- No secret storage. The Base32 secret comes in with each call and is dropped.

Security notes:
- Secrets and generated codes are never logged.
- Verification compares codes with hmac.compare_digest.
"""

from typing import NamedTuple
import hashlib
import hmac
import logging
import struct
import time

from totpcore import base32
from totpcore.errors import CryptoError, InvalidSecret

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds), fixed for this tool
SECRET_BYTES = 20           # 160-bit secret for new-secret
VERIFY_WINDOW = (-1, 0, 1)  # accepted counter offsets, checked in this order

VALID_LABEL = "Code is valid"
INVALID_LABEL = "Code is NOT valid"

_MAX_COUNTER = 1 << 64


class TotpResult(NamedTuple):
    """Current TOTP code and the seconds left before it rolls over."""

    code: str
    remaining: int


# --- Utility ---------------------------------------------------------------
def current_millis() -> int:
    """Wall-clock time in integer milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def decode_secret(secret_b32: str) -> bytes:
    """
    Decode a user-supplied Base32 secret into HMAC key bytes.

    Raises:
        InvalidSecret: if nothing usable is left after cleaning the input
    """
    key = base32.decode(secret_b32)
    if not key:
        raise InvalidSecret()
    return key


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(counter: int) -> bytes:
    """
    Serialize the counter as the 8-byte big-endian message RFC 4226 signs.

    The value is packed as two unsigned 32-bit halves (high, low) so the layout
    is explicit. Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: if counter is negative or does not fit in 64 bits
    """
    if counter < 0 or counter >= _MAX_COUNTER:
        raise ValueError(f"counter out of range: {counter}")
    return struct.pack(">II", counter >> 32, counter & 0xFFFFFFFF)


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """
    HMAC-SHA1 (RFC 2104) of `message` under `key`; always 20 bytes.

    Raises:
        CryptoError: if the key is empty
    """
    if not key:
        raise CryptoError("HMAC-SHA1 key must not be empty")
    return hmac.new(key, message, hashlib.sha1).digest()


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = last_byte & 0x0F
    - take 4 bytes from offset, masking the first with 0x7F (clears the sign bit)
    - returns a 31-bit unsigned integer
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Generate an HOTP code (RFC 4226).

    Steps:
    1. Message = 8-byte big-endian counter
    2. HMAC-SHA1(key, message)
    3. Dynamic truncate -> dbc
    4. otp = dbc % 10^digits, zero-padded to `digits` characters

    Arguments:
        key: raw key bytes (already Base32-decoded)
        counter: non-negative integer counter
        digits: code length (6 recommended)

    Raises:
        CryptoError: empty key
        ValueError: counter outside 0..2**64-1
    """
    digest = hmac_sha1(key, int_to_bytes(counter))
    dbc = dynamic_truncate(digest)
    return str(dbc % (10 ** digits)).zfill(digits)


def time_counter(now_millis: int, step: int = DEFAULT_TIME_STEP) -> int:
    """Number of whole `step`-second periods since the epoch at `now_millis`."""
    return (now_millis // 1000) // step


def totp(
    secret_b32: str,
    now_millis: int,
    step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
) -> TotpResult:
    """
    Generate the TOTP code (RFC 6238) for the instant `now_millis`.

    Arguments:
        secret_b32: Base32 secret as entered by the user
        now_millis: epoch time in milliseconds (injected, never read here)
        step: time step X in seconds
        digits: code length

    Returns:
        TotpResult(code, remaining)
        - code: OTP string
        - remaining: whole seconds (rounded up) until the next period starts

    Raises:
        InvalidSecret: if the secret decodes to nothing
    """
    key = decode_secret(secret_b32)
    counter = time_counter(now_millis, step)
    code = hotp(key, counter, digits)
    period_end = (counter + 1) * step * 1000
    # ceil division on integers
    remaining = max(0, -(-(period_end - now_millis) // 1000))
    logger.debug("TOTP counter=%d remaining=%ds", counter, remaining)
    return TotpResult(code, remaining)


# --- OTP verification ------------------------------------------------------
def verify(
    secret_b32: str,
    candidate: str,
    now_millis: int,
    step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
) -> bool:
    """
    Check a user-entered code against the counters base-1, base and base+1.

    The candidate is compared verbatim: no trimming, leading zeros matter.
    Counters below zero (at base = 0) are skipped rather than wrapped.

    Raises:
        InvalidSecret: if the secret decodes to nothing
    """
    key = decode_secret(secret_b32)
    base = time_counter(now_millis, step)
    candidate_bytes = candidate.encode("utf-8")
    for offset in VERIFY_WINDOW:
        counter = base + offset
        if counter < 0:
            continue
        expected = hotp(key, counter, digits)
        if hmac.compare_digest(expected.encode("ascii"), candidate_bytes):
            logger.debug("TOTP accepted at counter offset %+d", offset)
            return True
    logger.debug("TOTP rejected for window around counter=%d", base)
    return False


def verify_label(ok: bool) -> str:
    """Human-readable verdict for a verify() result."""
    return VALID_LABEL if ok else INVALID_LABEL
