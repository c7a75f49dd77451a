"""
base32.py — Lenient Base32 (RFC 4648) helpers for OTP secrets.

Secrets are typed or pasted by humans, so decoding never fails: spaces, dashes
and any other character outside the alphabet are dropped before the bits are
assembled. A blank or all-invalid input decodes to b"" and it is up to the
caller to reject that (see otp_core.decode_secret).
"""

import base64
import os

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def clean(text: str) -> str:
    """
    Normalize a user-entered secret to the characters that carry data.

    - uppercase (decoding is case-insensitive)
    - strip trailing '=' padding
    - drop everything not in A-Z / 2-7

    Example: clean("jbsw y3dp-ehpk====") -> "JBSWY3DPEHPK"
    """
    return "".join(ch for ch in (text or "").upper().rstrip("=") if ch in _INDEX)


def decode(text: str) -> bytes:
    """
    Decode a Base32 string to raw key bytes.

    Each character contributes 5 bits, most significant first. Whole octets are
    emitted as soon as they are complete; the 0-4 bits left at the end are
    discarded, exactly like a standard decoder on unpadded input.

    Arguments:
        text: Base32 secret (free-form; invalid characters are ignored)

    Returns:
        bytes: the decoded key, possibly empty
    """
    out = bytearray()
    buffer = 0
    bits = 0
    for ch in clean(text):
        buffer = (buffer << 5) | _INDEX[ch]
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
        # keep only the bits not yet emitted
        buffer &= (1 << bits) - 1
    return bytes(out)


def encode(data: bytes) -> str:
    """Encode bytes as Base32 without '=' padding (authenticator apps accept both)."""
    return base64.b32encode(data).decode("ascii").rstrip("=")


def generate_secret(nbytes: int = 20) -> str:
    """
    Generate a random secret, returned as unpadded Base32.

    - nbytes bytes from os.urandom (CSPRNG); 20 bytes = 160-bit, the RFC 4226
      recommendation for HMAC-SHA1.
    """
    return encode(os.urandom(nbytes))
