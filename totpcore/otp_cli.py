#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper around otp_core.py

Subcommands:
- code       : show the current TOTP code (optionally refreshed every second)
- verify     : check a code against the current ±1 step window
- hotp       : HOTP code for an explicit counter
- new-secret : print a fresh random Base32 secret

The secret comes from --secret or the OTP_SECRET environment variable and is
never written anywhere.

eg..:
    totp-tool new-secret
    totp-tool code --secret JBSWY3DPEHPK3PXP --watch
    OTP_SECRET=JBSWY3DPEHPK3PXP totp-tool verify --code 123456
    totp-tool --verbose hotp --secret GEZDGNBVGY3TQOJQ --counter 42
"""

import argparse
import logging
import os
import sys
import time

from totpcore import base32, otp_core
from totpcore.errors import OTPError

logger = logging.getLogger(__name__)

SECRET_ENV = "OTP_SECRET"
PLACEHOLDER = "— — — — — —"
GENERATION_ERROR = "Invalid secret or generation error"


def _secret(args) -> str:
    return (args.secret or os.environ.get(SECRET_ENV, "")).strip()


def _tick(secret: str):
    """
    One refresh of the display: (code, countdown).

    A blank secret shows the placeholder with a full period; a secret that does
    not decode shows the placeholder with no countdown.
    """
    if not secret:
        return PLACEHOLDER, f"{otp_core.DEFAULT_TIME_STEP}s"
    try:
        code, remaining = otp_core.totp(secret, otp_core.current_millis())
    except OTPError as e:
        logger.debug("code generation failed: %s", e)
        print(f"[!] {GENERATION_ERROR}", file=sys.stderr)
        return PLACEHOLDER, ""
    return code, f"{remaining}s"


# --- CLI command handlers ---
def cmd_code(args) -> int:
    secret = _secret(args)
    if not args.watch:
        code, countdown = _tick(secret)
        print(f"{code}  {countdown}".rstrip())
        return 1 if code == PLACEHOLDER else 0

    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_code = None
    try:
        while True:
            code, countdown = _tick(secret)
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{countdown})")
                last_code = code
            else:
                print(f".. {countdown} left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_verify(args) -> int:
    secret = _secret(args)
    candidate = (args.code or "").strip()
    if not secret:
        print("[!] Enter secret to verify against", file=sys.stderr)
        return 2
    if not candidate:
        print("[!] Enter code to verify", file=sys.stderr)
        return 2
    try:
        ok = otp_core.verify(secret, candidate, otp_core.current_millis())
    except OTPError as e:
        logger.debug("verification failed: %s", e)
        print("[!] Verification failed or invalid secret", file=sys.stderr)
        return 2
    print(otp_core.verify_label(ok))
    return 0 if ok else 1


def cmd_hotp(args) -> int:
    secret = _secret(args)
    try:
        code = otp_core.hotp(otp_core.decode_secret(secret), args.counter)
    except (OTPError, ValueError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2
    print(f"HOTP(counter={args.counter}): {code}")
    return 0


def cmd_new_secret(args) -> int:
    print(base32.generate_secret(otp_core.SECRET_BYTES))
    return 0


def cmd_help(args) -> int:
    print("'totp-tool -h' for help.")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TOTP/HOTP (HMAC-SHA1) generator and verifier")
    p.add_argument("--verbose", action="store_true", help="Debug logging to stderr")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # code
    pc = sub.add_parser("code", help="Show the current TOTP code")
    pc.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    pc.add_argument("--watch", action="store_true", help="Refresh every second until Ctrl+C")
    pc.set_defaults(func=cmd_code)

    # verify
    pv = sub.add_parser("verify", help="Verify a TOTP code (±1 step window)")
    pv.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    pv.add_argument("--code", required=True, help="OTP code to verify")
    pv.set_defaults(func=cmd_verify)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    ph.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    ph.add_argument("--counter", type=int, required=True)
    ph.set_defaults(func=cmd_hotp)

    # new-secret
    pn = sub.add_parser("new-secret", help="Print a random Base32 secret")
    pn.set_defaults(func=cmd_new_secret)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(format="[%(levelname)s] %(name)s: %(message)s")
    # set explicitly: basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
