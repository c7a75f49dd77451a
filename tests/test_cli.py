"""Tests for the totp-tool command line."""

from __future__ import annotations

import logging

import pytest

from totpcore import base32, otp_cli

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_code(capsys, freeze_clock):
    freeze_clock(59_000)
    assert otp_cli.main(["code", "--secret", RFC_SECRET]) == 0
    assert capsys.readouterr().out.strip() == "287082  1s"


def test_code_from_environment(capsys, freeze_clock, monkeypatch):
    freeze_clock(60_000)
    monkeypatch.setenv("OTP_SECRET", f" {RFC_SECRET} ")
    assert otp_cli.main(["code"]) == 0
    assert capsys.readouterr().out.strip() == "359152  30s"


def test_code_blank_secret_shows_placeholder(capsys, monkeypatch):
    monkeypatch.delenv("OTP_SECRET", raising=False)
    assert otp_cli.main(["code"]) == 1
    assert capsys.readouterr().out.strip() == "— — — — — —  30s"


def test_code_invalid_secret(capsys):
    assert otp_cli.main(["code", "--secret", "1111"]) == 1
    captured = capsys.readouterr()
    assert captured.out.strip() == "— — — — — —"
    assert "Invalid secret or generation error" in captured.err


def test_code_watch_until_interrupted(capsys, freeze_clock, monkeypatch):
    freeze_clock(59_000)
    ticks = []

    def fake_sleep(seconds):
        ticks.append(seconds)
        if len(ticks) == 2:
            raise KeyboardInterrupt

    monkeypatch.setattr(otp_cli.time, "sleep", fake_sleep)
    assert otp_cli.main(["code", "--secret", RFC_SECRET, "--watch"]) == 0
    out = capsys.readouterr().out
    assert out.count("TOTP: 287082") == 1
    assert ".. 1s left" in out
    assert "Bye." in out
    assert ticks == [1, 1]


def test_verify(capsys, freeze_clock):
    freeze_clock(5 * 30_000)
    assert otp_cli.main(["verify", "--secret", RFC_SECRET, "--code", "162583"]) == 1
    assert capsys.readouterr().out.strip() == "Code is NOT valid"
    assert otp_cli.main(["verify", "--secret", RFC_SECRET, "--code", " 287922 "]) == 0
    assert capsys.readouterr().out.strip() == "Code is valid"


@pytest.mark.parametrize(
    "argv, message",
    [
        (["verify", "--secret", " ", "--code", "123456"], "Enter secret to verify against"),
        (["verify", "--secret", RFC_SECRET, "--code", " "], "Enter code to verify"),
        (["verify", "--secret", "888", "--code", "123456"], "Verification failed or invalid secret"),
    ],
)
def test_verify_errors(capsys, monkeypatch, argv, message):
    monkeypatch.delenv("OTP_SECRET", raising=False)
    assert otp_cli.main(argv) == 2
    assert message in capsys.readouterr().err


def test_hotp(capsys):
    assert otp_cli.main(["hotp", "--secret", RFC_SECRET, "--counter", "3"]) == 0
    assert capsys.readouterr().out.strip() == "HOTP(counter=3): 969429"


def test_hotp_invalid(capsys, monkeypatch):
    monkeypatch.delenv("OTP_SECRET", raising=False)
    assert otp_cli.main(["hotp", "--secret", "", "--counter", "3"]) == 2
    assert otp_cli.main(["hotp", "--secret", RFC_SECRET, "--counter", "-1"]) == 2


def test_new_secret(capsys):
    assert otp_cli.main(["new-secret"]) == 0
    secret = capsys.readouterr().out.strip()
    assert len(base32.decode(secret)) == 20


def test_no_command(capsys):
    assert otp_cli.main([]) == 0
    assert "-h" in capsys.readouterr().out


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_verbose_logs_debug_without_secrets(caplog, freeze_clock, restore_root_level):
    freeze_clock(59_000)
    assert otp_cli.main(["--verbose", "code", "--secret", RFC_SECRET]) == 0
    assert restore_root_level.level == logging.DEBUG
    debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
    assert any(r.name == "totpcore.otp_core" for r in debug)
    assert RFC_SECRET not in caplog.text
    assert "287082" not in caplog.text


def test_default_log_level_is_warning(caplog, freeze_clock, restore_root_level):
    freeze_clock(59_000)
    assert otp_cli.main(["code", "--secret", RFC_SECRET]) == 0
    assert restore_root_level.level == logging.WARNING
    assert not [r for r in caplog.records if r.levelno == logging.DEBUG]
