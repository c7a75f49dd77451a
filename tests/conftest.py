"""Shared fixtures: a frozen clock and a Flask test client."""

from __future__ import annotations

import pytest

from totpcore import otp_core


@pytest.fixture
def freeze_clock(monkeypatch):
    """Pin otp_core.current_millis() to a given value: freeze_clock(59_000)."""

    def _freeze(now_millis: int) -> None:
        monkeypatch.setattr(otp_core, "current_millis", lambda: now_millis)

    return _freeze


@pytest.fixture
def client():
    from totpweb import app

    app.config.update(TESTING=True)
    with app.test_client() as c:
        yield c
