"""Shared test fixtures for translator-token tests."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from translator_token.provider import TokenProvider
from translator_token.transport import TokenResponse


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep real ``TRANSLATOR_*`` variables and ``.env`` files out of tests."""
    for name in ("TRANSLATOR_SUBSCRIPTION_KEY", "TRANSLATOR_REGION", "TRANSLATOR_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def transport():
    """A fake transport answering ``200 abc123`` to every request."""
    fake = MagicMock()
    fake.send.return_value = TokenResponse(status_code=200, text="abc123")
    return fake


@pytest.fixture()
def clock():
    """Freeze the provider's monotonic clock at t=1000s."""
    with patch("translator_token.provider.time") as mock_time:
        mock_time.monotonic.return_value = 1000.0
        yield mock_time


@pytest.fixture()
def provider(transport):
    """A provider with a subscription key and the fake transport."""
    p = TokenProvider("key-1", transport=transport)
    yield p
    p.close()
