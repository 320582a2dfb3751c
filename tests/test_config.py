# tests/test_config.py

from __future__ import annotations

from dataclasses import fields
from pathlib import Path

import pytest

from reclaim_tasks.config import DEFAULT_BASE_URL, Settings

_VARS = (
    "RECLAIM_API_KEY",
    "RECLAIM_TOKEN",
    "RECLAIM_BASE_URL",
    "RECLAIM_LOG_LEVEL",
    "RECLAIM_LOG_DIR",
    "RECLAIM_READ_TIMEOUT_SECONDS",
    "RECLAIM_CONNECT_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert {f.name for f in fields(Settings)} == {
        "log_level",
        "log_dir",
        "api_key",
        "base_url",
        "user_agent",
        "connect_timeout",
        "read_timeout",
    }
    assert s.api_key is None
    assert s.base_url == DEFAULT_BASE_URL
    assert s.log_level == "WARNING"
    assert s.log_dir is None
    assert s.read_timeout == 30.0


def test_api_key_wins_over_legacy_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECLAIM_TOKEN", "legacy")
    assert Settings.from_env().api_key == "legacy"

    monkeypatch.setenv("RECLAIM_API_KEY", " primary ")
    assert Settings.from_env().api_key == "primary"


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECLAIM_BASE_URL", "http://localhost:8080/api/")
    monkeypatch.setenv("RECLAIM_READ_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.setenv("RECLAIM_CONNECT_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("RECLAIM_LOG_DIR", "/tmp/reclaim-logs")

    s = Settings.from_env()
    assert s.base_url == "http://localhost:8080/api"
    assert s.read_timeout == 30.0
    assert s.connect_timeout == 2.5
    assert s.log_dir == Path("/tmp/reclaim-logs")
