# src/reclaim_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the client checks for the token).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "RECLAIM"

DEFAULT_BASE_URL = "https://api.app.reclaim.ai/api"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    # ---- Reclaim API ----
    api_key: str | None
    base_url: str
    user_agent: str
    connect_timeout: float
    read_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_dir = _env_path(_k("LOG_DIR"), None)

        # RECLAIM_TOKEN is the older name; RECLAIM_API_KEY wins when both are set.
        api_key = _first_env(_k("API_KEY"), _k("TOKEN"), default=None)
        if api_key is not None:
            api_key = api_key.strip()

        base_url = _env(_k("BASE_URL"), DEFAULT_BASE_URL).rstrip("/") or DEFAULT_BASE_URL
        user_agent = _env(_k("USER_AGENT"), "reclaim-tasks/0.1 (python)")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 30.0)

        return Settings(
            log_level=log_level,
            log_dir=log_dir,
            api_key=api_key,
            base_url=base_url,
            user_agent=user_agent,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
