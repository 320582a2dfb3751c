# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from reclaim_tasks.api.client import ReclaimClient

from .fakes import FakeReclaimApi


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with ReclaimClient and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        log_level="WARNING",
        log_dir=None,
        api_key="test_token_12345",
        base_url="https://api.app.reclaim.ai/api",
        user_agent="reclaim-tasks-tests",
        connect_timeout=1.0,
        read_timeout=1.0,
    )


@pytest.fixture()
def fake_api() -> FakeReclaimApi:
    return FakeReclaimApi()


@pytest.fixture()
def client(settings: SimpleNamespace, fake_api: FakeReclaimApi) -> Iterator[ReclaimClient]:
    """
    ReclaimClient wired to the in-memory fake API.

    NOTE: the real httpx stack (request building, JSON encoding) still runs;
    only the transport is replaced.
    """
    c = ReclaimClient(settings=settings, transport=fake_api.transport())
    yield c
    c.close()
