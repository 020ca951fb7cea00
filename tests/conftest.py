# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from things_bridge.things.things_api import ThingsClient

from .fakes import FakeRunner


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with ThingsClient.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the caller's environment.
    """
    return SimpleNamespace(
        app_name="things",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path,
        osascript_path="osascript",
        application="Things3",
        search_limit=50,
    )


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def client(runner: FakeRunner, settings: SimpleNamespace) -> ThingsClient:
    """ThingsClient wired to the fake runner; no osascript is ever spawned."""
    return ThingsClient(runner, settings=settings)


