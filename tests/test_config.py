# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from things_bridge.config import Settings
from things_bridge.logging_setup import setup_logging


def test_settings_defaults(monkeypatch) -> None:
    for name in ("THINGS_APPLICATION", "THINGS_SEARCH_LIMIT", "THINGS_OSASCRIPT_PATH", "THINGS_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.application == "Things3"
    assert s.osascript_path == "osascript"
    assert s.search_limit == 50


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("THINGS_APPLICATION", "Things3 Beta")
    monkeypatch.setenv("THINGS_SEARCH_LIMIT", "10")
    monkeypatch.setenv("THINGS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("THINGS_LOG_TO_FILE", "no")
    s = Settings.from_env()
    assert s.application == "Things3 Beta"
    assert s.search_limit == 10
    assert s.data_dir == tmp_path
    assert s.log_to_file is False


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_settings_bad_search_limit_falls_back(monkeypatch, raw) -> None:
    monkeypatch.setenv("THINGS_SEARCH_LIMIT", raw)
    assert Settings.from_env().search_limit == 50


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logger) -> None:
    setup_logging(log_dir=tmp_path / "logs", file_level=logging.DEBUG)
    logging.getLogger("things_bridge.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello file" in (tmp_path / "logs" / "things.log").read_text("utf-8")


def test_setup_logging_console_only(restore_root_logger) -> None:
    setup_logging(log_dir=None)
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
