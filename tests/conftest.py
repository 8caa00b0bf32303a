"""Shared fixtures: isolated home/XDG directories and a ready trash root."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from xdgtrash.models.trash_entry import TrashRoot

_CONFIGURED_HANDLER_TYPES = (logging.StreamHandler, logging.handlers.RotatingFileHandler)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point HOME and the XDG directories into the test's temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.delenv("TRASH_LOG_LEVEL", raising=False)

    root = logging.getLogger()
    level = root.level
    yield home

    # Drop handlers installed by the CLI's logging setup.
    for handler in list(root.handlers):
        if type(handler) in _CONFIGURED_HANDLER_TYPES:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture(name="trash_root")
def fixture_trash_root(tmp_path: Path) -> TrashRoot:
    """Return a trash root with files/ and info/ already created."""
    return TrashRoot(tmp_path / "trash").ensure()


@pytest.fixture(name="workdir")
def fixture_workdir(tmp_path: Path) -> Path:
    """Directory holding the paths tests will send to the trash."""
    path = tmp_path / "work"
    path.mkdir()
    return path
