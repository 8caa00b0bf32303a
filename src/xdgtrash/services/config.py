# Filename: config.py
# Author: Rich Lewis @RichLewis007
# Description: Configuration helpers for the trash command. Resolves the per-user trash
#              directory from the XDG base directories and reads environment settings.

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from platformdirs.unix import Unix

from xdgtrash.models.trash_entry import TrashRoot
from xdgtrash.models.trash_info import DELETION_DATE_FORMAT

APP_NAME = "xdg-trash"
ORG_NAME = "Rich Lewis"

TRASH_DIR_NAME = "Trash"
LOG_LEVEL_ENV = "TRASH_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def trash_root_path() -> Path:
    # $XDG_DATA_HOME/Trash, or $HOME/.local/share/Trash when XDG_DATA_HOME is empty.
    # The freedesktop trash lives in the XDG data home on every platform.
    data_home = Unix().user_data_dir
    return Path(os.path.abspath(data_home)) / TRASH_DIR_NAME


def ensure_trash_root(path: Path | None = None) -> TrashRoot:
    # Return the trash root with files/ and info/ created.
    return TrashRoot(path if path is not None else trash_root_path()).ensure()


def deletion_timestamp(now: datetime | None = None) -> str:
    # Format the local deletion time shared by every path in one run.
    moment = now if now is not None else datetime.now()
    return moment.strftime(DELETION_DATE_FORMAT)


def load_log_level(environ: Mapping[str, str] | None = None) -> str:
    # Return the console log level requested through TRASH_LOG_LEVEL.
    env = os.environ if environ is None else environ
    value = env.get(LOG_LEVEL_ENV, "").strip().upper()
    if value in _LOG_LEVELS:
        return value
    return _DEFAULT_LOG_LEVEL
