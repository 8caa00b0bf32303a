# Filename: trash_entry.py
# Author: Rich Lewis @RichLewis007
# Description: Value types for the trash directory layout. TrashRoot knows where payloads and
#              records live; TrashEntry pairs one payload with its record.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_DIR_MODE = 0o755


@dataclass(slots=True, frozen=True)
class TrashRoot:
    # A trash directory holding files/ (payloads) and info/ (records).

    path: Path

    @property
    def files_dir(self) -> Path:
        return self.path / "files"

    @property
    def info_dir(self) -> Path:
        return self.path / "info"

    def ensure(self) -> TrashRoot:
        # Create files/ and info/ if missing; safe to race with other processes.
        for directory in (self.files_dir, self.info_dir):
            directory.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        return self


@dataclass(slots=True, frozen=True)
class TrashEntry:
    # A completed trash operation: payload and record share one base name.

    original_path: str
    payload_path: Path
    info_path: Path

    @property
    def name(self) -> str:
        return self.payload_path.name


__all__ = ["TrashEntry", "TrashRoot"]
