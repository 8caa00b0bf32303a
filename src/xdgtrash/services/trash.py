# Filename: trash.py
# Author: Rich Lewis @RichLewis007
# Description: Moves paths into the freedesktop.org trash. Writes the metadata record first,
#              then moves the payload, and rolls the record back if the move fails.

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from xdgtrash.errors import (
    PathResolutionError,
    ProtectedPathError,
    SourceRemovalError,
    TrashError,
    describe,
)
from xdgtrash.models.trash_entry import TrashEntry, TrashRoot
from xdgtrash.models.trash_info import TRASHINFO_SUFFIX
from xdgtrash.services.copier import discard_path
from xdgtrash.services.metadata import write_trash_info
from xdgtrash.services.mover import move_tree

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TrashFailure:
    # A command-line argument that could not be trashed, and why.

    argument: str
    error: TrashError


@dataclass(slots=True)
class TrashReport:
    # Summary of a batch, split into successes and failures.

    trashed: list[TrashEntry] = field(default_factory=list)
    failed: list[TrashFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def resolve_absolute(path: str) -> str:
    # Make path absolute without resolving symlinks, so a link is trashed as a link.
    if not path:
        raise PathResolutionError("find absolute path: empty path")
    try:
        return os.path.abspath(path)
    except OSError as exc:
        raise PathResolutionError(f"find absolute path: {describe(exc)}") from exc


def _protected_directory(absolute: str, root: TrashRoot) -> str | None:
    # Return the trash directory that absolute is or contains, if any.
    for directory in (root.path, root.files_dir, root.info_dir):
        candidate = os.path.abspath(directory)
        if os.path.commonpath([absolute, candidate]) == absolute:
            return candidate
    return None


def send_path_to_trash(path: str, root: TrashRoot, deletion_date: str) -> TrashEntry:
    """Move ``path`` into ``root`` and record where it came from.

    Either both the payload and its record end up in the trash, or neither
    does. The one exception is ``SourceRemovalError``: the entry is complete
    but the original could not be deleted, so the record is kept.
    """
    absolute = resolve_absolute(path)
    protected = _protected_directory(absolute, root)
    if protected is not None:
        raise ProtectedPathError(f"refusing to move the trash directory {protected} into itself")

    info_path = write_trash_info(absolute, root.info_dir, deletion_date)
    payload_path = root.files_dir / info_path.name.removesuffix(TRASHINFO_SUFFIX)

    try:
        move_tree(absolute, payload_path)
    except SourceRemovalError:
        raise
    except TrashError:
        failure = discard_path(info_path)
        if failure is not None:
            logger.warning("%s", failure)
        raise

    entry = TrashEntry(original_path=absolute, payload_path=payload_path, info_path=info_path)
    logger.info("Trashed %s as %s", absolute, entry.name)
    return entry


def send_paths_to_trash(paths: Iterable[str], root: TrashRoot, deletion_date: str) -> TrashReport:
    # Trash each path in order; one failure never stops the rest.
    report = TrashReport()
    for path in paths:
        try:
            report.trashed.append(send_path_to_trash(path, root, deletion_date))
        except TrashError as exc:
            logger.debug("Failed to trash %s: %s", path, exc)
            report.failed.append(TrashFailure(argument=path, error=exc))
    return report


__all__ = [
    "TrashFailure",
    "TrashReport",
    "resolve_absolute",
    "send_path_to_trash",
    "send_paths_to_trash",
]
