# Filename: metadata.py
# Author: Rich Lewis @RichLewis007
# Description: Writes the .trashinfo sidecar record for a trashed path. Record names are
#              generated exclusively so concurrent runs never collide.

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from xdgtrash.errors import MetadataWriteError, describe
from xdgtrash.models.trash_info import TRASHINFO_SUFFIX, TrashInfo
from xdgtrash.services.copier import discard_path

logger = logging.getLogger(__name__)

# Common file-name limit (NAME_MAX) and the length of tempfile's random token.
_NAME_MAX = 255
_TOKEN_LENGTH = 8


def write_trash_info(absolute_path: str, info_dir: Path, deletion_date: str) -> Path:
    """Create ``<basename>.<deletion_date>.<token>.trashinfo`` under ``info_dir``.

    The basename is shortened when needed so the record name fits in 255
    bytes. The record is synced to disk before this returns. If anything fails after
    the file was created, the partial record is removed and
    ``MetadataWriteError`` is raised.
    """
    basename = _fit_basename(os.path.basename(absolute_path), deletion_date)
    try:
        fd, name = tempfile.mkstemp(
            prefix=f"{basename}.{deletion_date}.",
            suffix=TRASHINFO_SUFFIX,
            dir=info_dir,
        )
    except OSError as exc:
        raise MetadataWriteError(f"create trashinfo: {describe(exc)}") from exc

    record = TrashInfo(original_path=absolute_path, deletion_date=deletion_date)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(record.render())
            handle.flush()
            os.fsync(handle.fileno())
    except OSError as exc:
        failure = discard_path(name)
        if failure is not None:
            logger.warning("%s", failure)
        raise MetadataWriteError(f"write trashinfo: {describe(exc)}") from exc

    logger.debug("Wrote %s for %s", name, absolute_path)
    return Path(name)


def _fit_basename(basename: str, deletion_date: str) -> str:
    # Shorten basename so the full record name stays within _NAME_MAX bytes.
    budget = _NAME_MAX - len(deletion_date) - _TOKEN_LENGTH - len(TRASHINFO_SUFFIX) - 2
    while len(os.fsencode(basename)) > budget:
        basename = basename[:-1]
    return basename


__all__ = ["write_trash_info"]
