# Filename: mover.py
# Author: Rich Lewis @RichLewis007
# Description: Moves a file-system subtree into the trash. Tries an atomic rename first and
#              falls back to copy-then-delete when source and trash are on different devices.

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import sys
from collections.abc import Callable

from xdgtrash.errors import MoveError, SourceRemovalError, describe
from xdgtrash.services.copier import copy_tree

logger = logging.getLogger(__name__)

_OWNER_WX = stat.S_IWUSR | stat.S_IXUSR


def move_tree(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Move ``src`` to ``dst``.

    A same-device move is a single ``rename``. A cross-device move (``EXDEV``)
    copies the tree and then deletes the original. Other rename failures are
    reported straight away without copying anything.

    Raises ``MoveError`` when nothing was moved (``dst`` does not exist and
    ``src`` is untouched), ``UnsupportedFileType`` when the tree holds a special
    file, and ``SourceRemovalError`` when the copy landed at ``dst`` but ``src``
    could not be removed.
    """
    src = os.fspath(src)
    dst = os.fspath(dst)
    if os.path.lexists(dst):
        raise MoveError(f"{dst}: destination already exists")

    failure = _attempt_rename(src, dst)
    if failure is None:
        logger.debug("Renamed %s -> %s", src, dst)
        return
    if failure.errno != errno.EXDEV:
        raise MoveError(describe(failure)) from failure

    logger.info("%s is on another device; copying into the trash", src)
    try:
        copy_tree(src, dst)
    except OSError as exc:
        raise MoveError(describe(exc)) from exc

    try:
        remove_path(src)
    except OSError as exc:
        raise SourceRemovalError(
            f"copied into the trash but could not remove original: {describe(exc)}"
        ) from exc


def remove_path(path: str) -> None:
    # Delete path recursively like rm -r; symlinks are removed, never followed.
    # Read-only directories inside the tree are made owner-writable as needed.
    if os.path.isdir(path) and not os.path.islink(path):
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_widen_parent_and_retry)
        else:
            shutil.rmtree(path, onerror=_widen_parent_and_retry)
    else:
        os.unlink(path)


def _widen_parent_and_retry(func: Callable[..., object], path: str, exc: object) -> None:
    """Error handler for ``shutil.rmtree``.

    When the entry's parent directory lacks owner write/search permission,
    grant it and retry once. Otherwise re-raise with the full path, since the
    fd-based rmtree only reports the bare entry name.
    """
    error = exc if isinstance(exc, BaseException) else exc[1]  # type: ignore[index]
    parent = os.path.dirname(path)
    try:
        mode = stat.S_IMODE(os.lstat(parent).st_mode)
    except OSError:
        mode = _OWNER_WX
    if mode & _OWNER_WX != _OWNER_WX:
        os.chmod(parent, mode | _OWNER_WX)
        func(path)
        return
    if isinstance(error, OSError) and error.errno is not None:
        raise OSError(error.errno, error.strerror, path) from error
    raise error


def _attempt_rename(src: str, dst: str) -> OSError | None:
    # Return the rename failure instead of raising it; failing here is routine.
    try:
        os.rename(src, dst)
    except OSError as exc:
        return exc
    return None


__all__ = ["move_tree", "remove_path"]
