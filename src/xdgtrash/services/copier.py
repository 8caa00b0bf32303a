# Filename: copier.py
# Author: Rich Lewis @RichLewis007
# Description: Recursive tree copy used when a payload cannot be renamed into the trash.
#              Copies regular files, symlinks and directories (including read-only ones) and
#              removes the partial copy when anything goes wrong.

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
from dataclasses import dataclass

from xdgtrash.errors import RollbackError, UnsupportedFileType, describe

logger = logging.getLogger(__name__)

# Owner rwx: enough to populate a directory regardless of its final mode.
_WRITABLE_DIR_MODE = 0o700

_TYPE_NAMES = (
    (stat.S_ISFIFO, "fifo"),
    (stat.S_ISSOCK, "socket"),
    (stat.S_ISCHR, "character device"),
    (stat.S_ISBLK, "block device"),
)


@dataclass(slots=True)
class _PendingDirectory:
    # Directory whose final mode and timestamps are applied after its children.

    path: str
    mode: int
    atime_ns: int
    mtime_ns: int


def copy_tree(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Copy the file-system subtree at ``src`` to ``dst`` without following symlinks.

    Directories are created owner-writable while their children are copied and
    receive their original permission bits in a second pass, deepest first, so
    read-only directories stay read-only in the copy.

    Raises ``FileExistsError`` if ``dst`` already exists, ``UnsupportedFileType``
    for FIFOs, sockets and devices, and ``OSError`` for any other failure. On
    failure everything written under ``dst`` is removed before the error
    propagates.
    """
    src = os.fspath(src)
    dst = os.fspath(dst)
    if os.path.lexists(dst):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), dst)

    pending: list[_PendingDirectory] = []
    try:
        _copy_entry(src, dst, os.lstat(src), pending)
        for directory in reversed(pending):
            os.chmod(directory.path, directory.mode)
            os.utime(directory.path, ns=(directory.atime_ns, directory.mtime_ns))
    except (OSError, UnsupportedFileType):
        failure = discard_path(dst)
        if failure is not None:
            logger.warning("%s", failure)
        raise

    logger.debug("Copied %s -> %s (%d directories)", src, dst, len(pending))


def discard_path(path: str | os.PathLike[str]) -> RollbackError | None:
    """Best-effort removal of whatever exists at ``path``.

    Directory permissions are widened on the way down so that read-only
    directories created by a partial copy can be emptied. Never raises; a
    failure is returned so the caller can report it next to the primary error.
    """
    try:
        _remove_writable(os.fspath(path))
    except OSError as exc:
        return RollbackError(f"could not clean up {os.fspath(path)}: {describe(exc)}")
    return None


def _copy_entry(src: str, dst: str, st: os.stat_result, pending: list[_PendingDirectory]) -> None:
    mode = st.st_mode
    if stat.S_ISREG(mode):
        _copy_file(src, dst, st)
    elif stat.S_ISLNK(mode):
        os.symlink(os.readlink(src), dst)
    elif stat.S_ISDIR(mode):
        with os.scandir(src) as it:
            entries = list(it)
        os.mkdir(dst, _WRITABLE_DIR_MODE)
        # mkdir honours the umask; make sure we can write children.
        os.chmod(dst, _WRITABLE_DIR_MODE)
        pending.append(
            _PendingDirectory(
                path=dst,
                mode=stat.S_IMODE(mode),
                atime_ns=st.st_atime_ns,
                mtime_ns=st.st_mtime_ns,
            )
        )
        for entry in entries:
            _copy_entry(
                entry.path,
                os.path.join(dst, entry.name),
                entry.stat(follow_symlinks=False),
                pending,
            )
    else:
        raise UnsupportedFileType(src, _type_name(mode))


def _copy_file(src: str, dst: str, st: os.stat_result) -> None:
    # O_EXCL guards against overwriting anything already at dst.
    perm = stat.S_IMODE(st.st_mode)
    with open(src, "rb") as source:
        fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_EXCL, perm)
        with os.fdopen(fd, "wb") as target:
            shutil.copyfileobj(source, target)
            os.fchmod(target.fileno(), perm)
    os.utime(dst, ns=(st.st_atime_ns, st.st_mtime_ns))


def _remove_writable(path: str) -> None:
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return
    if not stat.S_ISDIR(st.st_mode):
        os.unlink(path)
        return
    os.chmod(path, _WRITABLE_DIR_MODE)
    with os.scandir(path) as it:
        children = [entry.path for entry in it]
    for child in children:
        _remove_writable(child)
    os.rmdir(path)


def _type_name(mode: int) -> str:
    for check, name in _TYPE_NAMES:
        if check(mode):
            return name
    return f"mode {stat.S_IFMT(mode):o}"


__all__ = ["copy_tree", "discard_path"]
