# Filename: errors.py
# Author: Rich Lewis @RichLewis007
# Description: Error taxonomy for trash operations. Every failure that can be attributed to a
#              single command-line argument derives from TrashError.

from __future__ import annotations


class TrashError(Exception):
    """Base class for a failure to trash one path.

    The message is the user-facing cause; the CLI prefixes it with the
    argument that was being processed.
    """


class PathResolutionError(TrashError):
    # The argument could not be turned into an absolute path.
    pass


class ProtectedPathError(TrashError):
    # The argument is the trash directory itself or one of its ancestors.
    pass


class MetadataWriteError(TrashError):
    # The .trashinfo record could not be created, written or closed.
    pass


class MoveError(TrashError):
    # The payload could not be relocated into the trash.
    pass


class SourceRemovalError(MoveError):
    """The payload was copied into the trash but the original could not be removed.

    Unlike other move failures the trash entry is complete, so the metadata
    record is kept.
    """


class UnsupportedFileType(TrashError):
    # Entry is neither a regular file, a symlink nor a directory.

    def __init__(self, path: str, mode_name: str) -> None:
        super().__init__(f"{path}: unsupported file type {mode_name}")
        self.path = path
        self.mode_name = mode_name


class RollbackError(TrashError):
    """Outcome of a best-effort cleanup that did not complete.

    Cleanup helpers return this instead of raising it, so it never replaces
    the error that triggered the rollback.
    """


def describe(exc: BaseException) -> str:
    # Render an exception as a short cause string for diagnostics.
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename is not None:
            return f"{exc.filename}: {exc.strerror}"
        return exc.strerror
    return str(exc) or exc.__class__.__name__


__all__ = [
    "MetadataWriteError",
    "MoveError",
    "PathResolutionError",
    "ProtectedPathError",
    "RollbackError",
    "SourceRemovalError",
    "TrashError",
    "UnsupportedFileType",
    "describe",
]
