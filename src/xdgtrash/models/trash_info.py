# Filename: trash_info.py
# Author: Rich Lewis @RichLewis007
# Description: Model for freedesktop.org .trashinfo records. Handles percent-escaping of the
#              original path and rendering/parsing of the "[Trash Info]" text format.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final
from urllib.parse import quote, unquote_to_bytes

TRASHINFO_SUFFIX: Final[str] = ".trashinfo"
TRASHINFO_HEADER: Final[str] = "[Trash Info]"
DELETION_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S"

# Characters left as-is inside a path segment, matching URL path escaping.
_SEGMENT_SAFE: Final[str] = "$&+,:;=@"


def escape_path(path: str) -> str:
    """Percent-encode every segment of ``path`` and rejoin them with ``/``.

    Segments are encoded from their file-system bytes, so names that are not
    valid UTF-8 survive a round trip through :func:`unescape_path`.
    """
    segments = os.fsencode(path).split(b"/")
    return "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in segments)


def unescape_path(escaped: str) -> str:
    # Reverse escape_path, segment by segment.
    return "/".join(os.fsdecode(unquote_to_bytes(segment)) for segment in escaped.split("/"))


@dataclass(slots=True, frozen=True)
class TrashInfo:
    # Sidecar record describing where a trashed entry came from and when.

    original_path: str
    deletion_date: str

    def render(self) -> str:
        # Return the on-disk text of the record.
        return (
            f"{TRASHINFO_HEADER}\n"
            f"Path={escape_path(self.original_path)}\n"
            f"DeletionDate={self.deletion_date}\n"
        )

    @classmethod
    def parse(cls, text: str) -> TrashInfo:
        """Parse the text of a .trashinfo record.

        Keys outside the ``[Trash Info]`` group are ignored. Raises
        ``ValueError`` when the group or its ``Path`` key is missing.
        """
        original: str | None = None
        deletion_date = ""
        in_section = False
        for line in text.splitlines():
            stripped = line.strip()
            if stripped.startswith("[") and stripped.endswith("]"):
                in_section = stripped == TRASHINFO_HEADER
                continue
            if not in_section or "=" not in line:
                continue
            key, value = line.split("=", 1)
            if key == "Path" and original is None:
                original = unescape_path(value)
            elif key == "DeletionDate" and not deletion_date:
                deletion_date = value

        if original is None:
            raise ValueError("trashinfo record has no Path entry")
        return cls(original_path=original, deletion_date=deletion_date)


__all__ = [
    "DELETION_DATE_FORMAT",
    "TRASHINFO_HEADER",
    "TRASHINFO_SUFFIX",
    "TrashInfo",
    "escape_path",
    "unescape_path",
]
