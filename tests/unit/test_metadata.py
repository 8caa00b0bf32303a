import os
import re
from pathlib import Path

import pytest

from xdgtrash.errors import MetadataWriteError
from xdgtrash.models.trash_entry import TrashRoot
from xdgtrash.models.trash_info import TrashInfo
from xdgtrash.services import metadata
from xdgtrash.services.metadata import write_trash_info

DATE = "2024-01-02T03:04:05"


def test_writes_record(trash_root: TrashRoot) -> None:
    record = write_trash_info("/tmp/my file.txt", trash_root.info_dir, DATE)

    assert record.parent == trash_root.info_dir
    assert re.fullmatch(r"my file\.txt\.2024-01-02T03:04:05\.[A-Za-z0-9_]+\.trashinfo", record.name)
    assert record.read_text(encoding="utf-8") == (
        "[Trash Info]\nPath=/tmp/my%20file.txt\nDeletionDate=2024-01-02T03:04:05\n"
    )


def test_record_round_trips(trash_root: TrashRoot) -> None:
    path = "/srv/data/ünï 50%/ümlaut.txt"

    record = write_trash_info(path, trash_root.info_dir, DATE)

    assert TrashInfo.parse(record.read_text(encoding="utf-8")) == TrashInfo(path, DATE)


def test_same_basename_same_second_is_unique(trash_root: TrashRoot) -> None:
    first = write_trash_info("/a/report.txt", trash_root.info_dir, DATE)
    second = write_trash_info("/b/report.txt", trash_root.info_dir, DATE)

    assert first != second
    assert sorted(os.listdir(trash_root.info_dir)) == sorted([first.name, second.name])


def test_missing_info_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(MetadataWriteError, match="^create trashinfo: "):
        write_trash_info("/tmp/a.txt", tmp_path / "nowhere", DATE)


def test_failed_write_removes_partial_record(
    trash_root: TrashRoot, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_fsync(fd: int) -> None:
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(metadata.os, "fsync", broken_fsync)

    with pytest.raises(MetadataWriteError, match="^write trashinfo: Input/output error"):
        write_trash_info("/tmp/a.txt", trash_root.info_dir, DATE)

    assert os.listdir(trash_root.info_dir) == []


def test_long_basename_is_shortened(trash_root: TrashRoot) -> None:
    path = "/tmp/" + "é" * 120

    record = write_trash_info(path, trash_root.info_dir, DATE)

    assert len(os.fsencode(record.name)) <= 255
    assert record.name.startswith("é" * 100)
    assert record.name.endswith(".trashinfo")
    assert TrashInfo.parse(record.read_text(encoding="utf-8")).original_path == path


def test_short_basename_is_kept(trash_root: TrashRoot) -> None:
    record = write_trash_info("/tmp/" + "s" * 200, trash_root.info_dir, DATE)

    assert record.name.startswith("s" * 200 + "." + DATE + ".")
