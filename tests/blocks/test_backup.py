# topmark:header:start
#
#   project      : TriAngels
#   file         : test_backup.py
#   file_relpath : tests/blocks/test_backup.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Tests for timestamped backup snapshots."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

from tests.conftest import FIXED_NOW
from triangels.blocks.backup import backup_path_for, snapshot

if TYPE_CHECKING:
    from pathlib import Path


def test_backup_name_uses_second_resolution_timestamp(tmp_path: Path) -> None:
    target = tmp_path / ".bashrc"
    assert backup_path_for(target, FIXED_NOW).name == ".bashrc.bak.20250314150926"


def test_snapshot_of_missing_file_is_a_noop(tmp_path: Path) -> None:
    assert snapshot(tmp_path / "missing", now=FIXED_NOW) is None
    assert list(tmp_path.iterdir()) == []


def test_snapshot_copies_bytes_and_mode(tmp_path: Path) -> None:
    target = tmp_path / ".zshrc"
    target.write_bytes(b"export A=1\r\nno newline at end")
    target.chmod(0o640)

    backup = snapshot(target, now=FIXED_NOW)

    assert backup is not None
    assert backup.read_bytes() == target.read_bytes()
    assert stat.S_IMODE(backup.stat().st_mode) == 0o640


def test_same_second_snapshots_never_overwrite(tmp_path: Path) -> None:
    target = tmp_path / ".bashrc"
    target.write_text("one\n")
    first = snapshot(target, now=FIXED_NOW)
    target.write_text("two\n")
    second = snapshot(target, now=FIXED_NOW)
    target.write_text("three\n")
    third = snapshot(target, now=FIXED_NOW)

    assert first is not None and second is not None and third is not None
    assert first.name == ".bashrc.bak.20250314150926"
    assert second.name == ".bashrc.bak.20250314150926.1"
    assert third.name == ".bashrc.bak.20250314150926.2"
    assert first.read_text() == "one\n"
    assert second.read_text() == "two\n"
