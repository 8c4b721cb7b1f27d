# topmark:header:start
#
#   project      : TriAngels
#   file         : backup.py
#   file_relpath : src/triangels/blocks/backup.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Timestamped backup snapshots.

A snapshot is a full copy of a file at ``<path>.bak.<YYYYMMDDHHMMSS>`` taken
right before a destructive edit. Snapshots are never deleted by TriAngels.

Timestamps have second resolution. When a snapshot with the same name already
exists (two edits within one second), a numeric suffix is appended
(``.bak.<ts>.1``, ``.bak.<ts>.2``, ...) instead of overwriting it.
"""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path

from triangels.config.logging import get_logger
from triangels.constants import BACKUP_INFIX, BACKUP_TIMESTAMP_FORMAT
from triangels.utils.file import translate_os_errors

logger = get_logger(__name__)


def backup_path_for(path: Path, now: datetime) -> Path:
    """Return the canonical backup path for ``path`` at time ``now``."""
    return path.with_name(f"{path.name}{BACKUP_INFIX}{now.strftime(BACKUP_TIMESTAMP_FORMAT)}")


def snapshot(path: Path, *, now: datetime | None = None) -> Path | None:
    """Copy ``path`` to a timestamped sibling, preserving mode bits.

    Args:
        path (Path): File to back up.
        now (datetime | None): Timestamp to use; defaults to the current local time.

    Returns:
        Path | None: The backup path, or None when ``path`` does not exist.
    """
    if not path.is_file():
        logger.debug("snapshot: %s does not exist, nothing to back up", path)
        return None

    base: Path = backup_path_for(path, now or datetime.now())
    target: Path = base
    n = 0
    while target.exists():
        n += 1
        target = base.with_name(f"{base.name}.{n}")

    with translate_os_errors(path):
        shutil.copy2(path, target)
    logger.info("Backup created: %s", target)
    return target
