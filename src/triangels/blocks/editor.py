# topmark:header:start
#
#   project      : TriAngels
#   file         : editor.py
#   file_relpath : src/triangels/blocks/editor.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Marker-block file editor.

`MarkerBlockEditor.apply` makes a file end with exactly one freshly generated
marker block; `MarkerBlockEditor.remove` deletes it again. Both operations:

- refuse to touch files with malformed markers (`MalformedMarkerSpanError`);
- take a backup snapshot before deleting an existing block;
- write through `triangels.utils.file.atomic_write_text`.

Backups are only taken when an existing block is about to be deleted. Pure
appends to a file without a block are not backed up: the user's content is
preserved verbatim and `remove` restores it.

Example:
    ```python
    editor = MarkerBlockEditor()
    editor.apply(Path("~/.bashrc").expanduser(), ['eval "$(starship init bash)"'])
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from triangels.blocks.backup import snapshot
from triangels.blocks.markers import (
    DEFAULT_MARKERS,
    Markers,
    MarkerSpan,
    find_spans,
    remove_spans,
    split_lines,
)
from triangels.config.logging import get_logger
from triangels.constants import APP_NAME, APP_VERSION
from triangels.core.errors import TargetNotFoundError
from triangels.utils.file import atomic_write_text, read_text, translate_os_errors

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = get_logger(__name__)

# Same shape as the output of date(1), e.g. "Sat Oct 18 14:03:11 CEST 2026".
ADDED_ON_FORMAT: str = "%a %b %d %H:%M:%S %Z %Y"


class EditStatus(str, Enum):
    """Outcome of an editor operation on one file."""

    CREATED = "created"
    INSERTED = "inserted"
    REPLACED = "replaced"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class EditResult:
    """Structured result of `MarkerBlockEditor.apply` / `MarkerBlockEditor.remove`.

    Attributes:
        path (Path): The target file.
        status (EditStatus): What happened to the file.
        backup (Path | None): Snapshot taken before the edit, if any.
    """

    path: Path
    status: EditStatus
    backup: Path | None = None

    @property
    def changed(self) -> bool:
        """Whether the file content was written."""
        return self.status is not EditStatus.UNCHANGED


def _local_now() -> datetime:
    return datetime.now().astimezone()


def format_added_on(now: datetime) -> str:
    """Render ``now`` for the block's ``Added on`` line."""
    if now.tzinfo is None:
        return now.strftime(ADDED_ON_FORMAT.replace(" %Z", ""))
    return now.strftime(ADDED_ON_FORMAT)


class MarkerBlockEditor:
    """Insert, replace and remove the managed block in text files.

    Args:
        markers (Markers): Begin/end marker pair.
        tool_name (str): Tool name written in the block's first comment line.
        version (str): Tool version written next to the name.
        clock (Callable[[], datetime] | None): Returns the current time; used for
            the ``Added on`` line and backup names. Defaults to local time.
    """

    def __init__(
        self,
        *,
        markers: Markers = DEFAULT_MARKERS,
        tool_name: str = APP_NAME,
        version: str = APP_VERSION,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.markers = markers
        self.tool_name = tool_name
        self.version = version
        self._clock = clock or _local_now

    def render_block(self, content_lines: Sequence[str], now: datetime) -> list[str]:
        """Return the full block (markers and metadata included) as bare lines."""
        return [
            self.markers.begin,
            f"# {self.tool_name} {self.version}",
            f"# Added on: {format_added_on(now)}",
            *content_lines,
            self.markers.end,
        ]

    def apply(
        self,
        path: Path,
        content_lines: Sequence[str],
        *,
        create_if_missing: bool = False,
    ) -> EditResult:
        """Install ``content_lines`` as the file's single marker block.

        Any existing block is removed (after a backup snapshot) and a new one
        is appended at the end of the file.

        Args:
            path (Path): Target file; parent directories may be missing when
                ``create_if_missing`` is set.
            content_lines (Sequence[str]): Payload lines, already rendered.
            create_if_missing (bool): Create the file (and parents) if absent.

        Returns:
            EditResult: ``CREATED``, ``INSERTED`` or ``REPLACED``.

        Raises:
            TargetNotFoundError: If the file is missing and may not be created.
        """
        path = Path(path)
        for line in content_lines:
            if "\n" in line or "\r" in line:
                raise ValueError(f"content line contains a line break: {line!r}")

        created = False
        if not path.exists():
            if not create_if_missing:
                raise TargetNotFoundError("file does not exist", path=path)
            with translate_os_errors(path):
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
            created = True
            logger.info("Created: %s", path)

        now: datetime = self._clock()
        lines: list[str] = split_lines(read_text(path))
        spans: list[MarkerSpan] = find_spans(lines, self.markers, path=path)

        backup: Path | None = None
        if spans:
            backup = snapshot(path, now=now)
            lines = remove_spans(lines, spans)

        body: str = "".join(lines)
        if body and not body.endswith("\n"):
            body += "\n"
        block: list[str] = self.render_block(content_lines, now)
        atomic_write_text(path, body + "\n".join(block) + "\n")

        if created:
            status = EditStatus.CREATED
        elif spans:
            status = EditStatus.REPLACED
        else:
            status = EditStatus.INSERTED
        logger.info("%s block in %s", status.value, path)
        return EditResult(path=path, status=status, backup=backup)

    def remove(self, path: Path) -> EditResult:
        """Delete the marker block from ``path`` if there is one.

        Missing files and files without markers are left alone.

        Args:
            path (Path): Target file.

        Returns:
            EditResult: ``REMOVED`` when a block was deleted, else ``UNCHANGED``.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("remove: %s does not exist", path)
            return EditResult(path=path, status=EditStatus.UNCHANGED)

        lines: list[str] = split_lines(read_text(path))
        spans: list[MarkerSpan] = find_spans(lines, self.markers, path=path)
        if not spans:
            return EditResult(path=path, status=EditStatus.UNCHANGED)

        backup: Path | None = snapshot(path, now=self._clock())
        atomic_write_text(path, "".join(remove_spans(lines, spans)))
        logger.info("Removed block from %s", path)
        return EditResult(path=path, status=EditStatus.REMOVED, backup=backup)
