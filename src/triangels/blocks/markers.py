# topmark:header:start
#
#   project      : TriAngels
#   file         : markers.py
#   file_relpath : src/triangels/blocks/markers.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Marker detection and removal on line lists.

Lines are handled with their line endings attached (``str.splitlines(keepends=True)``)
so that joining the surviving lines reproduces the untouched content byte for
byte. A line matches a marker when it equals the marker once its line ending
is dropped; leading or trailing blanks make it a different line.

Scanning is strict. Any number of well-formed, non-nested begin/end pairs is
accepted (and removed together, which repairs duplicated blocks into one).
A begin-marker inside an open span, an end-marker without an open span, or a
begin-marker that is never closed raises `MalformedMarkerSpanError` and the
caller must leave the file alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from triangels.config.logging import get_logger
from triangels.constants import MARK_BEGIN, MARK_END
from triangels.core.errors import MalformedMarkerSpanError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = get_logger(__name__)


@dataclass(frozen=True)
class Markers:
    """Begin/end marker pair.

    Attributes:
        begin (str): Exact text of the begin-marker line (without line ending).
        end (str): Exact text of the end-marker line (without line ending).
    """

    begin: str
    end: str

    def __post_init__(self) -> None:
        if not self.begin or not self.end:
            raise ValueError("Markers must be non-empty")
        if self.begin == self.end:
            raise ValueError("Begin and end markers must differ")
        if "\n" in self.begin or "\n" in self.end:
            raise ValueError("Markers must be single lines")


DEFAULT_MARKERS: Markers = Markers(begin=MARK_BEGIN, end=MARK_END)


@dataclass(frozen=True)
class MarkerSpan:
    """Inclusive 0-based line range of one marker block."""

    start: int
    end: int


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines, keeping line endings."""
    return text.splitlines(keepends=True)


def _bare(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def has_begin_marker(lines: Sequence[str], markers: Markers = DEFAULT_MARKERS) -> bool:
    """Return True if any line equals the begin-marker."""
    return any(_bare(line) == markers.begin for line in lines)


def find_spans(
    lines: Sequence[str],
    markers: Markers = DEFAULT_MARKERS,
    *,
    path: Path | None = None,
) -> list[MarkerSpan]:
    """Locate all marker blocks in ``lines``.

    Args:
        lines (Sequence[str]): File content as lines (line endings optional).
        markers (Markers): Marker pair to look for.
        path (Path | None): File the lines come from; only used in error messages.

    Returns:
        list[MarkerSpan]: Spans in file order; empty when no marker lines exist.

    Raises:
        MalformedMarkerSpanError: If markers are nested, orphaned or unterminated.
    """
    spans: list[MarkerSpan] = []
    open_at: int | None = None

    for idx, line in enumerate(lines):
        bare = _bare(line)
        if bare == markers.begin:
            if open_at is not None:
                raise MalformedMarkerSpanError(
                    f"begin-marker on line {idx + 1} while block from line "
                    f"{open_at + 1} is still open",
                    path=path,
                    lines=(open_at + 1, idx + 1),
                )
            open_at = idx
        elif bare == markers.end:
            if open_at is None:
                raise MalformedMarkerSpanError(
                    f"end-marker on line {idx + 1} has no matching begin-marker",
                    path=path,
                    lines=(idx + 1,),
                )
            spans.append(MarkerSpan(start=open_at, end=idx))
            open_at = None

    if open_at is not None:
        raise MalformedMarkerSpanError(
            f"begin-marker on line {open_at + 1} is never closed",
            path=path,
            lines=(open_at + 1,),
        )

    if len(spans) > 1:
        logger.warning("%s: found %d marker blocks, merging into one", path, len(spans))
    return spans


def remove_spans(lines: Sequence[str], spans: Sequence[MarkerSpan]) -> list[str]:
    """Return ``lines`` without the lines covered by ``spans`` (inclusive)."""
    drop: set[int] = set()
    for span in spans:
        drop.update(range(span.start, span.end + 1))
    return [line for idx, line in enumerate(lines) if idx not in drop]
