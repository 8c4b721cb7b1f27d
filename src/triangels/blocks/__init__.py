# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/blocks/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Marker-block management for text files.

A marker block is a run of lines owned by TriAngels, delimited by a fixed
begin-marker line and a fixed end-marker line. Everything outside the block
belongs to the user and is never touched, apart from adding a missing
trailing newline before a block is appended.

Public surface:

- `MarkerBlockEditor`: ``apply`` / ``remove`` on a single file.
- `Markers`, `DEFAULT_MARKERS`: marker pair definitions.
- `snapshot`: timestamped backup of a file.
"""

from __future__ import annotations

from triangels.blocks.backup import snapshot
from triangels.blocks.editor import EditResult, EditStatus, MarkerBlockEditor
from triangels.blocks.markers import DEFAULT_MARKERS, Markers, MarkerSpan

__all__ = [
    "DEFAULT_MARKERS",
    "EditResult",
    "EditStatus",
    "MarkerBlockEditor",
    "MarkerSpan",
    "Markers",
    "snapshot",
]
