# topmark:header:start
#
#   file         : file.py
#   file_relpath : src/triangels/utils/file.py
#   project      : TriAngels
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""File utilities for TriAngels.

All writes to user files go through `atomic_write_text`: content is written to
a temporary sibling and renamed over the target, so a concurrent reader never
sees a half-written file. `translate_os_errors` converts ``OSError`` into the
core error kinds.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from triangels.config.logging import get_logger
from triangels.core.errors import TargetIOError, TargetNotFoundError, TargetPermissionError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)

# Undecodable bytes in user files survive a read and write cycle.
RC_ENCODING_ERRORS = "surrogateescape"


@contextmanager
def translate_os_errors(path: Path) -> Iterator[None]:
    """Re-raise ``OSError`` subclasses as TriAngels core errors for ``path``.

    Args:
        path (Path): The file being operated on; attached to the raised error.

    Raises:
        TargetNotFoundError: On ``FileNotFoundError``.
        TargetPermissionError: On ``PermissionError``.
        TargetIOError: On any other ``OSError`` (including ``IsADirectoryError``).
    """
    try:
        yield
    except FileNotFoundError as exc:
        raise TargetNotFoundError(exc.strerror or str(exc), path=path) from exc
    except PermissionError as exc:
        raise TargetPermissionError(exc.strerror or str(exc), path=path) from exc
    except OSError as exc:
        raise TargetIOError(exc.strerror or str(exc), path=path) from exc


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 text, keeping line endings untouched.

    Bytes that are not valid UTF-8 are kept as surrogate escapes, so text
    written back with `atomic_write_text` round-trips them unchanged.

    Args:
        path (Path): File to read.

    Returns:
        str: The file content.
    """
    with (
        translate_os_errors(path),
        open(path, encoding="utf-8", errors=RC_ENCODING_ERRORS, newline="") as f,
    ):
        return f.read()


def atomic_write_text(path: Path, text: str) -> int:
    """Replace ``path`` with ``text`` using write-then-rename.

    The temporary file is created in the target's directory so the final
    ``os.replace`` stays on one filesystem. When ``path`` already exists its
    mode bits are copied onto the replacement. A symlinked ``path`` is resolved
    first so the link target is rewritten and the link itself is kept.

    Args:
        path (Path): Destination file.
        text (str): Full new content.

    Returns:
        int: Number of UTF-8 bytes written.
    """
    data: bytes = text.encode("utf-8", errors=RC_ENCODING_ERRORS)
    path = Path(os.path.realpath(path))
    with translate_os_errors(path):
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
    logger.debug("atomic write: %d bytes to %s", len(data), path)
    return len(data)


def home_relative(path: Path, home: Path) -> str:
    """Render ``path`` as ``$HOME/...`` when it lies under ``home``.

    Args:
        path (Path): Path to render.
        home (Path): Home directory of the target user.

    Returns:
        str: ``$HOME``-relative form, or the absolute path when outside ``home``.
    """
    try:
        rel = path.relative_to(home)
    except ValueError:
        return str(path)
    if rel == Path("."):
        return "$HOME"
    return f"$HOME/{rel.as_posix()}"
