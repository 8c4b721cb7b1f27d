# topmark:header:start
#
#   project      : TriAngels
#   file         : errors.py
#   file_relpath : src/triangels/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Exceptions raised by the TriAngels core.

These exceptions are Click-free so that the marker-block editor, the host
collaborators and the settings loader can be used (and tested) without the
CLI. The CLI translates them into `triangels.cli.errors` exceptions carrying
an exit code.

Every exception exposes an ``exit_code`` so callers outside Click can map
failures consistently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from triangels.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class TriangelsError(Exception):
    """Base class for all TriAngels core errors.

    Args:
        message (str): Human-readable reason.
        path (Path | None): File the error relates to, if any.
    """

    exit_code: ExitCode = ExitCode.FAILURE

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class TargetNotFoundError(TriangelsError):
    """Target file does not exist and creating it was not allowed."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TargetPermissionError(TriangelsError):
    """Target file (or its directory) cannot be read, written or created."""

    exit_code = ExitCode.PERMISSION_DENIED


class TargetIOError(TriangelsError):
    """Any other read/write failure on a target file."""

    exit_code = ExitCode.IO_ERROR


class MalformedMarkerSpanError(TriangelsError):
    """Marker lines in a target file are unbalanced or nested.

    Args:
        message (str): Human-readable reason.
        path (Path | None): File the error relates to, if any.
        lines (Sequence[int]): 1-based line numbers of the offending markers.
    """

    exit_code = ExitCode.MALFORMED_MARKERS

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        lines: Sequence[int] = (),
    ) -> None:
        super().__init__(message, path=path)
        self.lines: tuple[int, ...] = tuple(lines)


class DependencyMissingError(TriangelsError):
    """A required external tool is not available."""

    exit_code = ExitCode.DEPENDENCY_MISSING


class InstallError(TriangelsError):
    """An installation step ran but did not produce the expected result."""

    exit_code = ExitCode.DEPENDENCY_MISSING


class UnsupportedPlatformError(TriangelsError):
    """The host OS or CPU architecture is not supported."""

    exit_code = ExitCode.UNSUPPORTED_PLATFORM


class SettingsError(TriangelsError):
    """A settings file could not be read or parsed."""

    exit_code = ExitCode.CONFIG_ERROR
