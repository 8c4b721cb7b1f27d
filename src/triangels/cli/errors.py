# topmark:header:start
#
#   project      : TriAngels
#   file         : errors.py
#   file_relpath : src/triangels/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Exceptions for the TriAngels CLI.

Usage:
    Commands wrap core calls in `reraise_core_errors`, which turns
    `triangels.core.errors.TriangelsError` into the matching exception below.
    Click then prints the message and exits with the exception's exit code.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from triangels.core.errors import (
    DependencyMissingError,
    InstallError,
    MalformedMarkerSpanError,
    SettingsError,
    TargetIOError,
    TargetNotFoundError,
    TargetPermissionError,
    TriangelsError,
    UnsupportedPlatformError,
)
from triangels.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Iterator


class TriangelsCliError(click.ClickException):
    """Base class for all TriAngels CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colour is applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class TriangelsUsageError(TriangelsCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TriangelsConfigError(TriangelsCliError):
    """Error for settings errors (missing/invalid/malformed settings file)."""

    exit_code = ExitCode.CONFIG_ERROR


class TriangelsFileNotFoundError(TriangelsCliError):
    """Error when a target file does not exist and may not be created."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TriangelsPermissionDeniedError(TriangelsCliError):
    """Error for insufficient permissions (read/write/create)."""

    exit_code = ExitCode.PERMISSION_DENIED


class TriangelsIOError(TriangelsCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class TriangelsMalformedMarkersError(TriangelsCliError):
    """Error for unbalanced or nested marker lines in a target file."""

    exit_code = ExitCode.MALFORMED_MARKERS


class TriangelsDependencyError(TriangelsCliError):
    """Error for missing external tools or failed installations."""

    exit_code = ExitCode.DEPENDENCY_MISSING


class TriangelsPlatformError(TriangelsCliError):
    """Error for unsupported operating systems or CPU architectures."""

    exit_code = ExitCode.UNSUPPORTED_PLATFORM


class TriangelsUnexpectedError(TriangelsCliError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


_CORE_TO_CLI: tuple[tuple[type[TriangelsError], type[TriangelsCliError]], ...] = (
    (TargetNotFoundError, TriangelsFileNotFoundError),
    (TargetPermissionError, TriangelsPermissionDeniedError),
    (TargetIOError, TriangelsIOError),
    (MalformedMarkerSpanError, TriangelsMalformedMarkersError),
    (DependencyMissingError, TriangelsDependencyError),
    (InstallError, TriangelsDependencyError),
    (UnsupportedPlatformError, TriangelsPlatformError),
    (SettingsError, TriangelsConfigError),
)


def from_core(exc: TriangelsError) -> TriangelsCliError:
    """Return the CLI exception matching a core exception.

    Args:
        exc (TriangelsError): The core error.

    Returns:
        TriangelsCliError: An exception whose message names the path and reason.
    """
    for core_cls, cli_cls in _CORE_TO_CLI:
        if isinstance(exc, core_cls):
            return cli_cls(str(exc))
    return TriangelsUnexpectedError(str(exc))


@contextmanager
def reraise_core_errors() -> Iterator[None]:
    """Convert core exceptions raised inside the block into CLI exceptions."""
    try:
        yield
    except TriangelsError as exc:
        raise from_core(exc) from exc
