# topmark:header:start
#
#   project      : TriAngels
#   file         : options.py
#   file_relpath : src/triangels/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, settings file) and
their resolution logic, so commands and the group can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from triangels.cli.errors import TriangelsUsageError
from triangels.host.detect import ShellKind

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS: dict[str, list[str]] = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v`` / ``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``-1`` for quiet, ``0`` for the default, ``1`` or more for verbose.

    Raises:
        TriangelsUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise TriangelsUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (show backups and skipped files).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print warnings and errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode: Explicit color mode from CLI options (auto, always, never).
        stdout_isatty: Whether stdout is a TTY; if None, auto-detected.

    Returns:
        True if color output should be enabled, False otherwise.

    Behavior:
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with color options added.
    """
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def config_option(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --config option (explicit settings file)."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Read settings from this TOML file (after ~/.config/triangels/config.toml).",
    )(f)


def bin_dir_option(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --bin-dir override."""
    return click.option(
        "--bin-dir",
        "bin_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory for the starship binary and the PATH export (default: ~/.local/bin).",
    )(f)


def shell_option(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --shell override for the detected shell."""
    return click.option(
        "--shell",
        "shell",
        type=click.Choice([s.value for s in ShellKind]),
        default=None,
        help="Treat this shell as the current one instead of detecting it.",
    )(f)
