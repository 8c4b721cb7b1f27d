# topmark:header:start
#
#   project      : TriAngels
#   file         : cmd_common.py
#   file_relpath : src/triangels/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands.
They intentionally avoid policy (which steps run, exit code rules) and only
encapsulate plumbing: reading shared state from ``ctx.obj``, resolving host
facts and settings, and reporting edit results.

Tests inject overrides through ``ctx.obj`` (``host``, ``home``, ``environ``,
``which``, ``runner``, ``clock``) so no command touches the real machine.
"""

from __future__ import annotations

import dataclasses
import os
import shutil
from typing import TYPE_CHECKING, Any

import click

from triangels.blocks.editor import EditStatus, MarkerBlockEditor
from triangels.blocks.markers import DEFAULT_MARKERS
from triangels.cli.errors import reraise_core_errors
from triangels.config.loader import load_settings
from triangels.config.logging import get_logger
from triangels.config.model import MutableSettings
from triangels.host.detect import HostFacts, ShellKind, detect_host
from triangels.host.packages import run_command
from triangels.utils.file import home_relative

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from triangels.blocks.editor import EditResult
    from triangels.cli.console import ConsoleLike
    from triangels.config.model import Settings

logger = get_logger(__name__)


def get_obj(ctx: click.Context) -> dict[str, Any]:
    """Return the shared state dict, creating it when missing."""
    ctx.ensure_object(dict)
    return ctx.obj


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console installed by the group callback."""
    return get_obj(ctx)["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (``-1`` quiet, ``0`` terse, ``>0`` verbose)."""
    return int(get_obj(ctx).get("verbosity_level", 0))


def get_facts(ctx: click.Context, *, shell: str | None = None) -> HostFacts:
    """Return host facts, detected once per invocation and cached on ``ctx.obj``.

    Args:
        ctx (click.Context): Current Click context.
        shell (str | None): Optional ``--shell`` override for the detected shell.

    Returns:
        HostFacts: The (possibly overridden) facts.
    """
    obj = get_obj(ctx)
    facts: HostFacts | None = obj.get("host")
    if facts is None:
        facts = detect_host(obj.get("environ"), home=obj.get("home"))
        obj["host"] = facts
    if shell is not None:
        facts = dataclasses.replace(facts, shell=ShellKind(shell))
    return facts


def get_settings(ctx: click.Context, *, bin_dir: Path | None = None) -> Settings:
    """Load and freeze the settings for this invocation.

    Layering: bundled defaults, user file, ``--config`` file, environment, and
    finally the command's own overrides.

    Args:
        ctx (click.Context): Current Click context.
        bin_dir (Path | None): ``--bin-dir`` override.

    Returns:
        Settings: The frozen runtime settings.
    """
    obj = get_obj(ctx)
    home = get_facts(ctx).home
    with reraise_core_errors():
        draft = load_settings(obj.get("config_path"), home=home, environ=obj.get("environ"))
    if bin_dir is not None:
        draft = draft.merge_with(MutableSettings(bin_dir=str(bin_dir)))
    return draft.freeze(home)


def get_which(ctx: click.Context) -> Any:
    """Return the executable lookup (``shutil.which`` unless overridden)."""
    return get_obj(ctx).get("which", shutil.which)


def get_runner(ctx: click.Context) -> Any:
    """Return the command runner (`run_command` unless overridden)."""
    return get_obj(ctx).get("runner", run_command)


def get_execvp(ctx: click.Context) -> Any:
    """Return the process-replacement call (`os.execvp` unless overridden)."""
    return get_obj(ctx).get("execvp", os.execvp)


def make_editor(ctx: click.Context) -> MarkerBlockEditor:
    """Return a marker-block editor using the TriAngels markers."""
    return MarkerBlockEditor(markers=DEFAULT_MARKERS, clock=get_obj(ctx).get("clock"))


def get_now(ctx: click.Context) -> datetime | None:
    """Return the injected clock's time, or None to let callers use the real clock."""
    clock = get_obj(ctx).get("clock")
    return clock() if clock is not None else None


_STATUS_MESSAGES: dict[EditStatus, str] = {
    EditStatus.CREATED: "Created {path} with the TriAngels block",
    EditStatus.INSERTED: "Attached TriAngels block to {path}",
    EditStatus.REPLACED: "Updated TriAngels block in {path}",
    EditStatus.REMOVED: "Removed TriAngels block from {path}",
    EditStatus.UNCHANGED: "No TriAngels block in {path}",
}


def report_edit(
    console: ConsoleLike,
    result: EditResult,
    *,
    home: Path,
    verbosity: int = 0,
) -> None:
    """Print one line per edit, plus the backup location when one was taken.

    Unchanged files are only reported at verbosity 1 and above.
    """
    shown = home_relative(result.path, home)
    message = _STATUS_MESSAGES[result.status].format(path=shown)
    if result.changed:
        console.ok(message)
    elif verbosity > 0:
        console.info(message)
    if result.backup is not None:
        console.info(f"Backup: {home_relative(result.backup, home)}")
