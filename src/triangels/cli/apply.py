# topmark:header:start
#
#   project      : TriAngels
#   file         : apply.py
#   file_relpath : src/triangels/cli/apply.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Applying the new rc block to the running terminal.

The installer cannot change its parent shell. Auto-apply therefore replaces
the current process with a fresh interactive login shell, which reads the
updated rc file. It only happens on an interactive terminal.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Callable, Sequence

from triangels.config.logging import get_logger
from triangels.constants import AUTO_APPLY_ENV

if TYPE_CHECKING:
    from triangels.cli.console import ConsoleLike
    from triangels.host.detect import HostFacts, ShellKind

logger = get_logger(__name__)

Exec = Callable[[str, Sequence[str]], None]


def apply_command(shell: ShellKind) -> str:
    """Return the command a user pastes to load the block, e.g. ``source ~/.zshrc``."""
    return f"source ~/{shell.rc_name}"


def is_interactive() -> bool:
    """Return True when both stdin and stdout are terminals."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def maybe_auto_apply(
    facts: HostFacts,
    enabled: bool,
    console: ConsoleLike,
    *,
    interactive: bool | None = None,
    execvp: Exec = os.execvp,
) -> bool:
    """Replace the process with a login shell when auto-apply is requested.

    Args:
        facts (HostFacts): Host facts (the shell to start).
        enabled (bool): Whether auto-apply was requested.
        console (ConsoleLike): Output for the skip warning and progress.
        interactive (bool | None): TTY state; detected when None.
        execvp (Exec): Process replacement; does not return on success.

    Returns:
        bool: False when auto-apply was skipped. On success the process is
        replaced and nothing is returned.
    """
    if not enabled:
        return False
    if interactive is None:
        interactive = is_interactive()
    if not interactive:
        console.warn(
            f"{AUTO_APPLY_ENV}=1 set, but no interactive TTY detected. Skipping auto-apply."
        )
        return False

    shell = facts.shell.value
    console.info(f"Auto-apply enabled. Starting a new {shell} login shell...")
    logger.info("exec %s -l", shell)
    sys.stdout.flush()
    sys.stderr.flush()
    execvp(shell, [shell, "-l"])
    return True
