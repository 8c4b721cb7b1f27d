# topmark:header:start
#
#   project      : TriAngels
#   file         : shells.py
#   file_relpath : src/triangels/shells.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Shell startup-file wiring.

Renders the payload that goes inside the marker block and decides which rc
files receive it:

- the detected shell's rc file is always attached (and created if missing);
- the other supported shell's rc file is attached only if it already exists.

Files are processed one after another; the first failure aborts the run.
Callers that pass ``on_result`` see every finished file before that happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from triangels.config.logging import get_logger
from triangels.host.detect import ShellKind
from triangels.utils.file import home_relative

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from triangels.blocks.editor import EditResult, MarkerBlockEditor
    from triangels.config.model import Settings

logger = get_logger(__name__)


def render_init_lines(shell: ShellKind, bin_dir: Path | None, home: Path) -> list[str]:
    """Return the block payload for ``shell``.

    Args:
        shell (ShellKind): Shell the statements are written for.
        bin_dir (Path | None): Directory to prepend to ``PATH``; None skips the export.
        home (Path): Home directory; paths below it are written as ``$HOME/...``.

    Returns:
        list[str]: Payload lines, without markers or metadata.
    """
    lines: list[str] = []
    if bin_dir is not None:
        lines.append("# Ensure Starship is in PATH")
        lines.append(f'export PATH="{home_relative(bin_dir, home)}:$PATH"')
    lines.append(f'eval "$(starship init {shell.value})"')
    return lines


def rc_path(shell: ShellKind, settings: Settings) -> Path:
    """Return the configured startup file for ``shell``."""
    return settings.bashrc if shell is ShellKind.BASH else settings.zshrc


@dataclass(frozen=True)
class ShellTarget:
    """One rc file to attach, with the shell it belongs to."""

    shell: ShellKind
    path: Path
    create_if_missing: bool


def plan_targets(current: ShellKind, settings: Settings) -> list[ShellTarget]:
    """Return the rc files to attach, current shell first.

    Other shells are only included when their rc file already exists.
    """
    targets = [ShellTarget(current, rc_path(current, settings), create_if_missing=True)]
    for shell in ShellKind:
        if shell is current:
            continue
        path = rc_path(shell, settings)
        if path.is_file():
            targets.append(ShellTarget(shell, path, create_if_missing=False))
        else:
            logger.debug("Skipping %s: %s does not exist", shell.value, path)
    return targets


def attach_to_shells(
    current: ShellKind,
    settings: Settings,
    editor: MarkerBlockEditor,
    *,
    on_result: Callable[[EditResult], None] | None = None,
) -> list[EditResult]:
    """Install the managed block in every planned rc file.

    Args:
        current (ShellKind): The user's shell.
        settings (Settings): Runtime settings (rc paths, bin dir, home).
        editor (MarkerBlockEditor): Editor applying the blocks.
        on_result (Callable[[EditResult], None] | None): Called after each file,
            before the next one is touched.

    Returns:
        list[EditResult]: One result per attached file, in processing order.
    """
    results: list[EditResult] = []
    for target in plan_targets(current, settings):
        lines = render_init_lines(target.shell, settings.bin_dir, settings.home)
        result = editor.apply(target.path, lines, create_if_missing=target.create_if_missing)
        results.append(result)
        if on_result is not None:
            on_result(result)
    return results


def detach_from_shells(
    settings: Settings,
    editor: MarkerBlockEditor,
    *,
    on_result: Callable[[EditResult], None] | None = None,
) -> list[EditResult]:
    """Remove the managed block from every supported shell's rc file.

    ``on_result`` is called after each file, so edits that completed before a
    later failure are still reported.
    """
    results: list[EditResult] = []
    for shell in ShellKind:
        result = editor.remove(rc_path(shell, settings))
        results.append(result)
        if on_result is not None:
            on_result(result)
    return results
