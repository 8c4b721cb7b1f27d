# topmark:header:start
#
#   project      : TriAngels
#   file         : attach.py
#   file_relpath : src/triangels/cli/commands/attach.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``attach`` command.

Writes (or refreshes) the managed Starship block in the shell rc files without
touching the binary or the prompt profile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from triangels.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_facts,
    get_settings,
    make_editor,
    report_edit,
)
from triangels.cli.errors import reraise_core_errors
from triangels.cli.options import CONTEXT_SETTINGS, bin_dir_option, shell_option
from triangels.shells import attach_to_shells

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="attach",
    help="Attach the TriAngels block to ~/.bashrc and/or ~/.zshrc.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
The current shell's rc file is created if needed; the other shell's rc file
is only updated when it already exists.
""",
)
@bin_dir_option
@shell_option
def attach_command(*, bin_dir: Path | None, shell: str | None) -> None:
    """Attach the managed block to the shell rc files."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    facts = get_facts(ctx, shell=shell)
    settings = get_settings(ctx, bin_dir=bin_dir)

    with reraise_core_errors():
        attach_to_shells(
            facts.shell,
            settings,
            make_editor(ctx),
            on_result=lambda result: report_edit(
                console, result, home=settings.home, verbosity=vlevel
            ),
        )
