# topmark:header:start
#
#   project      : TriAngels
#   file         : remove.py
#   file_relpath : src/triangels/cli/commands/remove.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``remove`` command.

Removes the managed block from both rc files. Files that are missing or have
no block are left untouched; every edited file is backed up first.

Examples:
  Remove the rc blocks only:

    $ triangels remove

  Also delete ~/.config/starship.toml (a backup is kept):

    $ triangels remove --prompt
"""

from __future__ import annotations

import click

from triangels.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_now,
    get_settings,
    make_editor,
    report_edit,
)
from triangels.cli.errors import reraise_core_errors
from triangels.cli.options import CONTEXT_SETTINGS
from triangels.prompt.starship import remove_starship_config
from triangels.shells import detach_from_shells
from triangels.utils.file import home_relative


@click.command(
    name="remove",
    help="Remove the TriAngels block from shell rc files.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "--prompt",
    "remove_prompt",
    is_flag=True,
    help="Also delete the Starship profile (after backing it up).",
)
def remove_command(*, remove_prompt: bool) -> None:
    """Undo ``triangels install`` for the rc files (and optionally the profile).

    Args:
        remove_prompt (bool): Also delete ``starship.toml``.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    settings = get_settings(ctx)
    home = settings.home

    with reraise_core_errors():
        results = detach_from_shells(
            settings,
            make_editor(ctx),
            on_result=lambda result: report_edit(console, result, home=home, verbosity=vlevel),
        )

        if remove_prompt:
            backup = remove_starship_config(settings.starship_config, now=get_now(ctx))
            if backup is None:
                if vlevel > 0:
                    console.info(
                        f"No Starship config at {home_relative(settings.starship_config, home)}"
                    )
            else:
                console.ok(
                    f"Removed Starship config {home_relative(settings.starship_config, home)}"
                )
                console.info(f"Backup: {home_relative(backup, home)}")

    if not any(r.changed for r in results) and not remove_prompt:
        console.info("Nothing to remove.")
