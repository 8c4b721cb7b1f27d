# topmark:header:start
#
#   project      : TriAngels
#   file         : prompt.py
#   file_relpath : src/triangels/cli/commands/prompt.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``prompt`` command.

Renders the TriAngels Starship profile for this host and writes it to the
configured ``starship.toml`` (backing up any existing file), or prints it.
"""

from __future__ import annotations

import click

from triangels.cli.cmd_common import get_console, get_facts, get_now, get_settings
from triangels.cli.errors import reraise_core_errors
from triangels.cli.options import CONTEXT_SETTINGS, shell_option
from triangels.prompt.starship import render_starship_config, write_starship_config
from triangels.utils.file import home_relative


@click.command(
    name="prompt",
    help="Write the TriAngels Starship profile (starship.toml).",
    context_settings=CONTEXT_SETTINGS,
)
@shell_option
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the profile instead of writing it.",
)
def prompt_command(*, shell: str | None, to_stdout: bool) -> None:
    """Render the Starship profile.

    Args:
        shell (str | None): Override for the detected shell (informational only).
        to_stdout (bool): Print instead of writing the file.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    facts = get_facts(ctx, shell=shell)
    settings = get_settings(ctx)

    text = render_starship_config(facts, settings.prompt)
    if to_stdout:
        console.print(text, nl=False)
        return

    with reraise_core_errors():
        backup = write_starship_config(settings.starship_config, text, now=get_now(ctx))
    console.ok(f"Starship config written: {home_relative(settings.starship_config, settings.home)}")
    if backup is not None:
        console.info(f"Backup: {home_relative(backup, settings.home)}")
