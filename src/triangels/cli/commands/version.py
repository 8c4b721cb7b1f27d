# topmark:header:start
#
#   project      : TriAngels
#   file         : version.py
#   file_relpath : src/triangels/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels `version` command.

Prints the current TriAngels version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from triangels.cli.cmd_common import get_console, get_effective_verbosity
from triangels.cli.options import CONTEXT_SETTINGS
from triangels.constants import APP_NAME, TRIANGELS_VERSION


@click.command(
    name="version",
    help="Show the current version of TriAngels.",
    context_settings=CONTEXT_SETTINGS,
)
def version_command() -> None:
    """Show the current version of TriAngels.

    Prints the bare version; with ``-v`` the application name is included.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    if get_effective_verbosity(ctx) > 0:
        console.print(f"{APP_NAME} v{TRIANGELS_VERSION}")
    else:
        console.print(TRIANGELS_VERSION)
