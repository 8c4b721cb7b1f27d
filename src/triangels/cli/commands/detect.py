# topmark:header:start
#
#   project      : TriAngels
#   file         : detect.py
#   file_relpath : src/triangels/cli/commands/detect.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``detect`` command.

Prints what the installer would base its decisions on: operating system,
shell, user, architecture and the available tools.
"""

from __future__ import annotations

import click

from triangels.cli.cmd_common import get_console, get_facts, get_settings, get_which
from triangels.cli.options import CONTEXT_SETTINGS
from triangels.constants import STARSHIP_BINARY
from triangels.host.packages import detect_package_manager
from triangels.shells import rc_path
from triangels.utils.file import home_relative


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


@click.command(
    name="detect",
    help="Show the detected host facts (OS, shell, user, tools).",
    context_settings=CONTEXT_SETTINGS,
)
def detect_command() -> None:
    """Print host facts as aligned ``key: value`` lines."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    facts = get_facts(ctx)
    settings = get_settings(ctx)
    which = get_which(ctx)

    pm = detect_package_manager(which)
    starship = which(STARSHIP_BINARY)
    home = settings.home

    rows: list[tuple[str, str]] = [
        ("os", f"{facts.os_kind.value} ({facts.os_name})"),
        ("wsl", _yes_no(facts.is_wsl)),
        ("arch", facts.arch),
        ("user", facts.user),
        ("root", _yes_no(facts.is_root)),
        ("ssh", _yes_no(facts.is_ssh)),
        ("shell", facts.shell.value),
        ("rc file", home_relative(rc_path(facts.shell, settings), home)),
        ("package manager", pm.name if pm is not None else "none"),
        ("starship", starship or "not installed"),
        ("bin dir", home_relative(settings.bin_dir, home)),
        ("starship config", home_relative(settings.starship_config, home)),
    ]
    width = max(len(key) for key, _ in rows)
    for key, value in rows:
        console.print(f"{console.styled(key.ljust(width), bold=True)} : {value}")
