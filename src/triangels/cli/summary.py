# topmark:header:start
#
#   project      : TriAngels
#   file         : summary.py
#   file_relpath : src/triangels/cli/summary.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Final report printed by ``triangels install``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from triangels.cli.apply import apply_command
from triangels.constants import APP_NAME, APP_VERSION, AUTO_APPLY_ENV
from triangels.utils.file import home_relative

if TYPE_CHECKING:
    from triangels.cli.console import ConsoleLike
    from triangels.config.model import Settings
    from triangels.host.detect import HostFacts

_RULE = "=" * 38


def render_summary(facts: HostFacts, settings: Settings) -> list[str]:
    """Return the summary lines (without styling).

    Args:
        facts (HostFacts): Detected host facts.
        settings (Settings): Runtime settings (config paths).

    Returns:
        list[str]: Lines to print, in order.
    """
    home = settings.home
    return [
        "",
        _RULE,
        f"  {APP_NAME} {APP_VERSION}",
        _RULE,
        f"Detected OS: {facts.os_kind.value}" + (" (WSL)" if facts.is_wsl else ""),
        f"User: {facts.user} (root={str(facts.is_root).lower()})",
        f"SSH session: {str(facts.is_ssh).lower()}",
        "",
        "Apply now (copy one line):",
        f"  {apply_command(facts.shell)}",
        "Optional auto-apply (interactive only):",
        f"  {AUTO_APPLY_ENV}=1 triangels install",
        "",
        "Config files:",
        f"  • Starship config: {home_relative(settings.starship_config, home)}",
        f"  • bash: {home_relative(settings.bashrc, home)}",
        f"  • zsh: {home_relative(settings.zshrc, home)}",
        "",
        "Uninstall / rollback:",
        "  • Remove the TriAngels block from rc files: triangels remove",
        "  • Also remove the Starship config:         triangels remove --prompt",
        "",
    ]


def print_summary(console: ConsoleLike, facts: HostFacts, settings: Settings) -> None:
    """Print the summary through ``console``."""
    for line in render_summary(facts, settings):
        console.print(line)
