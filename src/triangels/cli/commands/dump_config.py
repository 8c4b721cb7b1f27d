# topmark:header:start
#
#   project      : TriAngels
#   file         : dump_config.py
#   file_relpath : src/triangels/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``dump-config`` command.

Prints the effective settings (bundled defaults, user file, ``--config``
file, environment and ``--bin-dir``) as TOML, wrapped between
``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import tomlkit

from triangels.cli.cmd_common import get_console, get_settings
from triangels.cli.options import CONTEXT_SETTINGS, bin_dir_option

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="dump-config",
    help="Dump the effective TriAngels settings as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@bin_dir_option
def dump_config_command(*, bin_dir: Path | None) -> None:
    """Print the merged settings, preceded by the list of sources."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    settings = get_settings(ctx, bin_dir=bin_dir)

    doc = tomlkit.document()
    for source in settings.config_files:
        doc.add(tomlkit.comment(f"source: {source}"))
    doc.update(settings.to_toml_dict())

    console.print("# === BEGIN ===")
    console.print(tomlkit.dumps(doc), nl=False)
    console.print("# === END ===")
