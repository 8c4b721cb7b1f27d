# topmark:header:start
#
#   project      : TriAngels
#   file         : main.py
#   file_relpath : src/triangels/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Click entry point for the ``triangels`` command.

Key ideas:
- Group-level options are initialized once, placed into ``ctx.obj``.
- Values already present in ``ctx.obj`` (tests pass ``obj={...}``) are kept,
  so host probes and external commands can be replaced.
- Subcommands read that shared state through `triangels.cli.cmd_common`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from triangels.cli.commands.attach import attach_command
from triangels.cli.commands.detect import detect_command
from triangels.cli.commands.dump_config import dump_config_command
from triangels.cli.commands.install import install_command
from triangels.cli.commands.prompt import prompt_command
from triangels.cli.commands.remove import remove_command
from triangels.cli.commands.version import version_command
from triangels.cli.console import ClickConsole

# --- We use a module import here instead of relative import
from triangels.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    config_option,
    resolve_color_mode,
    resolve_verbosity,
)
from triangels.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from pathlib import Path

    from triangels.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Initialize shared state (verbosity, color, settings file) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_path (Path | None): Explicit settings file from ``--config``.
    """
    ctx.obj = ctx.obj or {}

    # Configure program-output verbosity:
    level_cli = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # Configure internal logging via env:
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (
        ColorMode(color_mode) if color_mode else ColorMode.AUTO
    )
    enable_color = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["config_path"] = config_path
    ctx.obj.setdefault("console", ClickConsole(enable_color=enable_color, quiet=level_cli < 0))


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,  # Always invoke the cli() function
    help="TriAngels universal terminal setup (Starship prompt for bash and zsh).",
)
@config_option
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the TriAngels CLI."""
    # Initialize verbosity and color state once for all subcommands
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_path=config_path,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'triangels install' to set up Starship for your shell.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(install_command)

cli.add_command(attach_command)

cli.add_command(remove_command)

cli.add_command(prompt_command)

cli.add_command(detect_command)

cli.add_command(dump_config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
