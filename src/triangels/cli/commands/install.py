# topmark:header:start
#
#   project      : TriAngels
#   file         : install.py
#   file_relpath : src/triangels/cli/commands/install.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels ``install`` command.

Runs the full setup: install Starship, write the prompt profile, attach the
managed block to the shell rc files, print a summary and optionally start a
fresh login shell.

Examples:
  Full setup:

    $ triangels install

  Only (re)attach rc files and rewrite the profile:

    $ triangels install --skip-starship

  Apply immediately in an interactive terminal:

    $ TRIANGELS_AUTO_APPLY=1 triangels install
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from triangels.cli.apply import maybe_auto_apply
from triangels.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_execvp,
    get_facts,
    get_now,
    get_obj,
    get_runner,
    get_settings,
    get_which,
    make_editor,
    report_edit,
)
from triangels.cli.errors import reraise_core_errors
from triangels.cli.options import CONTEXT_SETTINGS, bin_dir_option, shell_option
from triangels.cli.summary import print_summary
from triangels.config.logging import get_logger
from triangels.constants import APP_NAME, APP_VERSION
from triangels.host.starship import StarshipStatus, ensure_starship
from triangels.prompt.starship import render_starship_config, write_starship_config
from triangels.shells import attach_to_shells
from triangels.utils.file import home_relative

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)


@click.command(
    name="install",
    help="Install Starship, write the prompt profile and attach shell rc files.",
    context_settings=CONTEXT_SETTINGS,
)
@bin_dir_option
@shell_option
@click.option(
    "--skip-starship",
    "skip_starship",
    is_flag=True,
    help="Do not check for or install the starship binary.",
)
@click.option(
    "--skip-prompt",
    "skip_prompt",
    is_flag=True,
    help="Do not (re)write the Starship profile.",
)
def install_command(
    *,
    bin_dir: Path | None,
    shell: str | None,
    skip_starship: bool,
    skip_prompt: bool,
) -> None:
    """Run the complete terminal setup.

    Args:
        bin_dir (Path | None): Override for the Starship install directory.
        shell (str | None): Override for the detected shell.
        skip_starship (bool): Skip the binary install step.
        skip_prompt (bool): Skip writing ``starship.toml``.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    facts = get_facts(ctx, shell=shell)
    settings = get_settings(ctx, bin_dir=bin_dir)
    home = settings.home

    if vlevel >= 0:
        console.print(console.styled(f"{APP_NAME} {APP_VERSION}", bold=True))

    with reraise_core_errors():
        if skip_starship:
            logger.info("Skipping Starship installation")
        else:
            console.info("Checking Starship...")
            status = ensure_starship(
                facts,
                settings.bin_dir,
                which=get_which(ctx),
                runner=get_runner(ctx),
                environ=get_obj(ctx).get("environ"),
            )
            if status is StarshipStatus.INSTALLED:
                console.ok(f"Starship installed into {home_relative(settings.bin_dir, home)}")
            else:
                console.ok("Starship already installed")

        if not skip_prompt:
            text = render_starship_config(facts, settings.prompt)
            backup = write_starship_config(settings.starship_config, text, now=get_now(ctx))
            console.ok(f"Starship config written: {home_relative(settings.starship_config, home)}")
            if backup is not None:
                console.info(f"Backup: {home_relative(backup, home)}")

        attach_to_shells(
            facts.shell,
            settings,
            make_editor(ctx),
            on_result=lambda result: report_edit(console, result, home=home, verbosity=vlevel),
        )

    if vlevel >= 0:
        print_summary(console, facts, settings)

    obj = get_obj(ctx)
    maybe_auto_apply(
        facts,
        settings.auto_apply,
        console,
        interactive=obj.get("interactive"),
        execvp=get_execvp(ctx),
    )
