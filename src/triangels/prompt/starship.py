# topmark:header:start
#
#   project      : TriAngels
#   file         : starship.py
#   file_relpath : src/triangels/prompt/starship.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Render and write the TriAngels Starship profile.

The profile is built as a `tomlkit` document so that the header comments
survive and values are quoted correctly. Only a handful of style parameters
vary: the host colour (per OS) and the user colour (per root status), both of
which can be overridden through `triangels.config.PromptStyle`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import tomlkit

from triangels.blocks.backup import snapshot
from triangels.config.logging import get_logger
from triangels.constants import APP_VERSION
from triangels.utils.file import atomic_write_text, translate_os_errors

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from triangels.config.model import PromptStyle
    from triangels.host.detect import HostFacts

logger = get_logger(__name__)

MACOS_HOST_COLOR = "blue"
DEFAULT_HOST_COLOR = "green"
DEFAULT_USER_COLOR = "bold cyan"

_RULE = "=" * 36


@dataclass(frozen=True)
class PromptColors:
    """Colours resolved for one host."""

    host: str
    user: str
    root: str


def resolve_colors(facts: HostFacts, style: PromptStyle) -> PromptColors:
    """Pick the profile colours for ``facts``, honouring ``style`` overrides."""
    host = style.host_color or (MACOS_HOST_COLOR if facts.is_macos else DEFAULT_HOST_COLOR)
    user = style.root_color if facts.is_root else (style.user_color or DEFAULT_USER_COLOR)
    return PromptColors(host=host, user=user, root=style.root_color)


def _table(**values: object) -> tomlkit.items.Table:
    table = tomlkit.table()
    for key, value in values.items():
        table.add(key, value)
    return table


def build_starship_document(
    facts: HostFacts,
    style: PromptStyle,
    *,
    version: str = APP_VERSION,
) -> tomlkit.TOMLDocument:
    """Build the Starship profile document.

    Args:
        facts (HostFacts): Host facts (OS and root status drive colours).
        style (PromptStyle): User colour overrides.
        version (str): Version written in the header comment.

    Returns:
        tomlkit.TOMLDocument: The profile, ready for ``tomlkit.dumps``.
    """
    colors = resolve_colors(facts, style)

    doc = tomlkit.document()
    doc.add(tomlkit.comment(_RULE))
    doc.add(tomlkit.comment(f"TriAngels Universal Profile ({version})"))
    doc.add(tomlkit.comment(_RULE))
    doc.add(tomlkit.nl())

    doc.add("os", _table(disabled=False, style="bold white"))
    doc.add(
        "username",
        _table(
            show_always=True,
            style_user=colors.user,
            style_root=colors.root,
            format="[$user]($style) ",
        ),
    )
    doc.add(
        "hostname",
        _table(ssh_only=False, style=f"bold {colors.host}", format="🖥 [$hostname]($style) "),
    )
    doc.add(
        "localip",
        _table(
            disabled=False,
            ssh_only=False,
            format="🌍 [$localipv4]($style) ",
            style="bright-white",
        ),
    )
    doc.add("directory", _table(style="bright-white"))
    doc.add(
        "docker_context",
        _table(symbol="🐳 ", style="bold yellow", format="via [$symbol$context]($style) "),
    )
    doc.add(
        "character",
        _table(success_symbol="[➜](bold green)", error_symbol="[➜](bold red)"),
    )
    return doc


def render_starship_config(
    facts: HostFacts,
    style: PromptStyle,
    *,
    version: str = APP_VERSION,
) -> str:
    """Return the Starship profile as TOML text."""
    return tomlkit.dumps(build_starship_document(facts, style, version=version))


def write_starship_config(path: Path, text: str, *, now: datetime | None = None) -> Path | None:
    """Write ``text`` to ``path``, backing up any existing file first.

    Args:
        path (Path): Destination (parent directories are created).
        text (str): Rendered profile.
        now (datetime | None): Timestamp for the backup name.

    Returns:
        Path | None: The backup of the previous file, if there was one.
    """
    with translate_os_errors(path):
        path.parent.mkdir(parents=True, exist_ok=True)
    backup = snapshot(path, now=now)
    atomic_write_text(path, text)
    logger.info("Starship config written: %s", path)
    return backup


def remove_starship_config(path: Path, *, now: datetime | None = None) -> Path | None:
    """Delete the profile at ``path`` after backing it up.

    Returns:
        Path | None: The backup, or None when there was nothing to remove.
    """
    backup = snapshot(path, now=now)
    if backup is None:
        logger.debug("No Starship config at %s", path)
        return None
    with translate_os_errors(path):
        path.unlink()
    logger.info("Starship config removed: %s (backup: %s)", path, backup)
    return backup
