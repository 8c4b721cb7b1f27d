# topmark:header:start
#
#   project      : TriAngels
#   file         : model.py
#   file_relpath : src/triangels/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Settings model and merge policy.

This module defines:
    - `Settings`: an immutable runtime snapshot passed to every collaborator.
    - `MutableSettings`: a mutable builder used while layering sources; it
      is frozen into `Settings` once all layers are merged.

Scope:
    - *In scope*: data shapes, field-level defaults, merge policy
      (`MutableSettings.merge_with`) and freezing.
    - *Out of scope*: TOML I/O, which lives in `triangels.config.loader`.

Path semantics:
    Paths are stored raw in the builder and expanded on `MutableSettings.freeze`:
    a leading ``~`` and relative paths are resolved against the given home
    directory, so tests can freeze against a temporary home.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from triangels.config.keys import Toml
from triangels.config.logging import get_logger

if TYPE_CHECKING:
    from triangels.config.logging import TriangelsLogger

logger: TriangelsLogger = get_logger(__name__)

DEFAULT_BIN_DIR = "~/.local/bin"
DEFAULT_STARSHIP_CONFIG = "~/.config/starship.toml"
DEFAULT_BASHRC = "~/.bashrc"
DEFAULT_ZSHRC = "~/.zshrc"
DEFAULT_ROOT_COLOR = "bold red"


@dataclass(frozen=True)
class PromptStyle:
    """Colours used by the generated Starship profile.

    Attributes:
        host_color (str | None): Host name colour; None picks one per OS.
        user_color (str | None): User name colour for regular users; None picks
            the default.
        root_color (str): User name colour for root.
    """

    host_color: str | None = None
    user_color: str | None = None
    root_color: str = DEFAULT_ROOT_COLOR


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings for TriAngels.

    Attributes:
        home (Path): Home directory all relative paths were resolved against.
        bin_dir (Path): Directory receiving the starship binary.
        starship_config (Path): Generated ``starship.toml``.
        bashrc (Path): Bash startup file.
        zshrc (Path): Zsh startup file.
        prompt (PromptStyle): Prompt colours.
        auto_apply (bool): Whether to exec a fresh shell after setup.
        config_files (tuple[str, ...]): Settings sources in merge order.
    """

    home: Path
    bin_dir: Path
    starship_config: Path
    bashrc: Path
    zshrc: Path
    prompt: PromptStyle
    auto_apply: bool
    config_files: tuple[str, ...] = ()

    def to_toml_dict(self) -> dict[str, Any]:
        """Return the settings as a TOML-serializable mapping."""
        prompt: dict[str, Any] = {
            Toml.KEY_CONFIG_PATH: str(self.starship_config),
            Toml.KEY_ROOT_COLOR: self.prompt.root_color,
        }
        if self.prompt.host_color is not None:
            prompt[Toml.KEY_HOST_COLOR] = self.prompt.host_color
        if self.prompt.user_color is not None:
            prompt[Toml.KEY_USER_COLOR] = self.prompt.user_color
        return {
            Toml.SECTION_INSTALL: {Toml.KEY_BIN_DIR: str(self.bin_dir)},
            Toml.SECTION_PROMPT: prompt,
            Toml.SECTION_SHELLS: {
                Toml.KEY_BASHRC: str(self.bashrc),
                Toml.KEY_ZSHRC: str(self.zshrc),
            },
            Toml.SECTION_APPLY: {Toml.KEY_AUTO_APPLY: self.auto_apply},
        }


def expand_path(raw: str, home: Path) -> Path:
    """Expand ``~`` and anchor relative paths at ``home``.

    Args:
        raw (str): Path as written in a settings source.
        home (Path): Home directory to expand against.

    Returns:
        Path: Absolute path.
    """
    if raw == "~":
        return home
    if raw.startswith("~/"):
        return home / raw[2:]
    path = Path(raw)
    if path.is_absolute():
        return path
    return home / path


@dataclass
class MutableSettings:
    """Mutable settings builder used while layering sources.

    ``None`` means "not set by this layer"; `merge_with` lets set values of the
    later layer win, and `freeze` fills remaining gaps with built-in defaults.
    """

    bin_dir: str | None = None
    starship_config: str | None = None
    bashrc: str | None = None
    zshrc: str | None = None
    host_color: str | None = None
    user_color: str | None = None
    root_color: str | None = None
    auto_apply: bool | None = None
    config_files: list[str] = field(default_factory=lambda: [])

    def merge_with(self, other: MutableSettings) -> MutableSettings:
        """Return a new builder where values set in ``other`` override ours.

        Args:
            other (MutableSettings): Higher-precedence layer.

        Returns:
            MutableSettings: The merged builder.
        """
        merged = replace(self, config_files=[*self.config_files, *other.config_files])
        for name in (
            "bin_dir",
            "starship_config",
            "bashrc",
            "zshrc",
            "host_color",
            "user_color",
            "root_color",
            "auto_apply",
        ):
            value = getattr(other, name)
            if value is not None:
                setattr(merged, name, value)
        return merged

    def freeze(self, home: Path | None = None) -> Settings:
        """Freeze this builder into an immutable `Settings`.

        Args:
            home (Path | None): Home directory for path expansion; defaults to
                ``Path.home()``.

        Returns:
            Settings: The runtime snapshot.
        """
        home = home or Path.home()
        settings = Settings(
            home=home,
            bin_dir=expand_path(self.bin_dir or DEFAULT_BIN_DIR, home),
            starship_config=expand_path(self.starship_config or DEFAULT_STARSHIP_CONFIG, home),
            bashrc=expand_path(self.bashrc or DEFAULT_BASHRC, home),
            zshrc=expand_path(self.zshrc or DEFAULT_ZSHRC, home),
            prompt=PromptStyle(
                host_color=self.host_color,
                user_color=self.user_color,
                root_color=self.root_color or DEFAULT_ROOT_COLOR,
            ),
            auto_apply=bool(self.auto_apply),
            config_files=tuple(self.config_files),
        )
        logger.debug("Frozen settings: %s", settings)
        return settings
