# topmark:header:start
#
#   project      : TriAngels
#   file         : loader.py
#   file_relpath : src/triangels/config/loader.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Load TOML settings sources.

Sources, lowest precedence first:

1. the bundled ``triangels-default.toml`` package resource;
2. the user file ``~/.config/triangels/config.toml`` (if it exists);
3. an explicit file passed by the caller (``--config``), which must exist;
4. the ``TRIANGELS_AUTO_APPLY`` environment variable.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
Values of the wrong type are logged and ignored rather than failing the run.
"""

from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from triangels.config.keys import Toml
from triangels.config.logging import get_logger
from triangels.config.model import MutableSettings
from triangels.constants import (
    AUTO_APPLY_ENV,
    DEFAULT_TOML_CONFIG_NAME,
    DEFAULT_TOML_CONFIG_PACKAGE,
    USER_CONFIG_RELPATH,
)
from triangels.core.errors import SettingsError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from triangels.config.logging import TriangelsLogger

TomlTable = dict[str, Any]

logger: TriangelsLogger = get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_toml_text(text: str, source: str) -> TomlTable:
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise SettingsError(f"invalid TOML in {source}: {exc}") from exc
    data: Any = doc.unwrap()
    return cast("TomlTable", data) if isinstance(data, dict) else {}


def load_default_toml_text() -> str:
    """Return the bundled default settings template as text."""
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    return resource.read_text(encoding="utf-8")


def load_toml_dict(path: Path) -> TomlTable:
    """Read and parse a TOML settings file.

    Args:
        path (Path): The file to read.

    Returns:
        TomlTable: The parsed document as plain Python values.

    Raises:
        SettingsError: If the file cannot be read or is not valid TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"cannot read settings file: {exc.strerror or exc}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise SettingsError(f"settings file is not valid UTF-8: {exc.reason}", path=path) from exc
    return _parse_toml_text(text, str(path))


def _get_table(data: Mapping[str, Any], section: str) -> Mapping[str, Any]:
    value = data.get(section, {})
    if not isinstance(value, dict):
        logger.warning("Ignoring [%s]: expected a table, got %s", section, type(value).__name__)
        return {}
    return cast("Mapping[str, Any]", value)


def _get_str(table: Mapping[str, Any], key: str) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Ignoring %s = %r: expected a string", key, value)
    return None


def _get_bool(table: Mapping[str, Any], key: str) -> bool | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("Ignoring %s = %r: expected a boolean", key, value)
    return None


def settings_from_toml_dict(data: Mapping[str, Any], *, source: str) -> MutableSettings:
    """Build a `MutableSettings` layer from a parsed TOML mapping.

    Args:
        data (Mapping[str, Any]): Parsed TOML document.
        source (str): Where the data came from (path or resource name).

    Returns:
        MutableSettings: The layer; keys absent from ``data`` stay unset.
    """
    install = _get_table(data, Toml.SECTION_INSTALL)
    prompt = _get_table(data, Toml.SECTION_PROMPT)
    shells = _get_table(data, Toml.SECTION_SHELLS)
    apply = _get_table(data, Toml.SECTION_APPLY)

    return MutableSettings(
        bin_dir=_get_str(install, Toml.KEY_BIN_DIR),
        starship_config=_get_str(prompt, Toml.KEY_CONFIG_PATH),
        host_color=_get_str(prompt, Toml.KEY_HOST_COLOR),
        user_color=_get_str(prompt, Toml.KEY_USER_COLOR),
        root_color=_get_str(prompt, Toml.KEY_ROOT_COLOR),
        bashrc=_get_str(shells, Toml.KEY_BASHRC),
        zshrc=_get_str(shells, Toml.KEY_ZSHRC),
        auto_apply=_get_bool(apply, Toml.KEY_AUTO_APPLY),
        config_files=[source],
    )


def env_auto_apply(environ: Mapping[str, str] | None = None) -> bool | None:
    """Return the auto-apply override from the environment, or None if unset."""
    env = os.environ if environ is None else environ
    raw = env.get(AUTO_APPLY_ENV)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip().lower() in _TRUE_VALUES


def load_settings(
    config_path: Path | None = None,
    *,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> MutableSettings:
    """Merge all settings layers into one builder.

    Args:
        config_path (Path | None): Explicit settings file; must exist when given.
        home (Path | None): Home directory used to find the user settings file.
        environ (Mapping[str, str] | None): Environment; defaults to ``os.environ``.

    Returns:
        MutableSettings: The merged builder, ready for CLI overrides and `freeze`.

    Raises:
        SettingsError: If a settings file is unreadable or invalid.
    """
    home = home or Path.home()

    draft = settings_from_toml_dict(
        _parse_toml_text(load_default_toml_text(), DEFAULT_TOML_CONFIG_NAME),
        source=f"<package>/{DEFAULT_TOML_CONFIG_NAME}",
    )

    user_file = home / USER_CONFIG_RELPATH
    if user_file.is_file():
        logger.debug("Loading user settings: %s", user_file)
        draft = draft.merge_with(
            settings_from_toml_dict(load_toml_dict(user_file), source=str(user_file))
        )

    if config_path is not None:
        if not config_path.is_file():
            raise SettingsError("settings file does not exist", path=config_path)
        logger.debug("Loading explicit settings: %s", config_path)
        draft = draft.merge_with(
            settings_from_toml_dict(load_toml_dict(config_path), source=str(config_path))
        )

    auto_apply = env_auto_apply(environ)
    if auto_apply is not None:
        draft = draft.merge_with(MutableSettings(auto_apply=auto_apply))

    return draft
