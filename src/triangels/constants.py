# topmark:header:start
#
#   project      : TriAngels
#   file         : constants.py
#   file_relpath : src/triangels/constants.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

APP_NAME: str = "TriAngels Universal Terminal Setup"
TRIANGELS_VERSION: str = get_version("triangels")
APP_VERSION: str = f"v{TRIANGELS_VERSION}"

# Marker text must stay stable across releases, otherwise older blocks
# can no longer be found.
MARK_BEGIN: str = "# >>> TRIANGELS_TERMINAL_STANDARD >>>"
MARK_END: str = "# <<< TRIANGELS_TERMINAL_STANDARD <<<"

BACKUP_INFIX: str = ".bak."
BACKUP_TIMESTAMP_FORMAT: str = "%Y%m%d%H%M%S"

# Name of the bundled default settings inside the package `triangels.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "triangels.config"
DEFAULT_TOML_CONFIG_NAME: str = "triangels-default.toml"

USER_CONFIG_RELPATH: str = ".config/triangels/config.toml"

AUTO_APPLY_ENV: str = "TRIANGELS_AUTO_APPLY"
LOG_LEVEL_ENV: str = "TRIANGELS_LOG_LEVEL"

STARSHIP_BINARY: str = "starship"
STARSHIP_INSTALL_SCRIPT_URL: str = "https://starship.rs/install.sh"
STARSHIP_RELEASE_URL: str = (
    "https://github.com/starship/starship/releases/latest/download/"
    "starship-{arch}-apple-darwin.tar.gz"
)
