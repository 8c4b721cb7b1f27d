# topmark:header:start
#
#   project      : TriAngels
#   file         : keys.py
#   file_relpath : src/triangels/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Canonical TOML section and key names for TriAngels settings.

The ordering mirrors ``triangels-default.toml``. Renaming or removing a key is
a breaking change for user settings files.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TriAngels settings."""

    # [install]
    SECTION_INSTALL: Final[str] = "install"
    KEY_BIN_DIR: Final[str] = "bin_dir"

    # [prompt]
    SECTION_PROMPT: Final[str] = "prompt"
    KEY_CONFIG_PATH: Final[str] = "config_path"
    KEY_HOST_COLOR: Final[str] = "host_color"
    KEY_USER_COLOR: Final[str] = "user_color"
    KEY_ROOT_COLOR: Final[str] = "root_color"

    # [shells]
    SECTION_SHELLS: Final[str] = "shells"
    KEY_BASHRC: Final[str] = "bashrc"
    KEY_ZSHRC: Final[str] = "zshrc"

    # [apply]
    SECTION_APPLY: Final[str] = "apply"
    KEY_AUTO_APPLY: Final[str] = "auto_apply"
