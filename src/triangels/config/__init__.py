# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Settings model, TOML settings loader and logging configuration.

The public surface re-exported here is what CLI commands and tests use:

- `Settings` / `MutableSettings`: frozen runtime snapshot and its builder.
- `PromptStyle`: colours used by the generated ``starship.toml``.
- `load_settings`: layered loading (bundled defaults, user file, explicit file).
"""

from __future__ import annotations

from triangels.config.loader import load_settings, load_toml_dict
from triangels.config.model import MutableSettings, PromptStyle, Settings

__all__ = [
    "MutableSettings",
    "PromptStyle",
    "Settings",
    "load_settings",
    "load_toml_dict",
]
