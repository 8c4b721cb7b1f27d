# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""TriAngels package.

TriAngels bootstraps a terminal environment: it detects the host OS and shell,
installs the Starship prompt if needed, writes a generated ``starship.toml``
and keeps a managed initialization block in the shell startup files.
"""

from __future__ import annotations
