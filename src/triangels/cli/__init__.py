# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Click command-line interface for TriAngels."""

from __future__ import annotations
