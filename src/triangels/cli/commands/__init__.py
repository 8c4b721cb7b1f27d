# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Subcommands of the ``triangels`` CLI."""
