# topmark:header:start
#
#   project      : TriAngels
#   file         : __main__.py
#   file_relpath : src/triangels/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Module entry point for running TriAngels via ``python -m triangels``.

Delegates to :func:`triangels.cli.main.cli`, the same entry point used by the
``triangels`` console script.

Examples:
    Run the full setup using the module interface::

        python -m triangels install
"""

from __future__ import annotations

from triangels.cli.main import cli

if __name__ == "__main__":
    cli()
