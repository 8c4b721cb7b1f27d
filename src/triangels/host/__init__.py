# topmark:header:start
#
#   project      : TriAngels
#   file         : __init__.py
#   file_relpath : src/triangels/host/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Host collaborators: OS/shell detection and external tool installation.

Nothing in here is imported by `triangels.blocks`; the editor only ever sees
finished content lines.
"""

from __future__ import annotations
