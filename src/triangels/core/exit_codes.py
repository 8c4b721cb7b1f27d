# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/triangels/core/exit_codes.py
#   project      : TriAngels
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Exit codes for the TriAngels CLI.

TriAngels aligns with the BSD `sysexits` convention so that wrapper scripts can
tell a missing external dependency apart from a file-system error.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the TriAngels CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        MALFORMED_MARKERS: A target file holds unbalanced or nested marker lines.
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Target path does not exist and may not be created.
            Mirrors BSD ``EX_NOINPUT (66)``.
        DEPENDENCY_MISSING: A required external tool (curl, sudo, a package
            manager, starship) is missing or could not be installed. Mirrors
            BSD ``EX_UNAVAILABLE (69)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort). Mirrors BSD
            ``EX_SOFTWARE (70)``.
        UNSUPPORTED_PLATFORM: Operating system or CPU architecture is not
            supported. Mirrors BSD ``EX_OSERR (71)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions (read/write). Mirrors BSD
            ``EX_NOPERM (77)``.
        CONFIG_ERROR: Settings file missing/invalid/malformed. Mirrors BSD
            ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    MALFORMED_MARKERS = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    DEPENDENCY_MISSING = 69  # EX_UNAVAILABLE
    UNEXPECTED_ERROR = 70  # EX_SOFTWARE
    UNSUPPORTED_PLATFORM = 71  # EX_OSERR
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
