# topmark:header:start
#
#   project      : TriAngels
#   file         : detect.py
#   file_relpath : src/triangels/host/detect.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Read-only facts about the host, gathered once at startup.

`detect_host` reads the operating system, WSL flag, current user, root and SSH
status, login shell and CPU architecture into a frozen `HostFacts`. Everything
downstream receives that object explicitly instead of querying the
environment again, so tests can build facts by hand.
"""

from __future__ import annotations

import getpass
import os
import platform
import re
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from triangels.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = get_logger(__name__)

PROC_VERSION = Path("/proc/version")

_WSL_RE = re.compile(r"microsoft|wsl", re.IGNORECASE)
_WINDOWS_PREFIXES = ("MINGW", "MSYS", "CYGWIN")


class OsKind(str, Enum):
    """Operating system family."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class ShellKind(str, Enum):
    """Shells TriAngels knows how to initialize."""

    BASH = "bash"
    ZSH = "zsh"

    @property
    def rc_name(self) -> str:
        """File name of the interactive startup file (``.bashrc`` / ``.zshrc``)."""
        return f".{self.value}rc"


@dataclass(frozen=True)
class HostFacts:
    """Immutable snapshot of the host environment.

    Attributes:
        os_name (str): Raw kernel/OS name, as ``uname -s`` prints it.
        os_kind (OsKind): Normalized OS family.
        is_wsl (bool): Linux running under Windows Subsystem for Linux.
        user (str): Current user name.
        is_root (bool): Effective UID is 0.
        is_ssh (bool): Running inside an SSH session.
        shell (ShellKind): Detected login shell.
        arch (str): Raw CPU architecture (``uname -m``).
        home (Path): Home directory of the current user.
    """

    os_name: str
    os_kind: OsKind
    is_wsl: bool
    user: str
    is_root: bool
    is_ssh: bool
    shell: ShellKind
    arch: str
    home: Path

    @property
    def is_macos(self) -> bool:
        return self.os_kind is OsKind.MACOS

    @property
    def is_linux(self) -> bool:
        return self.os_kind is OsKind.LINUX

    @property
    def is_windows(self) -> bool:
        return self.os_kind is OsKind.WINDOWS


def classify_os(os_name: str) -> OsKind:
    """Map a raw OS name to an `OsKind`."""
    if os_name == "Darwin":
        return OsKind.MACOS
    if os_name == "Linux":
        return OsKind.LINUX
    if os_name == "Windows" or os_name.upper().startswith(_WINDOWS_PREFIXES):
        return OsKind.WINDOWS
    return OsKind.UNKNOWN


def detect_wsl(proc_version: Path = PROC_VERSION) -> bool:
    """Return True when ``/proc/version`` mentions Microsoft or WSL."""
    try:
        text = proc_version.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return _WSL_RE.search(text) is not None


def _parent_process_name() -> str:
    try:
        out = subprocess.run(
            ["ps", "-p", str(os.getppid()), "-o", "comm="],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("ps not available: %s", exc)
        return ""
    return out.stdout.strip()


def normalize_shell_name(raw: str) -> str:
    """Reduce ``/bin/zsh`` or ``-zsh`` (login shell) to ``zsh``."""
    name = os.path.basename(raw.strip().split(" ")[0]) if raw.strip() else ""
    return name.lstrip("-")


def detect_shell(
    environ: Mapping[str, str] | None = None,
    *,
    parent_process_name: Callable[[], str] = _parent_process_name,
) -> ShellKind:
    """Detect the user's shell.

    Uses the basename of ``$SHELL``, falling back to the parent process name.
    Anything other than bash or zsh maps to zsh.

    Args:
        environ (Mapping[str, str] | None): Environment; defaults to ``os.environ``.
        parent_process_name (Callable[[], str]): Fallback probe for the calling shell.

    Returns:
        ShellKind: The detected shell.
    """
    env = os.environ if environ is None else environ
    name = normalize_shell_name(env.get("SHELL", ""))
    if not name:
        name = normalize_shell_name(parent_process_name())
    try:
        return ShellKind(name)
    except ValueError:
        logger.debug("Unsupported shell %r, defaulting to zsh", name)
        return ShellKind.ZSH


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def _is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def detect_host(
    environ: Mapping[str, str] | None = None,
    *,
    os_name: str | None = None,
    arch: str | None = None,
    proc_version: Path = PROC_VERSION,
    home: Path | None = None,
    user: str | None = None,
    is_root: bool | None = None,
) -> HostFacts:
    """Collect `HostFacts` for the running process.

    Keyword arguments override individual probes; tests use them to simulate
    other platforms.

    Args:
        environ (Mapping[str, str] | None): Environment; defaults to ``os.environ``.
        os_name (str | None): Raw OS name; defaults to ``platform.system()``.
        arch (str | None): CPU architecture; defaults to ``platform.machine()``.
        proc_version (Path): File inspected for WSL detection.
        home (Path | None): Home directory; defaults to ``Path.home()``.
        user (str | None): User name; defaults to ``getpass.getuser()``.
        is_root (bool | None): Root flag; defaults to checking the effective UID.

    Returns:
        HostFacts: The frozen snapshot.
    """
    env = os.environ if environ is None else environ
    raw_os = os_name if os_name is not None else (platform.system() or "unknown")
    kind = classify_os(raw_os)

    facts = HostFacts(
        os_name=raw_os,
        os_kind=kind,
        is_wsl=kind is OsKind.LINUX and detect_wsl(proc_version),
        user=user if user is not None else _current_user(),
        is_root=is_root if is_root is not None else _is_root(),
        is_ssh=bool(env.get("SSH_CONNECTION")),
        shell=detect_shell(env),
        arch=arch if arch is not None else platform.machine(),
        home=home or Path.home(),
    )
    logger.debug("Host facts: %s", facts)
    return facts
