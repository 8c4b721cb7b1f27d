# topmark:header:start
#
#   project      : TriAngels
#   file         : packages.py
#   file_relpath : src/triangels/host/packages.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Dependency installation through the host package manager.

Each supported package manager is a small `PackageManager` subclass that knows
its own command lines. `detect_package_manager` probes them in priority order
(``apt-get``, ``dnf``, ``yum``, ``pacman``, ``apk``, ``zypper``) and returns
the first one found on ``PATH``.

Commands are executed through a ``runner`` callable so tests (and dry runs) can
record them instead of touching the system.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING, ClassVar

from triangels.config.logging import get_logger
from triangels.core.errors import DependencyMissingError, InstallError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from triangels.host.detect import HostFacts

    CommandRunner = Callable[[Sequence[str]], int]
    Which = Callable[[str], "str | None"]

logger = get_logger(__name__)

CURL_PACKAGES: tuple[str, ...] = ("curl", "ca-certificates")


def run_command(argv: Sequence[str]) -> int:
    """Run ``argv`` with inherited stdio and return its exit status.

    A missing executable is reported as status 127, like a shell would.
    """
    logger.info("Running: %s", " ".join(argv))
    try:
        return subprocess.run(list(argv), check=False).returncode
    except OSError as exc:
        logger.error("Cannot run %s: %s", argv[0], exc)
        return 127


class PackageManager:
    """Base class for package-manager variants.

    Args:
        sudo (Sequence[str]): Privilege-escalation prefix (``["sudo"]`` or empty).
    """

    name: ClassVar[str] = ""
    binary: ClassVar[str] = ""

    def __init__(self, sudo: Sequence[str] = ()) -> None:
        self.sudo: tuple[str, ...] = tuple(sudo)

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        """Return the command lines that install ``packages``."""
        raise NotImplementedError

    def install(self, packages: Sequence[str], runner: CommandRunner = run_command) -> bool:
        """Install ``packages``; return False as soon as a command fails."""
        for argv in self.install_commands(packages):
            status = runner([*self.sudo, *argv])
            if status != 0:
                logger.error("%s exited with status %d", argv[0], status)
                return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sudo={list(self.sudo)!r})"


class AptGet(PackageManager):
    name = "apt-get"
    binary = "apt-get"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [
            ["apt-get", "update", "-y"],
            ["apt-get", "install", "-y", *packages],
        ]


class Dnf(PackageManager):
    name = "dnf"
    binary = "dnf"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [["dnf", "install", "-y", *packages]]


class Yum(PackageManager):
    name = "yum"
    binary = "yum"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [["yum", "install", "-y", *packages]]


class Pacman(PackageManager):
    name = "pacman"
    binary = "pacman"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [["pacman", "-Sy", "--noconfirm", *packages]]


class Apk(PackageManager):
    name = "apk"
    binary = "apk"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [["apk", "add", "--no-cache", *packages]]


class Zypper(PackageManager):
    name = "zypper"
    binary = "zypper"

    def install_commands(self, packages: Sequence[str]) -> list[list[str]]:
        return [["zypper", "--non-interactive", "install", *packages]]


# Probe order matters: dnf hosts often ship a yum shim.
PACKAGE_MANAGERS: tuple[type[PackageManager], ...] = (AptGet, Dnf, Yum, Pacman, Apk, Zypper)


def detect_package_manager(which: Which = shutil.which) -> type[PackageManager] | None:
    """Return the first supported package manager found on ``PATH``."""
    for pm in PACKAGE_MANAGERS:
        if which(pm.binary):
            logger.debug("Detected package manager: %s", pm.name)
            return pm
    return None


def sudo_prefix(facts: HostFacts, which: Which = shutil.which) -> list[str]:
    """Return the privilege prefix needed to install system packages.

    Raises:
        DependencyMissingError: If not root and ``sudo`` is unavailable.
    """
    if facts.is_root:
        return []
    if which("sudo"):
        return ["sudo"]
    raise DependencyMissingError(
        "need root or sudo to install system packages; install them manually or run as root"
    )


def ensure_curl(
    facts: HostFacts,
    *,
    which: Which = shutil.which,
    runner: CommandRunner = run_command,
) -> bool:
    """Make sure ``curl`` is available, installing it on Linux if needed.

    Args:
        facts (HostFacts): Host facts (root status is used for ``sudo``).
        which (Which): Executable lookup.
        runner (CommandRunner): Command executor.

    Returns:
        bool: True if curl was installed by this call, False if already present.

    Raises:
        DependencyMissingError: If no supported package manager or privilege
            escalation is available.
        InstallError: If the install commands fail or curl is still missing.
    """
    if which("curl"):
        return False

    pm_cls = detect_package_manager(which)
    if pm_cls is None:
        raise DependencyMissingError(
            "curl is missing and no supported package manager was detected; install curl manually"
        )

    pm = pm_cls(sudo=sudo_prefix(facts, which))
    logger.info("curl not found, installing via %s", pm.name)
    if not pm.install(CURL_PACKAGES, runner):
        raise InstallError(f"installing curl with {pm.name} failed")
    if not which("curl"):
        raise InstallError("curl install attempted but curl is still not available")
    return True
