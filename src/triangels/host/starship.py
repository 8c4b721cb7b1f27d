# topmark:header:start
#
#   project      : TriAngels
#   file         : starship.py
#   file_relpath : src/triangels/host/starship.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Starship installation.

- macOS: the release tarball is downloaded with curl and the binary copied to
  the user bin directory (no Homebrew).
- Linux: the official install script is run with ``-b <bin_dir>`` so no root
  is needed; curl is installed through the package manager first if missing.
- Windows shells (MSYS/MINGW/CYGWIN) are not supported; WSL is recommended.

After installing, the bin directory is prepended to the process ``PATH`` so the
binary can be verified (and found by the rest of the run).
"""

from __future__ import annotations

import os
import shlex
import shutil
import tarfile
import tempfile
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from triangels.config.logging import get_logger
from triangels.constants import (
    STARSHIP_BINARY,
    STARSHIP_INSTALL_SCRIPT_URL,
    STARSHIP_RELEASE_URL,
)
from triangels.core.errors import (
    DependencyMissingError,
    InstallError,
    UnsupportedPlatformError,
)
from triangels.host.packages import ensure_curl, run_command
from triangels.utils.file import translate_os_errors

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from triangels.host.detect import HostFacts
    from triangels.host.packages import CommandRunner, Which

logger = get_logger(__name__)

_ARCH_MAP: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}

WSL_HINT = (
    "Windows shell detected (MSYS/MINGW/CYGWIN). Run this installer inside WSL "
    "(Ubuntu) for full support: install WSL, open Ubuntu, run the same command."
)


class StarshipStatus(str, Enum):
    """Result of `ensure_starship`."""

    ALREADY_INSTALLED = "already-installed"
    INSTALLED = "installed"


def starship_arch(machine: str) -> str:
    """Map ``uname -m`` output to the Starship release architecture.

    Raises:
        UnsupportedPlatformError: For architectures without a release build.
    """
    try:
        return _ARCH_MAP[machine.lower()]
    except KeyError:
        raise UnsupportedPlatformError(f"unsupported CPU architecture: {machine}") from None


def prepend_to_path(bin_dir: Path, environ: MutableMapping[str, str] | None = None) -> None:
    """Put ``bin_dir`` first on ``PATH`` for this process (and its children)."""
    env = os.environ if environ is None else environ
    current = env.get("PATH", "")
    entries = current.split(os.pathsep) if current else []
    if str(bin_dir) in entries:
        return
    env["PATH"] = os.pathsep.join([str(bin_dir), *entries])


def _extract_binary(archive: Path, dest: Path) -> None:
    try:
        with tarfile.open(archive, "r:gz") as tar:
            for member in tar.getmembers():
                if member.isfile() and Path(member.name).name == STARSHIP_BINARY:
                    src = tar.extractfile(member)
                    if src is None:
                        break
                    with src, translate_os_errors(dest), open(dest, "wb") as out:
                        shutil.copyfileobj(src, out)
                    return
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise InstallError(f"downloaded archive is unreadable: {exc}", path=archive) from exc
    raise InstallError("starship binary not found after extracting archive", path=archive)


def install_starship_macos(
    bin_dir: Path,
    arch: str,
    *,
    runner: CommandRunner = run_command,
    which: Which = shutil.which,
) -> Path:
    """Install the Starship release binary for macOS into ``bin_dir``.

    Returns:
        Path: The installed binary.
    """
    if not which("curl"):
        raise DependencyMissingError("curl not found; install curl and re-run")

    url = STARSHIP_RELEASE_URL.format(arch=starship_arch(arch))
    with translate_os_errors(bin_dir):
        bin_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Installing Starship from %s into %s", url, bin_dir)

    target = bin_dir / STARSHIP_BINARY
    with tempfile.TemporaryDirectory(prefix="triangels-") as tmp:
        archive = Path(tmp) / "starship.tgz"
        if runner(["curl", "-fsSL", url, "-o", str(archive)]) != 0:
            raise InstallError(f"download failed: {url}")
        staged = Path(tmp) / STARSHIP_BINARY
        _extract_binary(archive, staged)
        with translate_os_errors(target):
            shutil.copyfile(staged, target)
            target.chmod(0o755)
    return target


def install_starship_linux(
    bin_dir: Path,
    facts: HostFacts,
    *,
    runner: CommandRunner = run_command,
    which: Which = shutil.which,
) -> None:
    """Run the official Starship install script targeting ``bin_dir``."""
    ensure_curl(facts, which=which, runner=runner)
    with translate_os_errors(bin_dir):
        bin_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Installing Starship via %s into %s", STARSHIP_INSTALL_SCRIPT_URL, bin_dir)
    script = (
        f"curl -fsSL {STARSHIP_INSTALL_SCRIPT_URL} | sh -s -- -y -b {shlex.quote(str(bin_dir))}"
    )
    if runner(["sh", "-c", script]) != 0:
        raise InstallError("the Starship install script failed")


def ensure_starship(
    facts: HostFacts,
    bin_dir: Path,
    *,
    which: Which = shutil.which,
    runner: CommandRunner = run_command,
    environ: MutableMapping[str, str] | None = None,
) -> StarshipStatus:
    """Install Starship unless it is already on ``PATH``.

    Args:
        facts (HostFacts): Host facts deciding the install strategy.
        bin_dir (Path): Destination directory for the binary.
        which (Which): Executable lookup.
        runner (CommandRunner): Command executor.
        environ (MutableMapping[str, str] | None): Environment whose ``PATH`` is
            extended; defaults to ``os.environ``.

    Returns:
        StarshipStatus: Whether Starship was already present or got installed.

    Raises:
        UnsupportedPlatformError: On Windows shells or unknown systems.
        InstallError: If the binary is still missing after installing.
    """
    if which(STARSHIP_BINARY):
        logger.info("Starship already installed")
        return StarshipStatus.ALREADY_INSTALLED

    if facts.is_macos:
        install_starship_macos(bin_dir, facts.arch, runner=runner, which=which)
    elif facts.is_linux:
        install_starship_linux(bin_dir, facts, runner=runner, which=which)
    elif facts.is_windows:
        raise UnsupportedPlatformError(WSL_HINT)
    else:
        raise UnsupportedPlatformError(f"unsupported operating system: {facts.os_name}")

    prepend_to_path(bin_dir, environ)
    if not which(STARSHIP_BINARY):
        raise InstallError("Starship installed but not found in PATH", path=bin_dir)
    return StarshipStatus.INSTALLED
