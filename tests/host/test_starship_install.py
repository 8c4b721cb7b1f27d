# topmark:header:start
#
#   project      : TriAngels
#   file         : test_starship_install.py
#   file_relpath : tests/host/test_starship_install.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Tests for Starship installation per platform.

No network access: downloads are simulated by a fake runner that writes a
tarball where curl would, and ``which`` is a fake that learns about
``starship`` once it has been "installed".
"""

from __future__ import annotations

import io
import os
import stat
import tarfile
from pathlib import Path
from typing import Sequence

import pytest

from tests.conftest import FakeRunner, make_facts
from triangels.core.errors import (
    DependencyMissingError,
    InstallError,
    TargetIOError,
    UnsupportedPlatformError,
)
from triangels.host.detect import OsKind
from triangels.host.starship import (
    WSL_HINT,
    StarshipStatus,
    ensure_starship,
    install_starship_macos,
    prepend_to_path,
    starship_arch,
)


class FakeWhich:
    """``shutil.which`` stand-in with a mutable set of known tools."""

    def __init__(self, *available: str) -> None:
        self.available = set(available)

    def __call__(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.available else None


def _write_release_tarball(argv: Sequence[str]) -> None:
    dest = Path(argv[argv.index("-o") + 1])
    payload = b"#!/bin/sh\necho starship\n"
    info = tarfile.TarInfo("starship")
    info.size = len(payload)
    with tarfile.open(dest, "w:gz") as tar:
        tar.addfile(info, io.BytesIO(payload))


@pytest.mark.parametrize(
    ("machine", "arch"),
    [("x86_64", "x86_64"), ("amd64", "x86_64"), ("arm64", "aarch64"), ("aarch64", "aarch64")],
)
def test_starship_arch(machine: str, arch: str) -> None:
    assert starship_arch(machine) == arch


def test_unsupported_arch() -> None:
    with pytest.raises(UnsupportedPlatformError):
        starship_arch("riscv64")


def test_prepend_to_path_is_idempotent(tmp_path: Path) -> None:
    env = {"PATH": "/usr/bin"}
    prepend_to_path(tmp_path, env)
    prepend_to_path(tmp_path, env)
    assert env["PATH"] == os.pathsep.join([str(tmp_path), "/usr/bin"])


def test_already_installed_skips_everything(tmp_path: Path) -> None:
    runner = FakeRunner()
    status = ensure_starship(
        make_facts(), tmp_path, which=FakeWhich("starship"), runner=runner, environ={}
    )
    assert status is StarshipStatus.ALREADY_INSTALLED
    assert runner.calls == []


def test_macos_install_from_release_tarball(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    which = FakeWhich("curl")
    runner = FakeRunner(on_call=_write_release_tarball)

    target = install_starship_macos(bin_dir, "arm64", runner=runner, which=which)

    assert target == bin_dir / "starship"
    assert target.read_bytes().startswith(b"#!/bin/sh")
    assert stat.S_IMODE(target.stat().st_mode) == 0o755
    assert "starship-aarch64-apple-darwin.tar.gz" in runner.calls[0][2]


def test_macos_install_needs_curl(tmp_path: Path) -> None:
    with pytest.raises(DependencyMissingError):
        install_starship_macos(tmp_path, "x86_64", runner=FakeRunner(), which=FakeWhich())


def test_macos_download_failure(tmp_path: Path) -> None:
    with pytest.raises(InstallError):
        install_starship_macos(
            tmp_path, "x86_64", runner=FakeRunner(status=22), which=FakeWhich("curl")
        )


def _write_html_page(argv: Sequence[str]) -> None:
    Path(argv[argv.index("-o") + 1]).write_text("<html>rate limited</html>\n")


def test_macos_unreadable_archive_is_an_install_error(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    runner = FakeRunner(on_call=_write_html_page)

    with pytest.raises(InstallError) as excinfo:
        install_starship_macos(bin_dir, "x86_64", runner=runner, which=FakeWhich("curl"))

    assert excinfo.value.path is not None
    assert excinfo.value.path.name == "starship.tgz"
    assert not (bin_dir / "starship").exists()


def test_macos_archive_missing_after_download(tmp_path: Path) -> None:
    with pytest.raises(InstallError):
        install_starship_macos(
            tmp_path / "bin", "x86_64", runner=FakeRunner(), which=FakeWhich("curl")
        )


def test_bin_dir_that_is_a_file_is_an_io_error(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.write_text("")

    with pytest.raises(TargetIOError) as excinfo:
        install_starship_macos(bin_dir, "x86_64", runner=FakeRunner(), which=FakeWhich("curl"))
    assert excinfo.value.path == bin_dir

    with pytest.raises(TargetIOError):
        ensure_starship(
            make_facts(), bin_dir, which=FakeWhich("curl"), runner=FakeRunner(), environ={}
        )


def test_ensure_starship_macos_updates_path(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    which = FakeWhich("curl")
    env = {"PATH": "/usr/bin"}

    def runner_side_effect(argv: Sequence[str]) -> None:
        _write_release_tarball(argv)
        which.available.add("starship")

    status = ensure_starship(
        make_facts(os_name="Darwin", os_kind=OsKind.MACOS, arch="x86_64"),
        bin_dir,
        which=which,
        runner=FakeRunner(on_call=runner_side_effect),
        environ=env,
    )

    assert status is StarshipStatus.INSTALLED
    assert env["PATH"].split(os.pathsep)[0] == str(bin_dir)


def test_ensure_starship_linux_runs_install_script(tmp_path: Path) -> None:
    which = FakeWhich("curl")
    runner = FakeRunner(on_call=lambda argv: which.available.add("starship"))

    status = ensure_starship(make_facts(), tmp_path, which=which, runner=runner, environ={})

    assert status is StarshipStatus.INSTALLED
    assert runner.calls[0][:2] == ["sh", "-c"]
    assert "https://starship.rs/install.sh" in runner.calls[0][2]
    assert f"-b {tmp_path}" in runner.calls[0][2]


def test_linux_script_failure(tmp_path: Path) -> None:
    with pytest.raises(InstallError):
        ensure_starship(
            make_facts(),
            tmp_path,
            which=FakeWhich("curl"),
            runner=FakeRunner(status=1),
            environ={},
        )


def test_binary_missing_after_install(tmp_path: Path) -> None:
    with pytest.raises(InstallError):
        ensure_starship(
            make_facts(), tmp_path, which=FakeWhich("curl"), runner=FakeRunner(), environ={}
        )


def test_windows_shells_get_wsl_hint(tmp_path: Path) -> None:
    facts = make_facts(os_name="MINGW64_NT-10.0", os_kind=OsKind.WINDOWS)
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        ensure_starship(facts, tmp_path, which=FakeWhich(), runner=FakeRunner(), environ={})
    assert excinfo.value.message == WSL_HINT


def test_unknown_os(tmp_path: Path) -> None:
    facts = make_facts(os_name="FreeBSD", os_kind=OsKind.UNKNOWN)
    with pytest.raises(UnsupportedPlatformError):
        ensure_starship(facts, tmp_path, which=FakeWhich(), runner=FakeRunner(), environ={})
