# topmark:header:start
#
#   project      : TriAngels
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Pytest configuration for the TriAngels test suite.

This file sets up global fixtures and customizes the logging configuration for test runs.

Notes:
    Tests never touch the real home directory, package managers or network:

    - Build `HostFacts` with `make_facts()` instead of calling `detect_host()`
      without overrides.
    - Build settings with `make_settings(home)`; all paths land below ``home``.
    - External commands are replaced by `FakeRunner` / `fake_which`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from triangels.config import MutableSettings, Settings, logging
from triangels.host.detect import HostFacts, OsKind, ShellKind

FIXED_NOW = datetime(2025, 3, 14, 15, 9, 26)


def fixed_clock(now: datetime = FIXED_NOW) -> Callable[[], datetime]:
    """Return a clock that always reports ``now``."""
    return lambda: now


def make_facts(home: Path | None = None, **overrides: Any) -> HostFacts:
    """Return `HostFacts` for a plain Linux bash user, with overrides applied.

    Args:
        home (Path | None): Home directory (defaults to ``/home/tester``).
        **overrides (Any): Field values replacing the defaults.

    Returns:
        HostFacts: The frozen facts.
    """
    values: dict[str, Any] = {
        "os_name": "Linux",
        "os_kind": OsKind.LINUX,
        "is_wsl": False,
        "user": "tester",
        "is_root": False,
        "is_ssh": False,
        "shell": ShellKind.BASH,
        "arch": "x86_64",
        "home": home or Path("/home/tester"),
    }
    values.update(overrides)
    return HostFacts(**values)


def make_settings(home: Path, **overrides: Any) -> Settings:
    """Return frozen settings with every path resolved below ``home``."""
    return MutableSettings(**overrides).freeze(home)


def fake_which(*available: str) -> Callable[[str], str | None]:
    """Return a ``shutil.which`` replacement that knows only ``available``."""
    found = set(available)

    def _which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in found else None

    return _which


@dataclass
class FakeRunner:
    """Command runner that records argv lists and returns canned statuses.

    Attributes:
        status (int): Exit status returned for every command.
        calls (list[list[str]]): Commands received, in order.
        on_call (Callable[[Sequence[str]], None] | None): Side effect per call.
    """

    status: int = 0
    calls: list[list[str]] = field(default_factory=lambda: [])
    on_call: Callable[[Sequence[str]], None] | None = None

    def __call__(self, argv: Sequence[str]) -> int:
        self.calls.append(list(argv))
        if self.on_call is not None:
            self.on_call(argv)
        return self.status


@pytest.fixture(autouse=True)
def silence_triangels_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level and auto-apply are not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("TRIANGELS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TRIANGELS_AUTO_APPLY", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return an empty fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path
