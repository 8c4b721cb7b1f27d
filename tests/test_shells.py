# topmark:header:start
#
#   project      : TriAngels
#   file         : test_shells.py
#   file_relpath : tests/test_shells.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""Tests for shell rc attachment."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from tests.conftest import FIXED_NOW, fixed_clock, make_settings
from triangels.blocks.editor import EditResult, EditStatus, MarkerBlockEditor
from triangels.blocks.markers import DEFAULT_MARKERS
from triangels.core.errors import MalformedMarkerSpanError
from triangels.host.detect import ShellKind
from triangels.shells import (
    attach_to_shells,
    detach_from_shells,
    plan_targets,
    render_init_lines,
)


def test_init_lines_use_home_relative_path() -> None:
    home = Path("/home/tester")
    assert render_init_lines(ShellKind.BASH, home / ".local" / "bin", home) == [
        "# Ensure Starship is in PATH",
        'export PATH="$HOME/.local/bin:$PATH"',
        'eval "$(starship init bash)"',
    ]


def test_init_lines_outside_home_and_without_bin_dir() -> None:
    home = Path("/home/tester")
    assert render_init_lines(ShellKind.ZSH, Path("/opt/bin"), home)[1] == (
        'export PATH="/opt/bin:$PATH"'
    )
    assert render_init_lines(ShellKind.ZSH, None, home) == ['eval "$(starship init zsh)"']


def test_plan_includes_other_shell_only_if_rc_exists(home: Path) -> None:
    settings = make_settings(home)
    assert [t.shell for t in plan_targets(ShellKind.ZSH, settings)] == [ShellKind.ZSH]

    (home / ".bashrc").write_text("# bash\n")
    targets = plan_targets(ShellKind.ZSH, settings)
    assert [t.shell for t in targets] == [ShellKind.ZSH, ShellKind.BASH]
    assert targets[0].create_if_missing
    assert not targets[1].create_if_missing


def test_attach_then_detach(home: Path) -> None:
    (home / ".bashrc").write_text("alias ll='ls -l'\n")
    settings = make_settings(home)
    editor = MarkerBlockEditor(clock=fixed_clock())

    results = attach_to_shells(ShellKind.ZSH, settings, editor)

    assert [r.status for r in results] == [EditStatus.CREATED, EditStatus.INSERTED]
    assert 'eval "$(starship init zsh)"' in (home / ".zshrc").read_text()
    assert 'eval "$(starship init bash)"' in (home / ".bashrc").read_text()

    later = MarkerBlockEditor(clock=fixed_clock(FIXED_NOW + timedelta(seconds=1)))
    removed = detach_from_shells(settings, later)

    assert all(r.status is EditStatus.REMOVED for r in removed)
    assert (home / ".bashrc").read_text() == "alias ll='ls -l'\n"
    assert (home / ".zshrc").read_text() == ""


def test_detach_reports_finished_files_before_a_failure(home: Path) -> None:
    settings = make_settings(home)
    editor = MarkerBlockEditor(clock=fixed_clock())
    (home / ".bashrc").write_text("export EDITOR=vim\n")
    attach_to_shells(ShellKind.BASH, settings, editor)
    (home / ".zshrc").write_text(f"{DEFAULT_MARKERS.end}\n")

    seen: list[EditResult] = []
    later = MarkerBlockEditor(clock=fixed_clock(FIXED_NOW + timedelta(seconds=1)))
    with pytest.raises(MalformedMarkerSpanError):
        detach_from_shells(settings, later, on_result=seen.append)

    assert [(r.path.name, r.status) for r in seen] == [(".bashrc", EditStatus.REMOVED)]
