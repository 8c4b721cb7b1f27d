# topmark:header:start
#
#   project      : TriAngels
#   file         : test_cli_attach_remove.py
#   file_relpath : tests/cli/test_cli_attach_remove.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""CLI tests for ``attach``, ``remove`` and ``prompt``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tomlkit

from tests.cli.conftest import assert_EXIT, assert_SUCCESS, cli_obj, run_cli
from triangels.constants import MARK_BEGIN, MARK_END
from triangels.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


def test_attach_with_shell_override(home: Path) -> None:
    result = run_cli(["attach", "--shell", "zsh"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert 'eval "$(starship init zsh)"' in (home / ".zshrc").read_text()
    assert not (home / ".bashrc").exists()
    assert "Created $HOME/.zshrc" in result.output


def test_attach_reports_backup_on_replace(home: Path) -> None:
    assert_SUCCESS(run_cli(["attach"], obj=cli_obj(home)))
    result = run_cli(["attach"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert "Updated TriAngels block in $HOME/.bashrc" in result.output
    assert "Backup: $HOME/.bashrc.bak.20250314150926" in result.output


def test_attach_to_unwritable_directory(home: Path, tmp_path: Path) -> None:
    cfg = tmp_path / "t.toml"
    target = tmp_path / "a-file"
    target.write_text("")
    cfg.write_text(f'[shells]\nbashrc = "{target}/.bashrc"\n')

    result = run_cli(["--config", str(cfg), "attach"], obj=cli_obj(home))

    assert result.exit_code in (ExitCode.IO_ERROR, ExitCode.FILE_NOT_FOUND), result.output


def test_remove_after_attach_restores_content(home: Path) -> None:
    (home / ".bashrc").write_text("export EDITOR=vim\n")
    (home / ".zshrc").write_text("setopt autocd\n")
    assert_SUCCESS(run_cli(["attach"], obj=cli_obj(home)))

    result = run_cli(["remove"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert (home / ".bashrc").read_text() == "export EDITOR=vim\n"
    assert (home / ".zshrc").read_text() == "setopt autocd\n"
    assert "Removed TriAngels block from $HOME/.bashrc" in result.output
    assert "Removed TriAngels block from $HOME/.zshrc" in result.output


def test_remove_without_blocks(home: Path) -> None:
    (home / ".bashrc").write_text("plain\n")

    result = run_cli(["remove"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert "Nothing to remove." in result.output
    assert list(home.glob("*.bak.*")) == []


def test_remove_prompt_deletes_profile_with_backup(home: Path) -> None:
    assert_SUCCESS(run_cli(["install"], obj=cli_obj(home)))

    result = run_cli(["remove", "--prompt"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert not (home / ".config" / "starship.toml").exists()
    assert list((home / ".config").glob("starship.toml.bak.*"))


def test_remove_refuses_orphan_end_marker(home: Path) -> None:
    content = f"x\n{MARK_END}\n"
    (home / ".bashrc").write_text(content)

    result = run_cli(["remove"], obj=cli_obj(home))

    assert_EXIT(result, ExitCode.MALFORMED_MARKERS)
    assert (home / ".bashrc").read_text() == content


def test_prompt_stdout_writes_nothing(home: Path) -> None:
    result = run_cli(["prompt", "--stdout"], obj=cli_obj(home))

    assert_SUCCESS(result)
    data = tomlkit.parse(result.output).unwrap()
    assert data["hostname"]["style"] == "bold green"
    assert not (home / ".config" / "starship.toml").exists()


def test_prompt_writes_profile(home: Path) -> None:
    result = run_cli(["prompt"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert "Starship config written: $HOME/.config/starship.toml" in result.output
    assert MARK_BEGIN not in (home / ".config" / "starship.toml").read_text()


def test_attach_keeps_latin1_rc_content(home: Path) -> None:
    original = b"# caf\xe9 latin-1 comment\nexport A=1\n"
    (home / ".bashrc").write_bytes(original)

    result = run_cli(["attach"], obj=cli_obj(home))

    assert_SUCCESS(result)
    data = (home / ".bashrc").read_bytes()
    assert data.startswith(original)
    assert MARK_BEGIN.encode() in data


def test_attach_writes_through_symlinked_rc(home: Path, tmp_path: Path) -> None:
    real = tmp_path / "dotfiles" / "bashrc"
    real.parent.mkdir()
    real.write_text("export EDITOR=vim\n")
    (home / ".bashrc").symlink_to(real)

    result = run_cli(["attach"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert (home / ".bashrc").is_symlink()
    assert MARK_BEGIN in real.read_text()


def test_remove_reports_files_edited_before_a_failure(home: Path) -> None:
    (home / ".bashrc").write_text("export EDITOR=vim\n")
    assert_SUCCESS(run_cli(["attach"], obj=cli_obj(home)))
    zshrc = f"setopt autocd\n{MARK_END}\n"
    (home / ".zshrc").write_text(zshrc)

    result = run_cli(["remove"], obj=cli_obj(home))

    assert_EXIT(result, ExitCode.MALFORMED_MARKERS)
    assert "Removed TriAngels block from $HOME/.bashrc" in result.output
    assert (home / ".bashrc").read_text() == "export EDITOR=vim\n"
    assert (home / ".zshrc").read_text() == zshrc
