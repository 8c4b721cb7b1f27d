# topmark:header:start
#
#   project      : TriAngels
#   file         : test_cli_install.py
#   file_relpath : tests/cli/test_cli_install.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""CLI tests for ``triangels install`` and auto-apply."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import ExecRecorder, assert_EXIT, assert_SUCCESS, cli_obj, run_cli
from tests.conftest import FakeRunner, fake_which, make_facts
from triangels.constants import MARK_BEGIN
from triangels.core.exit_codes import ExitCode
from triangels.host.detect import OsKind, ShellKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def test_install_with_starship_present(home: Path) -> None:
    result = run_cli(["install"], obj=cli_obj(home))

    assert_SUCCESS(result)
    bashrc = (home / ".bashrc").read_text()
    assert MARK_BEGIN in bashrc
    assert 'export PATH="$HOME/.local/bin:$PATH"' in bashrc
    assert 'eval "$(starship init bash)"' in bashrc
    assert not (home / ".zshrc").exists()
    assert (home / ".config" / "starship.toml").is_file()
    assert "Starship already installed" in result.output
    assert "source ~/.bashrc" in result.output
    assert "triangels remove" in result.output


def test_install_twice_keeps_one_block_and_backs_up(home: Path) -> None:
    obj = cli_obj(home)
    assert_SUCCESS(run_cli(["install"], obj=obj))
    assert_SUCCESS(run_cli(["install"], obj=cli_obj(home)))

    assert (home / ".bashrc").read_text().count(MARK_BEGIN) == 1
    assert len(list(home.glob(".bashrc.bak.*"))) == 1
    assert len(list((home / ".config").glob("starship.toml.bak.*"))) == 1


def test_install_attaches_existing_other_shell(home: Path) -> None:
    (home / ".zshrc").write_text("setopt autocd\n")

    result = run_cli(["install", "--skip-starship"], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert 'eval "$(starship init zsh)"' in (home / ".zshrc").read_text()
    assert (home / ".zshrc").read_text().startswith("setopt autocd\n")


def test_install_runs_linux_installer(home: Path) -> None:
    available = {"curl"}

    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in available else None

    runner = FakeRunner(on_call=lambda argv: available.add("starship"))
    environ = {"PATH": "/usr/bin"}

    result = run_cli(["install"], obj=cli_obj(home, which=which, runner=runner, environ=environ))

    assert_SUCCESS(result)
    assert runner.calls[0][:2] == ["sh", "-c"]
    assert environ["PATH"].startswith(str(home / ".local" / "bin"))
    assert "Starship installed into $HOME/.local/bin" in result.output


def test_install_custom_bin_dir(home: Path, tmp_path: Path) -> None:
    bin_dir = tmp_path / "opt-bin"
    result = run_cli(["install", "--bin-dir", str(bin_dir)], obj=cli_obj(home))

    assert_SUCCESS(result)
    assert f'export PATH="{bin_dir}:$PATH"' in (home / ".bashrc").read_text()


def test_install_skip_prompt(home: Path) -> None:
    assert_SUCCESS(run_cli(["install", "--skip-prompt"], obj=cli_obj(home)))
    assert not (home / ".config" / "starship.toml").exists()


def test_install_missing_dependencies(home: Path) -> None:
    result = run_cli(["install"], obj=cli_obj(home, which=fake_which()))
    assert_EXIT(result, ExitCode.DEPENDENCY_MISSING)
    assert not (home / ".bashrc").exists()


def test_install_on_windows_shell(home: Path) -> None:
    facts = make_facts(home, os_name="MINGW64_NT-10.0", os_kind=OsKind.WINDOWS)
    result = run_cli(["install"], obj=cli_obj(home, host=facts, which=fake_which()))
    assert_EXIT(result, ExitCode.UNSUPPORTED_PLATFORM)
    assert "WSL" in result.output


def test_install_refuses_malformed_rc(home: Path) -> None:
    content = f"a\n{MARK_BEGIN}\nmy own line\n"
    (home / ".bashrc").write_text(content)

    result = run_cli(["install", "--skip-prompt"], obj=cli_obj(home))

    assert_EXIT(result, ExitCode.MALFORMED_MARKERS)
    assert ".bashrc" in result.output
    assert (home / ".bashrc").read_text() == content


def test_quiet_install_hides_summary(home: Path) -> None:
    result = run_cli(["-q", "install"], obj=cli_obj(home))
    assert_SUCCESS(result)
    assert "Apply now" not in result.output


def test_auto_apply_execs_login_shell(home: Path) -> None:
    recorder = ExecRecorder()
    obj = cli_obj(
        home,
        host=make_facts(home, shell=ShellKind.ZSH),
        environ={"TRIANGELS_AUTO_APPLY": "1"},
        interactive=True,
        execvp=recorder,
    )

    result = run_cli(["install"], obj=obj)

    assert_SUCCESS(result)
    assert recorder.calls == [("zsh", ["zsh", "-l"])]


def test_auto_apply_skipped_without_tty(home: Path) -> None:
    recorder = ExecRecorder()
    cfg = home / "triangels.toml"
    cfg.write_text("[apply]\nauto_apply = true\n")

    result = run_cli(["--config", str(cfg), "install"], obj=cli_obj(home, execvp=recorder))

    assert_SUCCESS(result)
    assert recorder.calls == []
    assert "no interactive TTY" in result.output


def test_install_with_corrupt_download_fails_cleanly(home: Path) -> None:
    def write_html(argv: Sequence[str]) -> None:
        dest = argv[argv.index("-o") + 1]
        with open(dest, "w", encoding="utf-8") as f:
            f.write("<html>not a tarball</html>\n")

    facts = make_facts(home, os_name="Darwin", os_kind=OsKind.MACOS, arch="arm64")
    obj = cli_obj(
        home,
        host=facts,
        which=fake_which("curl"),
        runner=FakeRunner(on_call=write_html),
    )

    result = run_cli(["install"], obj=obj)

    assert_EXIT(result, ExitCode.DEPENDENCY_MISSING)
    assert "Traceback" not in result.output
    assert "unreadable" in result.output
    assert not (home / ".bashrc").exists()
