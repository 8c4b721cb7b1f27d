# topmark:header:start
#
#   project      : TriAngels
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 TriAngels Authors
#
# topmark:header:end

"""CLI test helpers for running TriAngels against a fake host.

`cli_obj()` builds the ``ctx.obj`` overrides the CLI honours (host facts,
environment, ``which``, command runner, clock, TTY state, ``execvp``) so that
commands only ever touch files below a temporary home directory.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from tests.conftest import FakeRunner, fake_which, fixed_clock, make_facts
from triangels.cli.main import cli
from triangels.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


class ExecRecorder:
    """Stand-in for `os.execvp` that records the call instead of replacing the process."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, file: str, args: Sequence[str]) -> None:
        self.calls.append((file, list(args)))


def cli_obj(home: Path, **overrides: Any) -> dict[str, Any]:
    """Return ``ctx.obj`` overrides for a Linux bash user living in ``home``.

    Args:
        home (Path): Fake home directory.
        **overrides (Any): Keys replacing the defaults (``host``, ``which``, ...).

    Returns:
        dict[str, Any]: The object passed to ``CliRunner.invoke(obj=...)``.
    """
    obj: dict[str, Any] = {
        "host": make_facts(home),
        "environ": {"PATH": "/usr/bin"},
        "which": fake_which("starship"),
        "runner": FakeRunner(),
        "clock": fixed_clock(),
        "interactive": False,
        "execvp": ExecRecorder(),
    }
    obj.update(overrides)
    return obj


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    obj: dict[str, Any] | None = None,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with optional ``ctx.obj`` overrides.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["install"]``.
        obj (dict[str, Any] | None): Test overrides injected into Click's context object.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["attach"], obj=cli_obj(home))
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj=obj)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_EXIT(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``.

    Args:
        result (Result): The Result object returned by `run_cli`.
        code (ExitCode): Expected exit code.
    """
    assert result.exit_code == code, result.output
