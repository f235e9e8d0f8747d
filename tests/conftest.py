"""Shared pytest fixtures and helpers for the pubctl test suite.

Guidelines
----------
* No real site-generation, clean or update command is ever started:
  the shell runner is faked at the protocol seam or ``subprocess.run``
  is patched.
* Hooks are real Python files written under ``tmp_path``.
* Console output is recorded through an injected reporter rather than
  captured from the process where possible.
"""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any

import pytest

from pubctl.core.context import PublicationContext
from pubctl.core.models import CommandSpecOptions
from pubctl.exceptions import ShellCommandError
from pubctl.utils.console import strip_markup

HOOK_FILE_NAME = "pubctl_hook_build.py"


class RecordingConsole:
    """Reporter that keeps every printed line in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.objects: list[object] = []

    def print(self, *objects: object) -> None:
        self.objects.extend(objects)
        self.lines.append(strip_markup(" ".join(str(obj) for obj in objects)))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class FakeShellRunner:
    """ShellRunner that records calls (and the console order) instead of running."""

    def __init__(
        self,
        console: RecordingConsole | None = None,
        *,
        fail_on: str | None = None,
    ) -> None:
        self.calls: list[tuple[str, bool, bool]] = []
        self._console = console
        self._fail_on = fail_on

    def run(self, command: str, *, dry_run: bool, verbose: bool) -> None:
        self.calls.append((command, dry_run, verbose))
        if self._console is not None:
            self._console.print(f"shell: {command}")
        if self._fail_on is not None and command.startswith(self._fail_on):
            raise ShellCommandError(
                f"'{command}' exited with status 1", command=command, returncode=1,
            )

    @property
    def commands(self) -> list[str]:
        return [command for command, _, _ in self.calls]


def write_hook(root: Path, relative_dir: str, body: str) -> Path:
    """Write a hook file under ``root/relative_dir`` and return its path."""
    directory = root / relative_dir
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / HOOK_FILE_NAME
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


RECORDING_HOOK = """
    from pathlib import Path


    def default(ctx, step):
        ctx.console.print(f"hook {step} {Path(__file__).parent.name}")
        with open(Path(__file__).parent / "ran.txt", "a", encoding="utf-8") as fh:
            fh.write(f"{step}\\n")
        return "ok"
"""

THROWING_HOOK = """
    def default(ctx, step):
        raise RuntimeError("hook exploded")
"""


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def shell(console: RecordingConsole) -> FakeShellRunner:
    return FakeShellRunner(console)


@pytest.fixture
def spec_options(tmp_path: Path) -> CommandSpecOptions:
    return CommandSpecOptions(
        version="v1.2.3",
        called_from=str(tmp_path / "pubctl.py"),
        called_from_main=True,
        project_home=tmp_path,
    )


@pytest.fixture
def make_context(
    spec_options: CommandSpecOptions,
    console: RecordingConsole,
    shell: FakeShellRunner,
) -> Callable[..., PublicationContext]:
    """Build a context from keyword CLI options (``dry_run=True`` → ``--dry-run``)."""

    def _make(cli_options: Mapping[str, Any] | None = None, **flags: Any) -> PublicationContext:
        options: dict[str, Any] = dict(cli_options or {})
        for key, value in flags.items():
            options["--" + key.replace("_", "-")] = value
        return PublicationContext(spec_options, options, console=console, shell=shell)

    return _make


@pytest.fixture(autouse=True)
def _forget_hook_modules() -> Iterator[None]:
    """Drop hook modules imported during a test from ``sys.modules``."""
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if name.startswith("pubctl_hook_"):
            del sys.modules[name]
