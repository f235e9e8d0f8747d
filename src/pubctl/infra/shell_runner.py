"""Subprocess-backed implementation of :class:`~pubctl.core.protocols.ShellRunner`.

This module is the **only** place in the codebase that starts external
processes for lifecycle commands.  All ``subprocess`` and OS errors are
caught here and re-raised as :class:`~pubctl.exceptions.ShellCommandError`.

Rules
-----
* Commands are split with :mod:`shlex`; no shell is involved.
* Dry-run never starts a process.
* No user-facing output: the context reports commands before running
  them; verbose mode only lets the child inherit the terminal.
"""

from __future__ import annotations

import shlex
import subprocess

from pubctl.exceptions import ShellCommandError

_STDERR_TAIL_LINES = 20


class SubprocessShellRunner:
    """Concrete :class:`ShellRunner` backed by :func:`subprocess.run`.

    This class satisfies the :class:`~pubctl.core.protocols.ShellRunner`
    protocol structurally; no explicit inheritance required.
    """

    def __init__(self, *, cwd: str | None = None) -> None:
        self._cwd = cwd

    def run(self, command: str, *, dry_run: bool, verbose: bool) -> None:
        """Run *command* once, without retries.

        Raises
        ------
        ShellCommandError
            When the executable is missing or the command exits non-zero.
        """
        if dry_run:
            return

        args = shlex.split(command)
        if not args:
            raise ShellCommandError("Empty command", command=command)

        try:
            completed = subprocess.run(
                args,
                cwd=self._cwd,
                check=False,
                capture_output=not verbose,
                text=True,
            )
        except FileNotFoundError as exc:
            raise ShellCommandError(
                f"Command not found: {args[0]}",
                command=command,
                hint=f"Make sure '{args[0]}' is installed and on PATH.",
            ) from exc
        except OSError as exc:
            raise ShellCommandError(
                f"Unable to run '{command}': {exc}",
                command=command,
            ) from exc

        if completed.returncode != 0:
            raise ShellCommandError(
                f"'{command}' exited with status {completed.returncode}",
                command=command,
                returncode=completed.returncode,
                hint=_stderr_tail(completed.stderr),
            )


def _stderr_tail(stderr: str | None) -> str | None:
    """Return the last lines of captured stderr, or ``None``."""
    if not stderr:
        return None
    lines = stderr.strip().splitlines()
    return "\n".join(lines[-_STDERR_TAIL_LINES:]) or None
