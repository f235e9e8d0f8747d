"""The per-invocation execution context and its build lifecycle.

A :class:`PublicationContext` is derived once from the controller's
:class:`~pubctl.core.models.CommandSpecOptions` and the docopt-parsed
command line.  It is handed by reference to every command handler and
every build hook, and is never mutated after construction.

Lifecycle operations
--------------------
* :meth:`~PublicationContext.prepare_build` — run ``prepare`` hooks.
* :meth:`~PublicationContext.build` — prepare hooks, site generator,
  finalize hooks, strictly in that order.
* :meth:`~PublicationContext.finalize_build` — run ``finalize`` hooks.
* :meth:`~PublicationContext.clean` — module clean, then remove
  generated artifacts.
* :meth:`~PublicationContext.update` — upgrade the controller script's
  and the hooks' dependencies.

Publications that use another generator or artifact layout subclass the
context, override the class constants, and pass the subclass through
``CommandSpecOptions.prepare_context``.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pubctl.core.hook_executor import execute_build_hooks
from pubctl.core.hook_locator import (
    DEFAULT_HOOK_GLOB,
    locate_hook_modules,
    relative_hook_name,
)
from pubctl.core.models import CommandSpecOptions, HookModuleRecord, LifecycleStep
from pubctl.core.protocols import Reporter, ShellRunner
from pubctl.exceptions import ContextError
from pubctl.utils.console import console as default_console
from pubctl.utils.console import escape


class PublicationContext:
    """Read-only execution context for one CLI invocation.

    Parameters
    ----------
    spec_options:
        Static options supplied by the controller script.
    cli_options:
        Mapping produced by the docopt parser.
    console:
        Diagnostics sink; defaults to the stderr Rich console.
    shell:
        Command runner; defaults to a subprocess runner rooted at the
        project home.

    Raises
    ------
    ContextError
        If ``--project`` names something that is not a directory.
    """

    BUILD_COMMAND: str = "hugo"
    MODULE_CLEAN_COMMAND: str = "hugo mod clean --all"
    UPDATE_COMMAND: str = "udd"
    CLEAN_ARTIFACTS: tuple[str, ...] = ("go.sum", "public", "resources")

    def __init__(
        self,
        spec_options: CommandSpecOptions,
        cli_options: Mapping[str, Any],
        *,
        console: Reporter | None = None,
        shell: ShellRunner | None = None,
    ) -> None:
        options = MappingProxyType(dict(cli_options))
        project_option = options.get("--project")
        hooks_option = options.get("--build-hooks")

        if isinstance(project_option, str) and project_option:
            project_home = Path(project_option).expanduser()
            if not project_home.is_dir():
                raise ContextError(
                    f"Project home '{project_option}' is not a directory",
                    hint="Pass an existing directory to --project.",
                )
        else:
            project_home = spec_options.project_home or Path.cwd()

        is_dry_run = bool(options.get("--dry-run"))

        self._spec_options = spec_options
        self._cli_options: Mapping[str, Any] = options
        self._project_home: Path = Path(project_home).resolve()
        self._build_hooks_glob: str = (
            hooks_option if isinstance(hooks_option, str) and hooks_option
            else DEFAULT_HOOK_GLOB
        )
        self._is_dry_run: bool = is_dry_run
        self._is_verbose: bool = is_dry_run or bool(options.get("--verbose"))
        self._console: Reporter = console if console is not None else default_console
        if shell is None:
            # Deferred: core modules import nothing from infra at load time.
            from pubctl.infra.shell_runner import SubprocessShellRunner

            shell = SubprocessShellRunner(cwd=str(self._project_home))
        self._shell: ShellRunner = shell

    # ------------------------------------------------------------------
    # Derived, read-only state
    # ------------------------------------------------------------------

    @property
    def spec_options(self) -> CommandSpecOptions:
        return self._spec_options

    @property
    def cli_options(self) -> Mapping[str, Any]:
        return self._cli_options

    @property
    def project_home(self) -> Path:
        return self._project_home

    @property
    def build_hooks_glob(self) -> str:
        return self._build_hooks_glob

    @property
    def is_dry_run(self) -> bool:
        return self._is_dry_run

    @property
    def is_verbose(self) -> bool:
        """``True`` when ``--verbose`` or ``--dry-run`` was given."""
        return self._is_verbose

    @property
    def console(self) -> Reporter:
        return self._console

    @property
    def shell(self) -> ShellRunner:
        return self._shell

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(project_home={str(self._project_home)!r}, "
            f"build_hooks_glob={self._build_hooks_glob!r}, "
            f"is_verbose={self._is_verbose}, is_dry_run={self._is_dry_run})"
        )

    # ------------------------------------------------------------------
    # Shell helpers
    # ------------------------------------------------------------------

    def report_shell_command(self, command: str) -> str:
        """Announce *command* on the console (verbose only) and return it."""
        if self._is_dry_run:
            self._console.print(f"dry-run [bright_cyan]{escape(command)}[/bright_cyan]")
        elif self._is_verbose:
            self._console.print(f"[bright_cyan]{escape(command)}[/bright_cyan]")
        return command

    def run_shell_command(self, command: str) -> None:
        """Report and run *command* honouring dry-run and verbose modes."""
        self._shell.run(
            self.report_shell_command(command),
            dry_run=self._is_dry_run,
            verbose=self._is_verbose,
        )

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def hook_module_names(self) -> list[str]:
        """Relative names of the discovered hooks, without loading them."""
        return [
            relative_hook_name(path, self._project_home)
            for path in locate_hook_modules(self._build_hooks_glob, self._project_home)
        ]

    def run_build_hooks(self, step: LifecycleStep) -> list[HookModuleRecord]:
        """Run every discovered hook for *step*; see :mod:`~pubctl.core.hook_executor`."""
        return execute_build_hooks(self, step)

    def handle_project_build_hooks(self, step: LifecycleStep) -> list[str]:
        """Run every discovered hook for *step* and return their names."""
        return [record.name for record in self.run_build_hooks(step)]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def prepare_build(self) -> list[str]:
        return self.handle_project_build_hooks(LifecycleStep.PREPARE)

    def build(self) -> None:
        """Prepare hooks, then the site generator, then finalize hooks.

        A failing generator raises :class:`~pubctl.exceptions.ShellCommandError`
        and the finalize hooks do not run.
        """
        self.prepare_build()
        self.run_shell_command(self.BUILD_COMMAND)
        self.finalize_build()

    def finalize_build(self) -> list[str]:
        return self.handle_project_build_hooks(LifecycleStep.FINALIZE)

    def clean(self) -> list[Path]:
        """Clean generator modules and remove generated artifacts.

        Missing artifacts are skipped, so cleaning twice is harmless.
        Returns the artifacts removed (or, in dry-run, that would be).
        """
        self.run_shell_command(self.MODULE_CLEAN_COMMAND)

        removed: list[Path] = []
        for artifact in self.CLEAN_ARTIFACTS:
            target = self._project_home / artifact
            if not (target.exists() or target.is_symlink()):
                continue
            if self._is_dry_run:
                self._console.print(f"delete [red]{escape(target)}[/red]")
            else:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink()
                if self._is_verbose:
                    self._console.print(f"[red]deleted {escape(target)}[/red]")
            removed.append(target)
        return removed

    def update(self) -> None:
        """Upgrade dependencies of the controller script and every hook.

        Requires the update tool (``UPDATE_COMMAND``) to be on PATH.
        """
        targets = shlex.join([self._spec_options.entry_script, *self.hook_module_names()])
        command = f"{self.UPDATE_COMMAND} {targets}"
        self.run_shell_command(command)
