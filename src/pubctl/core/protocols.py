"""Protocols (interfaces) consumed by the core layer.

These define the contracts that collaborators, handlers and hooks must
satisfy.  Any object implementing the right call signature satisfies a
protocol structurally; no explicit inheritance required.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pubctl.core.context import PublicationContext
    from pubctl.core.models import CommandSpecOptions, LifecycleStep


class Reporter(Protocol):
    """Diagnostics sink owned by the execution context.

    Messages may contain Rich markup.  The default implementation is
    :data:`pubctl.utils.console.console`.
    """

    def print(self, *objects: object) -> None:
        ...  # pragma: no cover


class ShellRunner(Protocol):
    """Contract for running one external command."""

    def run(self, command: str, *, dry_run: bool, verbose: bool) -> None:
        """Run *command* once.

        In dry-run mode nothing is executed.  In verbose mode the
        command's own output reaches the terminal.

        Raises
        ------
        ShellCommandError
            When the command cannot be started or exits non-zero.
        """
        ...  # pragma: no cover


class CommandHandler(Protocol):
    """Claims and services one parsed CLI invocation.

    Returns a truthy value when the invocation was handled; ``None``
    (or any falsy value) declines it.  An awaitable result is awaited
    first.
    """

    def __call__(self, context: PublicationContext) -> bool | None | Awaitable[bool | None]:
        ...  # pragma: no cover


class ContextFactory(Protocol):
    """Builds the execution context from static and parsed options."""

    def __call__(
        self,
        spec_options: CommandSpecOptions,
        cli_options: Mapping[str, Any],
    ) -> PublicationContext:
        ...  # pragma: no cover


class BuildLifecycleHook(Protocol):
    """Shape of a hook module's ``default`` function.

    May return any value, or an awaitable which is driven to completion
    before the next hook runs.
    """

    def __call__(self, context: PublicationContext, step: LifecycleStep) -> Any:
        ...  # pragma: no cover
