"""CLI application entry point and command dispatch for pubctl.

This module is the **error boundary** for one controller invocation.
:func:`main` catches :class:`~pubctl.exceptions.PubctlError`, usage
mismatches and any unexpected ``Exception``, renders a message via Rich
and returns a well-defined exit code.  :func:`cli` is the process
boundary used by console scripts.

Dispatch
--------
1. Parse ``argv`` with docopt against the controller's usage grammar
   (or :func:`default_usage`).
2. Build the :class:`~pubctl.core.context.PublicationContext` (or the
   controller's own via ``prepare_context``).
3. Offer the context to each custom handler, then to each built-in
   handler; the first one returning a truthy value wins.  A coroutine
   handler is run to completion before its result is judged.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

from docopt import DocoptExit, docopt

from pubctl.cli import exit_codes
from pubctl.cli.handlers import COMMON_HANDLERS
from pubctl.core.context import PublicationContext
from pubctl.core.hook_executor import resolve_awaitable
from pubctl.core.models import CommandSpecOptions
from pubctl.exceptions import PubctlError
from pubctl.utils.console import console, escape
from pubctl.version import __version__


# ---------------------------------------------------------------------------
# Usage grammar
# ---------------------------------------------------------------------------

def default_usage(spec_options: CommandSpecOptions) -> str:
    """Return the docopt grammar shared by all publication controllers."""
    return f"""
Publication Controller {spec_options.version}.

Usage:
  pubctl prepare-build [--project=<path>] [--build-hooks=<glob>] [--dry-run] [--verbose]
  pubctl build [--project=<path>] [--build-hooks=<glob>] [--dry-run] [--verbose]
  pubctl clean [--project=<path>] [--dry-run] [--verbose]
  pubctl update [--project=<path>] [--dry-run] [--verbose]
  pubctl version
  pubctl -h | --help

Options:
  --project=<path>      The project's home directory (default: current directory)
  --build-hooks=<glob>  Build hook modules to find and execute (default: "**/*/pubctl_hook_build.py")
  --dry-run             Show what will be done (but don't actually do it)
  --verbose             Be explicit about what's going on
  -h --help             Show this screen
"""


def parse_options(
    spec_options: CommandSpecOptions, argv: Sequence[str] | None = None,
) -> Mapping[str, Any]:
    """Parse *argv* (default ``sys.argv[1:]``) against the usage grammar.

    Raises
    ------
    DocoptExit
        When *argv* does not match the grammar.
    """
    usage = spec_options.usage or default_usage
    return docopt(usage(spec_options), argv=list(argv) if argv is not None else None)


# ---------------------------------------------------------------------------
# Handler resolution
# ---------------------------------------------------------------------------

def dispatch(context: PublicationContext) -> bool:
    """Offer *context* to custom then built-in handlers; first claim wins.

    Returns ``False`` (after logging the parsed options) when no
    handler claims the invocation.
    """
    handlers = (*context.spec_options.custom_handlers, *COMMON_HANDLERS)
    for handler in handlers:
        if resolve_awaitable(handler(context)):
            return True

    context.console.print("[bold red]Unable to handle validly parsed options:[/bold red]")
    context.console.print(dict(context.cli_options))
    return False


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def _default_spec_options() -> CommandSpecOptions:
    return CommandSpecOptions(version=__version__, called_from="pubctl")


def main(
    spec_options: CommandSpecOptions | None = None,
    argv: Sequence[str] | None = None,
) -> int:
    """Run one controller invocation.

    Parameters
    ----------
    spec_options:
        The controller's static options.  ``None`` describes the bare
        ``pubctl`` tool.
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    spec_options = spec_options or _default_spec_options()
    try:
        cli_options = parse_options(spec_options, argv)
        factory = spec_options.prepare_context or PublicationContext
        context = factory(spec_options, cli_options)
        dispatch(context)
    except DocoptExit as exc:
        console.print(escape(str(exc)))
        return exit_codes.USAGE_ERROR
    except PubctlError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        return exit_codes.GENERAL_ERROR
    except Exception as exc:  # noqa: BLE001
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        return exit_codes.UNEXPECTED_ERROR
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(
    spec_options: CommandSpecOptions | None = None,
    argv: Sequence[str] | None = None,
) -> NoReturn:
    """Top-level boundary invoked by console scripts and controller scripts.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main(spec_options, argv)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    sys.exit(code)
