"""Build-hook execution engine.

Hooks are Python files inside the project tree, found by the context's
hook glob, imported by absolute path and "executed" by calling their
module-level ``default`` function with ``(context, step)``.

An example hook (``site/pubctl_hook_build.py``)::

    from pubctl.core.context import PublicationContext
    from pubctl.core.models import LifecycleStep


    def build_hook(ctx: PublicationContext, step: LifecycleStep) -> None:
        ctx.console.print(step, "in", __file__)


    default = build_hook

Guarantees
----------
* One bad hook never aborts the batch: load failures, a missing
  ``default`` and exceptions raised by the hook (``sys.exit`` included)
  are caught per hook, reported on the context's console and recorded.
* Only hook *discovery* failures propagate.
* Dry-run loads every hook (so import errors surface) but calls none.
"""

from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import inspect
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from pubctl.core.hook_locator import locate_hook_modules, relative_hook_name
from pubctl.core.models import HookModuleRecord, LifecycleStep
from pubctl.exceptions import (
    HookContractError,
    HookError,
    HookExecutionError,
    HookLoadError,
)
from pubctl.utils.console import escape

if TYPE_CHECKING:
    from pubctl.core.context import PublicationContext

HOOK_ENTRY_POINT: str = "default"
"""Name of the module attribute invoked for each lifecycle step."""

_MODULE_PREFIX = "pubctl_hook_"
_NON_IDENTIFIER = re.compile(r"\W")
_PATH_DIGEST_LENGTH = 12


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _module_name_for(path: Path) -> str:
    """Derive a unique, importable module name from an absolute path.

    The readable part collapses punctuation, so the path digest keeps
    names distinct for files such as ``a-b/x.py`` and ``a_b/x.py``.
    """
    readable = _NON_IDENTIFIER.sub("_", path.as_posix().lstrip("/"))
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:_PATH_DIGEST_LENGTH]
    return f"{_MODULE_PREFIX}{readable}_{digest}"


def load_hook_module(path: Path, name: str | None = None) -> ModuleType:
    """Import the Python file at *path* and return the module.

    The path is resolved to an absolute file location first so the
    import does not depend on the current working directory.

    Raises
    ------
    HookLoadError
        When the file cannot be found, is not importable, or raises
        while its top level executes.
    """
    absolute = Path(path).resolve()
    display = name or absolute.name
    module_name = _module_name_for(absolute)

    # Already imported for an earlier lifecycle step of this process.
    cached = sys.modules.get(module_name)
    if cached is not None and getattr(cached, "__file__", None) == str(absolute):
        return cached

    spec = importlib.util.spec_from_file_location(module_name, absolute)
    if spec is None or spec.loader is None:
        raise HookLoadError(
            display,
            f"{display} is not an importable Python module",
            hint="Hook files must be Python source files (*.py).",
        )

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except (Exception, SystemExit) as exc:
        sys.modules.pop(module_name, None)
        raise HookLoadError(display, f"{type(exc).__name__}: {exc}") from exc
    return module


def _entry_point(module: ModuleType, name: str) -> Any:
    """Return the module's callable ``default`` or raise HookContractError."""
    handler = getattr(module, HOOK_ENTRY_POINT, None)
    if not callable(handler):
        raise HookContractError(
            name,
            f"{name} does not have a default function",
            hint=f"Assign the hook function to a module-level "
            f"'{HOOK_ENTRY_POINT}' name.",
        )
    return handler


def resolve_awaitable(outcome: Any) -> Any:
    """Run *outcome* to completion when it is awaitable, else return it."""
    if inspect.iscoroutine(outcome):
        return asyncio.run(outcome)
    if inspect.isawaitable(outcome):
        return asyncio.run(_await(outcome))
    return outcome


def _invoke(
    handler: Any, context: PublicationContext, step: LifecycleStep, name: str,
) -> Any:
    """Call the hook and wait for it to finish, wrapping any failure."""
    try:
        outcome = resolve_awaitable(handler(context, step))
    except (Exception, SystemExit) as exc:
        raise HookExecutionError(name, f"{type(exc).__name__}: {exc}") from exc
    return outcome


async def _await(awaitable: Any) -> Any:
    return await awaitable


# ---------------------------------------------------------------------------
# Batch execution
# ---------------------------------------------------------------------------

def execute_build_hooks(
    context: PublicationContext, step: LifecycleStep,
) -> list[HookModuleRecord]:
    """Load and run every hook matching the context's glob for *step*.

    Returns one record per discovered hook, in discovery order,
    whatever happened to it.
    """
    console = context.console
    records: list[HookModuleRecord] = []

    for path in locate_hook_modules(context.build_hooks_glob, context.project_home):
        name = relative_hook_name(path, context.project_home)
        label = f"[yellow]{escape(name)}[/yellow]"

        try:
            module = load_hook_module(path, name)
        except HookLoadError as exc:
            console.print(f"[bright_red]{escape(name)}[/bright_red]")
            console.print(f"  {escape(exc)}")
            records.append(HookModuleRecord(name=name, path=path, error=str(exc)))
            continue

        if context.is_verbose:
            console.print(f"{step} {label} [green]imported[/green]")

        if context.is_dry_run:
            records.append(HookModuleRecord(name=name, path=path, imported=True))
            continue

        try:
            outcome = _invoke(_entry_point(module, name), context, step, name)
        except HookContractError as exc:
            console.print(f"[bold bright_red]{escape(exc)}[/bold bright_red]")
            records.append(
                HookModuleRecord(name=name, path=path, imported=True, error=str(exc)),
            )
            continue
        except HookError as exc:
            console.print(f"[bright_red]{escape(name)}[/bright_red]")
            console.print(f"  {escape(exc)}")
            records.append(
                HookModuleRecord(name=name, path=path, imported=True, error=str(exc)),
            )
            continue

        if context.is_verbose:
            console.print(f"{step} {label} [green]executed[/green]")
        records.append(
            HookModuleRecord(
                name=name, path=path, imported=True, executed=True, outcome=outcome,
            ),
        )

    return records
