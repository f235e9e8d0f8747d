"""Core layer — execution context, build lifecycle and hook engine.

Rules
-----
* No imports from ``cli``.
* No ``print()`` calls; diagnostics go through the context's injected
  :class:`~pubctl.core.protocols.Reporter`.
* Filesystem access is limited to the project tree (hook discovery,
  hook import, artifact removal).
* External commands only through a :class:`~pubctl.core.protocols.ShellRunner`.
"""

from pubctl.core.context import PublicationContext
from pubctl.core.hook_executor import execute_build_hooks, load_hook_module
from pubctl.core.hook_locator import DEFAULT_HOOK_GLOB, locate_hook_modules
from pubctl.core.models import CommandSpecOptions, HookModuleRecord, LifecycleStep
from pubctl.core.protocols import (
    BuildLifecycleHook,
    CommandHandler,
    ContextFactory,
    Reporter,
    ShellRunner,
)

__all__: list[str] = [
    "DEFAULT_HOOK_GLOB",
    "BuildLifecycleHook",
    "CommandHandler",
    "CommandSpecOptions",
    "ContextFactory",
    "HookModuleRecord",
    "LifecycleStep",
    "PublicationContext",
    "Reporter",
    "ShellRunner",
    "execute_build_hooks",
    "load_hook_module",
    "locate_hook_modules",
]
