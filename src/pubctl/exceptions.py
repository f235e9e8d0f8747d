"""Custom exception hierarchy for pubctl.

All exceptions that cross layer boundaries must inherit from
:class:`PubctlError`.  Raw subprocess and OS exceptions must NEVER
propagate beyond the infrastructure layer; they are caught and
re-raised as a typed subclass defined here.  Failures raised by hook
modules are wrapped at the per-hook boundary and never leave the
hook executor.

Hierarchy
---------
PubctlError
├── UsageError
├── ContextError
├── HookError
│   ├── HookLoadError
│   ├── HookContractError
│   └── HookExecutionError
├── ShellCommandError
└── EnvironmentError
"""

from __future__ import annotations


class PubctlError(Exception):
    """Base exception for all pubctl errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the dispatcher error boundary can render a clean
    message without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(PubctlError):
    """Raised when the command line does not match the usage grammar."""


class ContextError(PubctlError):
    """Raised when parsed options cannot form a valid execution context."""


# --- Hooks -----------------------------------------------------------------

class HookError(PubctlError):
    """Base class for failures attributable to a single hook module."""

    def __init__(
        self, module_name: str, message: str, *, hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.module_name: str = module_name
        """Relative name of the hook module that failed."""


class HookLoadError(HookError):
    """Raised when a hook module cannot be imported."""


class HookContractError(HookError):
    """Raised when a hook module does not expose a callable ``default``."""


class HookExecutionError(HookError):
    """Raised when a hook's ``default`` function raises."""


# --- Shell -----------------------------------------------------------------

class ShellCommandError(PubctlError):
    """Raised when an external command cannot start or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        returncode: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str = command
        self.returncode: int | None = returncode


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(PubctlError):
    """Raised when a required runtime dependency is not available."""
