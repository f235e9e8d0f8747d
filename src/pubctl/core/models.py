"""Domain models for pubctl.

Value objects are **frozen** dataclasses: immutable records with no
behaviour beyond data access.  :class:`CommandSpecOptions` is created
once by a publication's controller script; :class:`HookModuleRecord`
lives only for the duration of one hook batch.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pubctl.core.protocols import CommandHandler, ContextFactory


# ---------------------------------------------------------------------------
# Lifecycle discriminator
# ---------------------------------------------------------------------------

class LifecycleStep(str, enum.Enum):
    """Which phase of a build a hook invocation represents."""

    PREPARE = "prepare"
    FINALIZE = "finalize"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Static invocation options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandSpecOptions:
    """Caller-supplied configuration for one run of a publication controller.

    Typical controller script::

        from pubctl.cli.app import cli
        from pubctl.core.models import CommandSpecOptions

        if __name__ == "__main__":
            cli(CommandSpecOptions(
                version="v0.1.0",
                called_from=__file__,
                called_from_main=True,
            ))
    """

    version: str
    """Version of the publication controller itself."""

    called_from: str = "pubctl"
    """Path (or URL) of the controller module, normally ``__file__``."""

    called_from_main: bool = False
    """Whether the controller module was the program entry point."""

    project_home: Path | None = None
    """Project root used when ``--project`` is not given."""

    usage: Callable[[CommandSpecOptions], str] | None = None
    """Generator for a replacement docopt usage grammar."""

    custom_handlers: tuple[CommandHandler, ...] = field(default_factory=tuple)
    """Handlers tried, in order, before the built-in ones."""

    prepare_context: ContextFactory | None = None
    """Factory replacing the default ``PublicationContext`` constructor."""

    @property
    def entry_script(self) -> str:
        """File name of the controller script (e.g. ``pubctl.py``)."""
        return Path(self.called_from.removeprefix("file://")).name


# ---------------------------------------------------------------------------
# Per-hook outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HookModuleRecord:
    """What happened to one discovered hook module during a batch."""

    name: str
    """Hook path relative to the project home."""

    path: Path
    """Absolute path of the hook file."""

    imported: bool = False
    executed: bool = False

    error: str | None = None
    """Rendered load, contract or execution failure, if any."""

    outcome: Any = None
    """Value returned by the hook's ``default`` function."""

    @property
    def failed(self) -> bool:
        return self.error is not None
