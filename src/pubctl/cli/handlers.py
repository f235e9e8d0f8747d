"""Built-in command handlers shared by every publication controller.

Each handler looks for its own command key in the parsed options.  When
present it performs the matching lifecycle call and returns ``True``;
otherwise it returns ``None`` so the dispatcher tries the next one.
"""

from __future__ import annotations

from pubctl.core.context import PublicationContext
from pubctl.core.protocols import CommandHandler
from pubctl.infra.version_resolver import determine_version
from pubctl.utils.console import stdout

LIBRARY_NAME: str = "pubctl-lib"


def prepare_build_handler(context: PublicationContext) -> bool | None:
    if context.cli_options.get("prepare-build"):
        context.prepare_build()
        return True
    return None


def build_handler(context: PublicationContext) -> bool | None:
    if context.cli_options.get("build"):
        context.build()
        return True
    return None


def clean_handler(context: PublicationContext) -> bool | None:
    if context.cli_options.get("clean"):
        context.clean()
        return True
    return None


def update_handler(context: PublicationContext) -> bool | None:
    if context.cli_options.get("update"):
        context.update()
        return True
    return None


def version_handler(context: PublicationContext) -> bool | None:
    """Print the controller's version and the pubctl library's version."""
    if context.cli_options.get("version"):
        stdout.print(f"pubctl [yellow]{context.spec_options.version}[/yellow]")
        stdout.print(f"{LIBRARY_NAME} [yellow]{determine_version(__file__)}[/yellow]")
        return True
    return None


COMMON_HANDLERS: tuple[CommandHandler, ...] = (
    prepare_build_handler,
    build_handler,
    clean_handler,
    update_handler,
    version_handler,
)
"""Built-in handlers in resolution order."""
