"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: running
lifecycle commands and reading repository tags.  Every raw subprocess
exception must be caught here and re-raised as a
:class:`~pubctl.exceptions.PubctlError` subclass (or, for version
lookups, answered with a fallback).

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from pubctl.infra.shell_runner import SubprocessShellRunner
from pubctl.infra.version_resolver import determine_version

__all__: list[str] = [
    "SubprocessShellRunner",
    "determine_version",
]
