"""Allow ``python -m pubctl`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m pubctl`` behaves identically to the ``pubctl``
console script.
"""

from __future__ import annotations

from pubctl.cli.app import cli

if __name__ == "__main__":
    cli()
