"""Single source of truth for the pubctl library version."""

from __future__ import annotations

__version__: str = "0.3.0"
