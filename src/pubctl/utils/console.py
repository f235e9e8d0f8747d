"""Console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
bootstrap paths (``--help``, ``version``) and hook execution remain
functional even when Rich is not importable.  Every message is written
with Rich markup; the plain fallback strips the tags.

Two proxies are exported:

* :data:`console` — diagnostics, written to stderr.
* :data:`stdout` — command output meant to be piped (e.g. versions).
"""

from __future__ import annotations

import re
import sys
from typing import Any

from pubctl.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"(?<!\\)\[/?[a-z#][a-z0-9_ #=]*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, soft_wrap=True)


def escape(text: object) -> str:
	"""Escape *text* with ``rich.markup.escape`` so it is not read as markup.

	Without Rich the text is returned unchanged.
	"""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return str(text)
	return rich_escape(str(text))


def strip_markup(text: str) -> str:
	"""Remove Rich markup tags from *text* and unescape literal brackets."""
	return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool = True) -> None:
		self._stderr = stderr

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			stream = sys.stderr if self._stderr else sys.stdout
			plain = [
				strip_markup(obj) if isinstance(obj, str) else obj
				for obj in objects
			]
			print(*plain, file=stream)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
stdout = _ConsoleProxy(stderr=False)
