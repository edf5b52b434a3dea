"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Listings go to stdout (so they can be piped); status and error
messages go to stderr.
"""

from __future__ import annotations

import re
import sys
from typing import Any, TextIO

from container_deck.exceptions import EnvironmentError

_STYLE_WORDS = "bold|dim|red|green|yellow|cyan"
_MARKUP = re.compile(rf"\[/?(?:{_STYLE_WORDS})(?: (?:{_STYLE_WORDS}))*\]")


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
	return console_class(stderr=stderr)


def rich_available() -> bool:
	try:
		_load_rich_console_class()
	except EnvironmentError:
		return False
	return True


def escape(text: str) -> str:
	"""Escape Rich markup in *text* when Rich is installed."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


def strip_markup(text: str) -> str:
	"""Drop the style tags this package emits, keeping other bracketed text."""
	return _MARKUP.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def _stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			plain = [strip_markup(o) if isinstance(o, str) else o for o in objects]
			print(*plain, file=self._stream())
			return
		rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
