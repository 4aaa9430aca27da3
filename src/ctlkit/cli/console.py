"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so that parse errors and ``--help`` remain functional even
when Rich is not installed.

Two proxies are exported: :data:`console` writes diagnostics to stderr,
:data:`out` writes reply output to stdout.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from ctlkit.exceptions import EnvironmentError

_MARKUP_RE = re.compile(r"\[/?(?:(?:bold|dim|red|green|yellow|cyan) ?)+\]")


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
	return console_class(stderr=stderr, highlight=False, emoji=False)


def escape_markup(text: str) -> str:
	"""Escape *text* so Rich prints square brackets literally."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)


def strip_markup(text: str) -> str:
	"""Remove Rich style tags such as ``[bold red]`` from *text*."""
	return _MARKUP_RE.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(
		self,
		*objects: object,
		markup: bool = True,
		soft_wrap: bool = False,
	) -> None:
		"""Render with Rich when available, else plain print.

		*soft_wrap* keeps each line intact instead of wrapping it at the
		console width.
		"""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			stream = sys.stderr if self._stderr else sys.stdout
			if markup:
				objects = tuple(
					strip_markup(obj) if isinstance(obj, str) else obj
					for obj in objects
				)
			print(*objects, file=stream)
			return
		rich_console.print(*objects, markup=markup, soft_wrap=soft_wrap)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
