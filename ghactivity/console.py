"""Operator-facing progress output rendered with rich."""

from __future__ import annotations

import contextlib
import typing as typ

from rich.console import Console
from rich.text import Text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_STAGE_MARKER = "⠿"
_SUCCESS_MARKER = "✔"
_FAILURE_MARKER = "✖"


class Reporter(typ.Protocol):
    """Progress sink used by the workflow."""

    def stage(
        self, text: str, *, indent: int = 0, style: str = "yellow"
    ) -> contextlib.AbstractContextManager[None]:
        """Show ``text`` as in progress for the duration of the block."""
        ...

    def succeed(self, text: str, *, indent: int = 2) -> None:
        """Report a successful step."""
        ...

    def fail(self, text: str, *, indent: int = 2) -> None:
        """Report a failed step."""
        ...

    def blank(self) -> None:
        """Print an empty separator line."""
        ...

    def ask(self, text: str) -> str:
        """Block until the operator answers ``text``."""
        ...


class ConsoleReporter:
    """Render workflow progress as spinner lines on a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        """Wrap ``console``, defaulting to one bound to standard output."""
        self._console = console or Console(highlight=False)

    @contextlib.contextmanager
    def stage(
        self, text: str, *, indent: int = 0, style: str = "yellow"
    ) -> cabc.Iterator[None]:
        """Spin while the block runs, then persist the line with a marker."""
        try:
            with self._console.status(Text(text, style=style), spinner_style=style):
                yield
        finally:
            self._line(_STAGE_MARKER, text, indent=indent, style=style)

    def succeed(self, text: str, *, indent: int = 2) -> None:
        """Print ``text`` with a green tick."""
        self._line(_SUCCESS_MARKER, text, indent=indent, style="green")

    def fail(self, text: str, *, indent: int = 2) -> None:
        """Print ``text`` with a red cross."""
        self._line(_FAILURE_MARKER, text, indent=indent, style="red")

    def blank(self) -> None:
        """Print an empty line."""
        self._console.print()

    def ask(self, text: str) -> str:
        """Prompt on the console and return the raw answer."""
        return self._console.input(Text(text, style="yellow"))

    def _line(self, marker: str, text: str, *, indent: int, style: str) -> None:
        line = Text(" " * indent)
        line.append(f"{marker} ", style=style)
        line.append(text, style=style)
        self._console.print(line)
