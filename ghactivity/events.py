"""Serialise fetched events and write them to the output file.

The file holds a single-key envelope::

    {
     "events": [ ... ]
    }

indented one space per level, with non-ASCII text written as UTF-8. Numbers
follow JavaScript notation: whole floats lose their fraction (``1.0`` is
written as ``1``) and non-finite floats become ``null``.
"""

from __future__ import annotations

import asyncio
import json
import math
import typing as typ
from pathlib import Path

DEFAULT_OUTPUT_PATH = Path("events.json")

# Above this magnitude JavaScript switches to exponent notation.
_MAX_PLAIN_FLOAT = 1e21


class EventsWriteError(OSError):
    """Raised when the events envelope cannot be serialised or written."""

    @classmethod
    def serialise(cls, exc: BaseException) -> EventsWriteError:
        """Return an error for events that cannot be encoded as JSON."""
        return cls(f"Could not serialise events: {exc}")

    @classmethod
    def write(cls, path: Path, exc: OSError) -> EventsWriteError:
        """Return an error for a failed file write."""
        return cls(f"Could not write {path}: {exc.strerror or exc}")

    def describe(self) -> str:
        """Render the error the same way remote failures are reported."""
        return f"Error: {type(self).__name__}, Message: {self}!"


def _js_numbers(value: typ.Any) -> typ.Any:  # noqa: ANN401
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < _MAX_PLAIN_FLOAT:
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_js_numbers(item) for item in value]
    return value


def render_events(events: typ.Sequence[typ.Any]) -> str:
    """Return the JSON envelope for ``events``."""
    try:
        return json.dumps(
            {"events": _js_numbers(list(events))}, indent=1, ensure_ascii=False
        )
    except (TypeError, ValueError) as exc:
        raise EventsWriteError.serialise(exc) from exc


async def write_events_file(
    events: typ.Sequence[typ.Any],
    path: Path = DEFAULT_OUTPUT_PATH,
) -> Path:
    """Replace ``path`` with the events envelope and return the path.

    The document is rendered before the file is touched, so an encoding
    failure leaves an existing file as it was.
    """
    document = render_events(events)
    try:
        await asyncio.to_thread(path.write_text, document, "utf-8")
    except OSError as exc:
        raise EventsWriteError.write(path, exc) from exc
    return path
