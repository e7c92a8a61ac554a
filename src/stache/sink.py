"""Output sinks.

A sink is any writable text stream. The engine never writes to it
directly: text goes through :func:`emit`, which lets the provider take
over (typically to apply escaping).
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, TextIO

from .errors import SystemFailureError, check_status

if TYPE_CHECKING:
    from .provider import Provider


def write(sink: TextIO, data: str) -> None:
    """Write verbatim, reporting OS failures as system errors."""
    try:
        sink.write(data)
    except OSError as exc:
        raise SystemFailureError(str(exc)) from exc


def emit(provider: Provider, data: str, escape: bool, sink: TextIO) -> None:
    """Send ``data`` to ``sink`` through the provider's ``emit`` if any."""
    if provider.emit is not None:
        try:
            check_status(provider.emit(data, escape, sink))
        except OSError as exc:
            raise SystemFailureError(str(exc)) from exc
    else:
        write(sink, data)


class MemoryFile:
    """Growable in-memory destination.

    Either :meth:`commit` or :meth:`abort` ends its life: the first hands
    over the text, the second throws it away.
    """

    def __init__(self) -> None:
        self.stream: TextIO = io.StringIO()

    def commit(self) -> str:
        try:
            return self.stream.getvalue()
        finally:
            self.stream.close()

    def abort(self) -> None:
        self.stream.close()

    def __enter__(self) -> "MemoryFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.stream.closed:
            self.abort()
