"""Render entry points.

Three destinations, one engine:

    render_stream(template, provider, stream)   caller-owned text stream
    render_fd(template, provider, fd)           OS file descriptor
    render(template, provider) -> str           in-memory result

Only ``render_stream`` can leave partial output behind on error, since the
stream belongs to the caller. The other two build the output in memory
and drop it when the render fails.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

from .config import RenderOptions
from .engine import Engine
from .errors import SystemFailureError
from .provider import Provider
from .sink import MemoryFile

log = logging.getLogger(__name__)


def render_stream(
    template: str,
    provider: Provider,
    stream: TextIO,
    options: RenderOptions | None = None,
) -> None:
    """Render ``template`` into ``stream``.

    Raises:
        StacheError: If rendering fails. Text written so far stays in
            ``stream``.
    """
    log.debug(f"Rendering {len(template)} chars to stream")
    Engine(provider, stream, options).run(template)


def render(
    template: str,
    provider: Provider,
    options: RenderOptions | None = None,
) -> str:
    """Render ``template`` and return the result.

    Raises:
        StacheError: If rendering fails. No partial result is kept.
    """
    with MemoryFile() as memfile:
        render_stream(template, provider, memfile.stream, options)
        return memfile.commit()


def render_fd(
    template: str,
    provider: Provider,
    fd: int,
    options: RenderOptions | None = None,
) -> None:
    """Render ``template`` and write the result to the descriptor ``fd``.

    The output reaches ``fd`` only when the render succeeds. The
    descriptor is left open.
    """
    data = render(template, provider, options).encode("utf-8")
    try:
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError as exc:
        raise SystemFailureError(str(exc)) from exc
