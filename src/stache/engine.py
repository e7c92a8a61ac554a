"""Rendering engine.

The engine drives the scanner over a template and reacts to each tag:
literal text and values go to the sink, section tags move the section
stack, partial tags recurse into a fresh scan of the partial's text.

Nothing here is shared between renders: an :class:`Engine` holds the
provider, the sink and the options of one render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TextIO

from . import sink as sinks
from .config import RenderOptions
from .errors import (
    ClosingError,
    InvalidInterfaceError,
    SystemFailureError,
    TooDeepError,
    UnexpectedEndError,
    check_status,
)
from .provider import Provider
from .sbuf import SBuf
from .scanner import Delimiters, Scanner, TagKind

log = logging.getLogger(__name__)

DEPTH_MAX = 256


@dataclass
class Frame:
    """An open section."""

    name: str
    again: int
    enabled: bool
    entered: bool


class SectionStack:
    """Open sections of one template, innermost last.

    The capacity is fixed; opening one more section than it allows is an
    error, not a reallocation.
    """

    def __init__(self, capacity: int = DEPTH_MAX):
        self.capacity = capacity
        self._frames: list[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def reserve(self) -> None:
        """Fail if no more section can be opened."""
        if len(self._frames) >= self.capacity:
            raise TooDeepError(f"More than {self.capacity} nested sections")

    def push(self, frame: Frame) -> None:
        self.reserve()
        self._frames.append(frame)

    def pop(self, name: str) -> Frame:
        """Remove the innermost frame, which must be named ``name``."""
        if not self._frames:
            raise ClosingError(name)
        frame = self._frames.pop()
        if frame.name != name:
            raise ClosingError(name, frame.name)
        return frame


class Engine:
    """Renders templates for one provider into one sink."""

    def __init__(
        self,
        provider: Provider,
        sink: TextIO,
        options: RenderOptions | None = None,
    ):
        self.provider = provider
        self.sink = sink
        self.options = options or RenderOptions()
        self.scanner = Scanner(
            allow_empty_tag=self.options.allow_empty_tag,
            colon_extension=self.options.colon_extension,
        )

    def run(self, template: str) -> None:
        """Call the provider's start hook, then render ``template``."""
        if self.provider.start is not None:
            check_status(self.provider.start())
        self.process(template, Delimiters(*self.options.delimiters))

    def process(self, template: str, delimiters: Delimiters, level: int = 0) -> None:
        """Scan ``template`` to the end.

        Args:
            template: Template text.
            delimiters: Delimiters active when the scan starts.
            level: How many partials enclose this template.

        Raises:
            StacheError: On the first structural or provider error.
        """
        stack = SectionStack()
        enabled = True
        pos = 0

        while True:
            match = self.scanner.scan(template, pos, delimiters)
            if enabled and match.text:
                self.emit(match.text, False)
            tag = match.tag
            if tag is None:
                if stack:
                    raise UnexpectedEndError(f"{len(stack)} section(s) left open")
                return
            pos = match.end

            if tag.kind is TagKind.COMMENT:
                continue

            if tag.kind is TagKind.DELIMITERS:
                delimiters = tag.delimiters
                continue

            if tag.kind in (TagKind.SECTION, TagKind.INVERTED):
                stack.reserve()
                entered = False
                if enabled:
                    entered = check_status(self.provider.enter(tag.name)) > 0
                    log.debug(f"Section {tag.name!r} entered={entered}")
                stack.push(Frame(tag.name, pos, enabled, entered))
                if (tag.kind is TagKind.SECTION) != entered:
                    enabled = False
                continue

            if tag.kind is TagKind.CLOSE:
                frame = stack.pop(tag.name)
                again = 0
                if enabled and frame.entered:
                    again = check_status(self.provider.next())
                if again:
                    pos = frame.again
                    stack.push(frame)
                else:
                    enabled = frame.enabled
                    if enabled and frame.entered:
                        log.debug(f"Section {tag.name!r} left")
                        check_status(self.provider.leave())
                continue

            if not enabled:
                continue

            if tag.kind is TagKind.PARTIAL:
                self.partial(tag.name, delimiters, level)
            else:
                self.put(tag.name, tag.escape, self.sink)

    def emit(self, data: str, escape: bool) -> None:
        sinks.emit(self.provider, data, escape, self.sink)

    def put(self, name: str, escape: bool, sink: TextIO) -> None:
        """Substitute the value of ``name`` into ``sink``."""
        provider = self.provider
        if provider.put is not None:
            try:
                check_status(provider.put(name, escape, sink))
            except OSError as exc:
                raise SystemFailureError(str(exc)) from exc
        elif provider.get is not None:
            with _value(provider.get(name)) as sbuf:
                sinks.emit(provider, sbuf.value, escape, sink)
        else:
            raise InvalidInterfaceError("Provider has neither get nor put")

    def resolve_partial(self, name: str) -> SBuf:
        """Template text of the partial ``name``.

        Uses the provider's ``partial``, else its ``get``, else captures
        what its ``put`` writes.
        """
        provider = self.provider
        if provider.partial is not None:
            return _value(provider.partial(name))
        if provider.get is not None:
            return _value(provider.get(name))
        return self.capture(name)

    def capture(self, name: str) -> SBuf:
        """Render the value of ``name`` unescaped into an owned buffer."""
        memfile = sinks.MemoryFile()
        try:
            self.put(name, False, memfile.stream)
        except BaseException:
            memfile.abort()
            raise
        text = memfile.stream.getvalue()
        log.debug(f"Captured partial {name!r} ({len(text)} chars)")
        return SBuf(value=text, free=lambda value: memfile.abort())

    def partial(self, name: str, delimiters: Delimiters, level: int) -> None:
        if level >= self.options.partial_depth_max:
            raise TooDeepError(
                f"Partial {name!r} nested more than "
                f"{self.options.partial_depth_max} levels"
            )
        with self.resolve_partial(name) as sbuf:
            log.debug(f"Expanding partial {name!r} at level {level + 1}")
            self.process(sbuf.value, delimiters, level + 1)


def _value(result: SBuf | str | int | None) -> SBuf:
    """Handle for a ``get`` or ``partial`` result; negative ints are statuses."""
    if isinstance(result, int) and not isinstance(result, bool):
        check_status(result)
    return SBuf.wrap(result)
