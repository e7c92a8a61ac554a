"""Provider for plain Python data (decoded JSON or YAML documents)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, TextIO

import msgspec
import yaml

from ..errors import ItemNotFoundError, PartialNotFoundError, SystemFailureError
from ..provider import Provider
from ..sink import write

log = logging.getLogger(__name__)

PARTIAL_SUFFIXES = ("", ".mustache")

_MISSING = object()

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}


def html_escape(text: str) -> str:
    """Escape the characters that matter in HTML text and attributes."""
    if not any(c in text for c in _HTML_ESCAPES):
        return text
    return "".join(_HTML_ESCAPES.get(c, c) for c in text)


def to_text(value: Any) -> str:
    """Text rendered for a data value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return msgspec.json.encode(value).decode("utf-8")


def truthy(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return bool(value)


@dataclass
class Context:
    """One level of the context stack."""

    value: Any
    items: Optional[Iterator[Any]] = field(default=None, repr=False)


class DataProvider(Provider):
    """Renders dicts, lists and scalars.

    Names are looked up in the context stack, innermost first. A dotted
    name walks into the first component's value; ``.`` and the empty name
    are the current value.
    """

    def __init__(
        self,
        root: Any,
        *,
        strict: bool = False,
        escape: bool = True,
        partials_path: Iterable[Path] = (),
    ):
        self.root = root
        self.strict = strict
        self.escape = escape
        self.partials_path = [Path(p) for p in partials_path]
        self.stack: list[Context] = [Context(root)]

    def start(self) -> int:
        self.stack = [Context(self.root)]
        return 0

    @property
    def current(self) -> Any:
        return self.stack[-1].value

    def lookup(self, name: str) -> Any:
        """Value of ``name``, or ``_MISSING``."""
        if name in ("", "."):
            return self.current

        first, *rest = name.split(".")
        for context in reversed(self.stack):
            value = _child(context.value, first)
            if value is not _MISSING:
                break
        else:
            return _MISSING

        for key in rest:
            value = _child(value, key)
            if value is _MISSING:
                return _MISSING
        return value

    def get(self, name: str) -> str:
        value = self.lookup(name)
        if value is _MISSING:
            if self.strict:
                raise ItemNotFoundError(name)
            log.debug(f"Missing item {name!r} rendered empty")
            return ""
        return to_text(value)

    def emit(self, data: str, escape: bool, sink: TextIO) -> None:
        if escape and self.escape:
            data = html_escape(data)
        write(sink, data)

    def enter(self, name: str) -> int:
        value = self.lookup(name)
        if value is _MISSING or not truthy(value):
            return 0
        if isinstance(value, (list, tuple)):
            items = iter(value)
            self.stack.append(Context(next(items), items))
        else:
            self.stack.append(Context(value))
        return 1

    def next(self) -> int:
        context = self.stack[-1]
        if context.items is None:
            return 0
        context.value = next(context.items, _MISSING)
        return 0 if context.value is _MISSING else 1

    def leave(self) -> None:
        self.stack.pop()

    def partial(self, name: str) -> str:
        value = self.lookup(name)
        if isinstance(value, str):
            return value
        for directory in self.partials_path:
            for suffix in PARTIAL_SUFFIXES:
                path = directory / f"{name}{suffix}"
                if path.is_file():
                    log.debug(f"Partial {name!r} loaded from {path}")
                    return _read_partial(name, path)
        raise PartialNotFoundError(name)


def _read_partial(name: str, path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise PartialNotFoundError(name) from exc
    except OSError as exc:
        raise SystemFailureError(f"Cannot read partial {path}: {exc}") from exc


def _child(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key, _MISSING)
    if isinstance(value, (list, tuple)) and key.isdecimal():
        index = int(key)
        return value[index] if index < len(value) else _MISSING
    return _MISSING


def load_data(source: str) -> Any:
    """Load a JSON or YAML document from a path, or stdin for ``-``.

    YAML is chosen by the ``.yaml``/``.yml`` suffix; anything else,
    including stdin, is decoded as JSON.
    """
    if source == "-":
        return msgspec.json.decode(sys.stdin.buffer.read())

    path = Path(source)
    raw = path.read_bytes()
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_load(raw)
    return msgspec.json.decode(raw)
