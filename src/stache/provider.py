"""Data provider interface.

A provider is the bridge between the engine and a data model. Only the
section operations are mandatory; the others are optional capabilities,
left as ``None`` on this base class. A subclass provides a capability by
defining the method, and the engine checks ``provider.<name> is not None``
before using it.

Capabilities:
    start()                     called once before rendering
    get(name)                   value of ``name`` as an SBuf or a str
    put(name, escape, sink)     write the value of ``name`` to ``sink``
    partial(name)               template text of the partial ``name``
    emit(data, escape, sink)    write raw text to ``sink``

Status convention: a negative integer return is an error code, any other
return (including ``None``) is success. Raising a ``StacheError`` works
as well.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional, TextIO, Union

from .sbuf import SBuf

Value = Union[SBuf, str]


class Provider(ABC):
    """Abstract base class for data providers."""

    OPTIONAL: ClassVar[tuple[str, ...]] = ("start", "get", "put", "partial", "emit")

    start: Optional[Callable[[], Optional[int]]] = None
    get: Optional[Callable[[str], Value]] = None
    put: Optional[Callable[[str, bool, TextIO], Optional[int]]] = None
    partial: Optional[Callable[[str], Value]] = None
    emit: Optional[Callable[[str, bool, TextIO], Optional[int]]] = None

    def provides(self, capability: str) -> bool:
        """Whether the optional ``capability`` is implemented."""
        if capability not in self.OPTIONAL:
            raise ValueError(f"Unknown capability: {capability}")
        return getattr(self, capability) is not None

    @abstractmethod
    def enter(self, name: str) -> int:
        """Enter the section ``name``.

        Returns:
            Zero when the section is falsy or empty, a positive value when
            its body should render.
        """

    @abstractmethod
    def next(self) -> int:
        """Advance the innermost entered section.

        Returns:
            A positive value to render the body again, zero to stop.
        """

    @abstractmethod
    def leave(self) -> None:
        """Close the innermost entered section."""
