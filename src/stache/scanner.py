"""Tag scanner.

Finds the next tag of a template with the active delimiters and turns its
body into a :class:`Tag`. The scanner knows nothing about sections or
providers; it only reports what it found and where scanning resumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import (
    BadDelimitersError,
    BadUnescapeTagError,
    EmptyTagError,
    TagTooLongError,
    UnexpectedEndError,
)

NAME_LENGTH_MAX = 1024


@dataclass(frozen=True)
class Delimiters:
    """The open/close strings of tags."""

    open: str = "{{"
    close: str = "}}"

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise BadDelimitersError("Delimiters must not be empty")


class TagKind(str, Enum):
    COMMENT = "!"
    DELIMITERS = "="
    SECTION = "#"
    INVERTED = "^"
    CLOSE = "/"
    PARTIAL = ">"
    RAW = "&"
    VALUE = ""


SIGILS = {
    "#": TagKind.SECTION,
    "^": TagKind.INVERTED,
    "/": TagKind.CLOSE,
    ">": TagKind.PARTIAL,
    "&": TagKind.RAW,
}


@dataclass(frozen=True)
class Tag:
    kind: TagKind
    name: str = ""
    delimiters: Optional[Delimiters] = None

    @property
    def escape(self) -> bool:
        return self.kind is TagKind.VALUE


@dataclass(frozen=True)
class Match:
    """Result of one scanner step.

    ``text`` is the literal run before the tag, ``tag`` is None when the
    template has no more tags, ``end`` is where scanning resumes.
    """

    text: str
    tag: Optional[Tag]
    end: int


class Scanner:
    """Splits a template into literal runs and tags."""

    def __init__(self, allow_empty_tag: bool = True, colon_extension: bool = True):
        self.allow_empty_tag = allow_empty_tag
        self.colon_extension = colon_extension

    def scan(self, template: str, pos: int, delimiters: Delimiters) -> Match:
        """Find the next tag of ``template`` at or after ``pos``."""
        start = template.find(delimiters.open, pos)
        if start < 0:
            return Match(template[pos:], None, len(template))

        text = template[pos:start]
        begin = start + len(delimiters.open)
        term = template.find(delimiters.close, begin)
        if term < 0:
            raise UnexpectedEndError(f"Unterminated tag at offset {start}")
        end = term + len(delimiters.close)
        body = template[begin:term]

        sigil = body[:1]
        if sigil == "!":
            return Match(text, Tag(TagKind.COMMENT), end)
        if sigil == "=":
            return Match(text, self._delimiters(body), end)

        if sigil == "{":
            body, end = self._unbrace(template, body, end, delimiters)
            kind = TagKind.RAW
            body = body[1:]
        elif sigil in SIGILS:
            kind = SIGILS[sigil]
            body = body[1:]
        elif sigil == ":" and self.colon_extension:
            kind = TagKind.VALUE
            body = body[1:]
        else:
            kind = TagKind.VALUE

        return Match(text, Tag(kind, self._name(body)), end)

    def _name(self, body: str) -> str:
        name = body.strip()
        if not name and not self.allow_empty_tag:
            raise EmptyTagError()
        if len(name) > NAME_LENGTH_MAX:
            raise TagTooLongError(len(name))
        return name

    @staticmethod
    def _unbrace(
        template: str, body: str, end: int, delimiters: Delimiters
    ) -> tuple[str, int]:
        # With a close delimiter made only of '}', the extra brace follows it
        # ("{{{x}}}"); otherwise it ends the body ("<%{x}%>").
        if delimiters.close.strip("}"):
            if len(body) < 2 or body[-1] != "}":
                raise BadUnescapeTagError()
            return body[:-1], end
        if template[end : end + 1] != "}":
            raise BadUnescapeTagError()
        return body, end + 1

    @staticmethod
    def _delimiters(body: str) -> Tag:
        if len(body) < 5 or body[-1] != "=":
            raise BadDelimitersError(f"Malformed delimiter tag: {body!r}")
        tokens = body[1:-1].split()
        if len(tokens) != 2:
            raise BadDelimitersError(f"Expected two delimiters in {body!r}")
        opening, closing = tokens
        return Tag(TagKind.DELIMITERS, delimiters=Delimiters(opening, closing))
