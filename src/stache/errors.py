"""Stache Exceptions

Every failure of a render is one of these. Each kind keeps the numeric
code of the classic C API so providers may still signal errors by
returning a negative integer.
"""

from __future__ import annotations


class StacheError(Exception):
    """Base exception for all stache errors."""

    code: int = 0
    label: str = "unknown"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.label)


class SystemFailureError(StacheError):
    """Raised when writing or capturing output fails at the OS level."""

    code = -1
    label = "system"


class UnexpectedEndError(StacheError):
    """Raised when the template ends inside a tag or an open section."""

    code = -2
    label = "unexpected end"


class EmptyTagError(StacheError):
    """Raised for a tag with an empty name when empty tags are rejected."""

    code = -3
    label = "empty tag"


class TagTooLongError(StacheError):
    """Raised when a tag name exceeds the maximum length."""

    code = -4
    label = "tag too long"

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Tag name too long: {length} characters")


class BadDelimitersError(StacheError):
    """Raised for a malformed delimiter redefinition tag."""

    code = -5
    label = "bad separators"


class TooDeepError(StacheError):
    """Raised when sections or partials nest too deeply."""

    code = -6
    label = "too depth"


class ClosingError(StacheError):
    """Raised for a closing tag that does not match the open section."""

    code = -7
    label = "closing"

    def __init__(self, name: str, expected: str | None = None):
        self.name = name
        self.expected = expected
        if expected is None:
            message = f"Closing tag without open section: {name}"
        else:
            message = f"Closing tag {name!r} does not match section {expected!r}"
        super().__init__(message)


class BadUnescapeTagError(StacheError):
    """Raised for a triple-brace tag with unbalanced braces."""

    code = -8
    label = "bad unescape tag"


class InvalidInterfaceError(StacheError):
    """Raised when the provider lacks a capability the template needs."""

    code = -9
    label = "invalid interface"


class ItemNotFoundError(StacheError):
    """Raised by providers when a name cannot be resolved."""

    code = -10
    label = "item not found"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Item not found: {name}")


class PartialNotFoundError(StacheError):
    """Raised by providers when a partial cannot be resolved."""

    code = -11
    label = "partial not found"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Partial not found: {name}")


class ProviderError(StacheError):
    """Raised for a negative provider status with no known meaning."""

    label = "provider"

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Provider failed with status {code}")


_SIMPLE_ERRORS: dict[int, type[StacheError]] = {
    cls.code: cls
    for cls in (
        SystemFailureError,
        UnexpectedEndError,
        EmptyTagError,
        BadDelimitersError,
        TooDeepError,
        BadUnescapeTagError,
        InvalidInterfaceError,
    )
}


def error_for_code(code: int) -> StacheError:
    """Build the exception matching a negative status code."""
    if code in _SIMPLE_ERRORS:
        return _SIMPLE_ERRORS[code]()
    if code == TagTooLongError.code:
        return TagTooLongError(0)
    if code == ClosingError.code:
        return ClosingError("")
    if code == ItemNotFoundError.code:
        return ItemNotFoundError("")
    if code == PartialNotFoundError.code:
        return PartialNotFoundError("")
    return ProviderError(code)


def check_status(status: int | None) -> int:
    """Return a provider status, raising if it is negative.

    ``None`` counts as success so providers can simply not return.
    """
    if status is None:
        return 0
    if status < 0:
        raise error_for_code(status)
    return status
