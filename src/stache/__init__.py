"""Stache - logic-less templates over any data provider"""

from stache._version import __version__
from stache.config import RenderOptions, StacheConfig, load_config
from stache.engine import Engine, SectionStack
from stache.errors import (
    BadDelimitersError,
    BadUnescapeTagError,
    ClosingError,
    EmptyTagError,
    InvalidInterfaceError,
    ItemNotFoundError,
    PartialNotFoundError,
    ProviderError,
    StacheError,
    SystemFailureError,
    TagTooLongError,
    TooDeepError,
    UnexpectedEndError,
)
from stache.provider import Provider
from stache.render import render, render_fd, render_stream
from stache.sbuf import SBuf
from stache.scanner import Delimiters

__all__ = [
    "__version__",
    # rendering
    "render",
    "render_fd",
    "render_stream",
    "Engine",
    "SectionStack",
    "Delimiters",
    "Provider",
    "SBuf",
    # config
    "RenderOptions",
    "StacheConfig",
    "load_config",
    # errors
    "StacheError",
    "SystemFailureError",
    "UnexpectedEndError",
    "EmptyTagError",
    "TagTooLongError",
    "BadDelimitersError",
    "TooDeepError",
    "ClosingError",
    "BadUnescapeTagError",
    "InvalidInterfaceError",
    "ItemNotFoundError",
    "PartialNotFoundError",
    "ProviderError",
]
