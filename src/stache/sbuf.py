"""Buffer handles for values handed to the engine by providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class SBuf:
    """A string value plus the hooks that end its lifetime.

    ``release`` notifies the provider that the value has been consumed and
    runs for every handle. ``free`` runs only for handles that own their
    storage, e.g. text captured from a provider's ``put``. A handle with
    neither hook is a value borrowed for the duration of one operation.
    """

    value: str = ""
    release: Optional[Callable[[str], None]] = None
    free: Optional[Callable[[str], None]] = None
    _closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def wrap(cls, value: "SBuf | str | None") -> "SBuf":
        """Coerce a provider return value to a handle."""
        if isinstance(value, SBuf):
            return value
        return cls(value="" if value is None else str(value))

    @property
    def owned(self) -> bool:
        return self.free is not None

    def close(self) -> None:
        """Run the hooks, once."""
        if self._closed:
            return
        self._closed = True
        try:
            if self.release is not None:
                self.release(self.value)
        finally:
            if self.free is not None:
                self.free(self.value)

    def __enter__(self) -> "SBuf":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
