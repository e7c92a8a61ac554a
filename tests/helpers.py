"""Scripted providers shared by the tests."""

from __future__ import annotations

from typing import TextIO

from stache import Provider, SBuf


class ScriptedProvider(Provider):
    """Provider driven by plain dicts, recording every call.

    ``sections`` maps a name to how many times its body renders (0 is
    falsy). ``values`` and ``partials`` map names to text.
    """

    def __init__(self, values=None, sections=None, partials=None):
        self.values = dict(values or {})
        self.sections = dict(sections or {})
        self.partials = dict(partials or {})
        self.calls: list[tuple] = []
        self.remaining: list[int] = []
        self.released: list[str] = []

    def enter(self, name: str) -> int:
        self.calls.append(("enter", name))
        count = self.sections.get(name, 0)
        if count <= 0:
            return 0
        self.remaining.append(count - 1)
        return 1

    def next(self) -> int:
        self.calls.append(("next",))
        if self.remaining[-1] > 0:
            self.remaining[-1] -= 1
            return 1
        return 0

    def leave(self) -> None:
        self.calls.append(("leave",))
        self.remaining.pop()

    def get(self, name: str) -> SBuf:
        self.calls.append(("get", name))
        return SBuf(self.values.get(name, ""), release=self.released.append)

    def partial(self, name: str) -> str:
        self.calls.append(("partial", name))
        return self.partials[name]


class RecordingEmitProvider(ScriptedProvider):
    """Records the escape flag of every write."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.emitted: list[tuple[str, bool]] = []

    def emit(self, data: str, escape: bool, sink: TextIO) -> None:
        self.emitted.append((data, escape))
        sink.write(data)


class PutOnlyProvider(Provider):
    """Provider exposing ``put`` but neither ``get`` nor ``partial``."""

    def __init__(self, values):
        self.values = values
        self.escapes: list[bool] = []

    def enter(self, name: str) -> int:
        return 0

    def next(self) -> int:
        return 0

    def leave(self) -> None:
        pass

    def put(self, name: str, escape: bool, sink: TextIO) -> int:
        self.escapes.append(escape)
        if name not in self.values:
            return -10
        sink.write(self.values[name])
        return 0


class BareProvider(Provider):
    """Provider with only the section operations."""

    def enter(self, name: str) -> int:
        return 0

    def next(self) -> int:
        return 0

    def leave(self) -> None:
        pass
