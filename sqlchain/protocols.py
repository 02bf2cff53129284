"""Runtime-checkable protocols used at the library's seams."""

from typing import Protocol, runtime_checkable

__all__ = ("SupportsWrite",)


@runtime_checkable
class SupportsWrite(Protocol):
    """Text sink a statement can be rendered into, e.g. ``io.StringIO`` or an open text file."""

    def write(self, text: str, /) -> int: ...
