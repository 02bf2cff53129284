"""Placeholder numbering shared by the placeholders of one statement."""

from mypy_extensions import mypyc_attr

__all__ = ("PlaceholderCounter",)


@mypyc_attr(allow_interpreted_subclasses=False)
class PlaceholderCounter:
    """Monotonic 1-based sequence for ``$N`` placeholder tokens.

    Not synchronized. A counter belongs to a single builder and is advanced only
    while that builder's tree is rendered.
    """

    __slots__ = ("_index",)

    def __init__(self) -> None:
        self._index = 0

    def __repr__(self) -> str:
        return f"PlaceholderCounter(value={self._index})"

    @property
    def value(self) -> int:
        """The last number handed out, ``0`` before the first call to :meth:`next`."""
        return self._index

    def next(self) -> int:
        self._index += 1
        return self._index

    def reset(self) -> None:
        self._index = 0
