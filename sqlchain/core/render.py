"""Rendering and argument collection over the canonical traversal."""

from typing import TYPE_CHECKING, Any, Optional

from sqlchain.core.counter import PlaceholderCounter
from sqlchain.core.nodes import PlaceholderNode, walk

if TYPE_CHECKING:
    from sqlchain.core.nodes import Expression
    from sqlchain.protocols import SupportsWrite

__all__ = ("collect_arguments", "count_placeholders", "write_expression")


def write_expression(
    expression: "Expression", sink: "SupportsWrite", counter: Optional[PlaceholderCounter] = None
) -> int:
    """Write a tree's text into ``sink``, numbering placeholders as they are reached.

    Without ``counter`` each placeholder advances the counter it was created
    with. With ``counter``, only placeholders created with that counter advance
    it; placeholders of any other counter, such as those of an embedded
    subquery, are numbered by a fresh counter private to this pass so the
    other builder's state is left untouched. A failing ``sink.write`` aborts the
    render and its exception propagates unchanged.

    Args:
        expression: Root of the tree to render.
        sink: Text sink receiving the fragments.
        counter: Counter of the statement being rendered.

    Returns:
        Number of characters written.
    """
    foreign: dict[int, PlaceholderCounter] = {}
    written = 0
    for item in walk(expression):
        if isinstance(item, PlaceholderNode):
            numbering = item.counter
            if counter is not None and numbering is not counter:
                numbering = foreign.setdefault(id(numbering), PlaceholderCounter())
            text = f"${numbering.next()}"
        else:
            text = item
        sink.write(text)
        written += len(text)
    return written


def collect_arguments(expression: "Expression") -> "list[Any]":
    """Collect bound values in the order their placeholders are rendered.

    Args:
        expression: Root of the tree.

    Returns:
        Values of every placeholder, the first bound to ``$1``.
    """
    return [item.value for item in walk(expression) if isinstance(item, PlaceholderNode)]


def count_placeholders(expression: "Expression") -> int:
    return sum(1 for item in walk(expression) if isinstance(item, PlaceholderNode))
