"""Expression tree nodes and their canonical traversal order.

A statement is a tree of four node variants. Every node carries ``left`` and
``right`` neighbours; for :class:`ListNode` and :class:`NameListNode` those
neighbours are wrapper text (for example the parentheses of a conjunction) and
the real children live in a separate ordered collection.

:func:`walk` defines the one order in which nodes are visited. Rendering and
argument collection both consume it, which keeps the Nth collected value bound
to the placeholder rendered as ``$N``.
"""

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from sqlchain.core.counter import PlaceholderCounter
    from sqlchain.protocols import SupportsWrite

__all__ = (
    "Expression",
    "ListNode",
    "NameListNode",
    "PlaceholderNode",
    "TextNode",
    "tail",
    "walk",
)


class Expression:
    """Base class of every expression tree node."""

    __slots__ = ("left", "right")

    def __init__(self, left: "Optional[Expression]" = None, right: "Optional[Expression]" = None) -> None:
        self.left = left
        self.right = right

    def write_to(self, sink: "SupportsWrite") -> int:
        """Render this node and everything reachable from it into ``sink``.

        Args:
            sink: Text sink receiving the rendered fragments.

        Returns:
            Number of characters written.
        """
        from sqlchain.core.render import write_expression

        return write_expression(self, sink)


class TextNode(Expression):
    """Fixed literal text: a keyword, operator or identifier."""

    __slots__ = ("body",)

    def __init__(self, body: str, left: Optional[Expression] = None, right: Optional[Expression] = None) -> None:
        super().__init__(left, right)
        self.body = body

    def __repr__(self) -> str:
        return f"TextNode({self.body!r})"

    def __str__(self) -> str:
        return self.body


class PlaceholderNode(Expression):
    """A bound value rendered as a numbered ``$N`` token.

    The counter is the one owned by the builder that created the placeholder, so
    a subquery embedded from another builder keeps its own numbering.
    """

    __slots__ = ("counter", "value")

    def __init__(
        self,
        value: Any,
        counter: "PlaceholderCounter",
        left: Optional[Expression] = None,
        right: Optional[Expression] = None,
    ) -> None:
        super().__init__(left, right)
        self.value = value
        self.counter = counter

    def __repr__(self) -> str:
        return f"PlaceholderNode({self.value!r})"


class ListNode(Expression):
    """Ordered child expressions joined by a separator, optionally wrapped."""

    __slots__ = ("expressions", "separator")

    def __init__(
        self,
        expressions: Sequence[Expression],
        separator: str,
        left: Optional[Expression] = None,
        right: Optional[Expression] = None,
    ) -> None:
        super().__init__(left, right)
        self.expressions = list(expressions)
        self.separator = separator

    def __repr__(self) -> str:
        return f"ListNode({self.separator!r}, {self.expressions!r})"


class NameListNode(Expression):
    """Ordered raw identifiers joined by a separator, optionally wrapped."""

    __slots__ = ("names", "separator")

    def __init__(
        self,
        names: Sequence[str],
        separator: str,
        left: Optional[Expression] = None,
        right: Optional[Expression] = None,
    ) -> None:
        super().__init__(left, right)
        self.names = list(names)
        self.separator = separator

    def __repr__(self) -> str:
        return f"NameListNode({self.separator!r}, {self.names!r})"


def walk(expression: Expression) -> Iterator[Union[str, PlaceholderNode]]:
    """Visit a tree in canonical order.

    Left neighbour first, then the node's own contribution, then the right
    neighbour. A node's own contribution is its text, itself for a placeholder,
    or its elements interleaved with the separator for the list variants.

    Args:
        expression: Root of the tree to visit.

    Yields:
        Text fragments and placeholder nodes, in render order.
    """
    if expression.left is not None:
        yield from walk(expression.left)

    if isinstance(expression, TextNode):
        yield expression.body
    elif isinstance(expression, PlaceholderNode):
        yield expression
    elif isinstance(expression, ListNode):
        for index, element in enumerate(expression.expressions):
            if index:
                yield expression.separator
            yield from walk(element)
    elif isinstance(expression, NameListNode):
        for index, name in enumerate(expression.names):
            if index:
                yield expression.separator
            yield name
    else:
        msg = f"Unsupported expression node: {type(expression).__name__}"
        raise TypeError(msg)

    if expression.right is not None:
        yield from walk(expression.right)


def tail(expression: Expression) -> Expression:
    """Follow the chain of right neighbours to its last node.

    Args:
        expression: Node to start from.

    Returns:
        The last node reachable through ``right`` links.
    """
    node = expression
    while node.right is not None:
        node = node.right
    return node
