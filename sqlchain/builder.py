"""Fluent statement builder.

A :class:`Builder` owns one statement tree, the append cursor into it, the
placeholder counter shared by every :meth:`Builder.arg`, and the cached
rendered text. Every clause method builds a small labelled subtree and hands it
to :meth:`Builder.splice`.

Rendering is cached: the first :meth:`Builder.render` walks the tree and stores
the text, later calls return the stored text without advancing the counter,
even if clauses were added in between. Call :meth:`Builder.reset` to render
again from ``$1``.
"""

import io
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ContextManager, NoReturn, Optional

from typing_extensions import Self

from sqlchain.core._pool import get_buffer_pool
from sqlchain.core.config import get_global_config
from sqlchain.core.counter import PlaceholderCounter
from sqlchain.core.nodes import Expression, ListNode, NameListNode, PlaceholderNode, TextNode, tail
from sqlchain.core.render import collect_arguments, write_expression
from sqlchain.exceptions import SQLBuilderError
from sqlchain.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlchain.protocols import SupportsWrite

__all__ = ("Builder",)

logger = get_logger("sqlchain.builder")


@dataclass(eq=False)
class Builder:
    """Builds one SQL statement with ``$N`` positional placeholders.

    Example::

        b = Builder()
        b.select(name("*")).from_(name("user")).where(equal(name("id"), b.arg(5)))
        b.render()  # 'SELECT * FROM user WHERE id = $1'
        b.args()  # [5]
    """

    _root: Optional[Expression] = field(default=None, init=False, repr=False, compare=False, hash=False)
    _cursor: Optional[Expression] = field(default=None, init=False, repr=False, compare=False, hash=False)
    _counter: PlaceholderCounter = field(
        default_factory=PlaceholderCounter, init=False, repr=False, compare=False, hash=False
    )
    _rendered: Optional[str] = field(default=None, init=False, repr=False, compare=False, hash=False)

    @staticmethod
    def _raise_sql_builder_error(message: str, cause: Optional[BaseException] = None) -> NoReturn:
        """Helper to raise SQLBuilderError, potentially with a cause.

        Args:
            message: The error message.
            cause: The optional original exception to chain.

        Raises:
            SQLBuilderError: Always raises this exception.
        """
        raise SQLBuilderError(message) from cause

    @property
    def counter(self) -> PlaceholderCounter:
        return self._counter

    @property
    def cursor(self) -> Optional[Expression]:
        """Node the next clause will be attached to."""
        return self._cursor

    @property
    def is_rendered(self) -> bool:
        return self._rendered is not None

    def _require_root(self) -> Expression:
        if self._root is None:
            self._raise_sql_builder_error("No statement started. Call select() or insert() first.")
        return self._root

    def _start(self, root: Expression, cursor: Expression) -> Self:
        self._root = root
        self._cursor = cursor
        logger.debug("Started statement with %r", root)
        return self

    @staticmethod
    def _operand(expression: Expression) -> ListNode:
        """Hold a caller's expression in a node owned by this builder.

        Later clauses attach to the holder, so the caller's tree, possibly the
        root of another builder, is never modified.
        """
        return ListNode((expression,), "")

    def splice(self, subtree: Expression, cursor: Optional[Expression] = None) -> Self:
        """Attach ``subtree`` after the cursor and move the cursor.

        Args:
            subtree: Tree to attach as the right neighbour of the current cursor.
            cursor: Node to continue from. Defaults to the last node of the
                subtree's chain of right neighbours.

        Returns:
            The current builder instance for method chaining.
        """
        if self._cursor is None:
            self._raise_sql_builder_error("Cannot append a clause before select() or insert().")
        self._cursor.right = subtree
        self._cursor = cursor if cursor is not None else tail(subtree)
        return self

    def arg(self, value: Any) -> PlaceholderNode:
        """Create a placeholder numbered by this builder.

        Args:
            value: Value bound to the placeholder.

        Returns:
            Placeholder node to use inside any expression of this statement.
        """
        return PlaceholderNode(value, self._counter)

    def select(self, expression: Expression) -> Self:
        """Start a ``SELECT`` statement, replacing any previous tree.

        Args:
            expression: Select target, e.g. ``names("a", "b")`` or ``name("*")``.

        Returns:
            The current builder instance for method chaining.
        """
        operand = self._operand(expression)
        return self._start(TextNode(" SELECT ", right=operand), operand)

    def insert(self) -> Self:
        """Start an ``INSERT`` statement, replacing any previous tree."""
        root = TextNode(" INSERT ")
        return self._start(root, root)

    def into(self, table: str) -> Self:
        return self.splice(TextNode(" INTO ", right=TextNode(table)))

    def columns(self, *names: str) -> Self:
        """Append a parenthesized column list, e.g. ``(username, first_name)``."""
        return self.splice(NameListNode(names, ", ", left=TextNode(" ("), right=TextNode(") ")))

    def values(self, *args: Any) -> Self:
        """Append a ``VALUES(...)`` tuple with one placeholder per value."""
        placeholders = [self.arg(value) for value in args]
        return self.splice(ListNode(placeholders, ", ", left=TextNode(" VALUES("), right=TextNode(") ")))

    def from_(self, expression: Expression) -> Self:
        return self.splice(TextNode(" FROM ", right=self._operand(expression)))

    def where(self, expression: Expression) -> Self:
        return self.splice(TextNode(" WHERE ", right=self._operand(expression)))

    def group_by(self, *names: str) -> Self:
        return self.splice(TextNode(" GROUP BY ", right=NameListNode(names, ", ")))

    def having(self, expression: Expression) -> Self:
        return self.splice(TextNode(" HAVING ", right=self._operand(expression)))

    def order_by(self, *names: str) -> Self:
        return self.splice(TextNode(" ORDER BY ", right=NameListNode(names, ", ")))

    def limit(self, limit: int) -> Self:
        return self.splice(TextNode(" LIMIT ", right=self.arg(limit)))

    def offset(self, offset: int) -> Self:
        return self.splice(TextNode(" OFFSET ", right=self.arg(offset)))

    def distinct(self) -> Self:
        return self.splice(TextNode(" DISTINCT "))

    def expr(self) -> Expression:
        """Root of the statement tree, for embedding this statement in another one.

        Placeholders of the embedded tree are numbered from ``$1`` by every
        render of the outer statement; this builder's counter is not touched.
        """
        return self._require_root()

    def render(self) -> str:
        """Render the statement text, using the cached text when present.

        Returns:
            Statement text with surrounding whitespace trimmed.
        """
        if self._rendered is not None:
            return self._rendered

        root = self._require_root()
        config = get_global_config()
        scratch: ContextManager[io.StringIO] = (
            get_buffer_pool().buffer() if config.enable_buffer_pool else nullcontext(io.StringIO())
        )
        with scratch as buffer:
            write_expression(root, buffer, self._counter)
            text = buffer.getvalue().strip()

        self._rendered = text
        if config.log_renders:
            logger.debug(
                "Rendered statement",
                extra={"extra_fields": {"placeholders": self._counter.value, "length": len(text)}},
            )
        return text

    def write_to(self, sink: "SupportsWrite") -> int:
        """Write the rendered statement text to ``sink``.

        Args:
            sink: Text sink, e.g. an open file.

        Returns:
            Number of characters written.
        """
        text = self.render()
        sink.write(text)
        return len(text)

    def args(self) -> "list[Any]":
        """Bound values, the first one bound to ``$1``.

        Collected from the tree independently of the render cache.
        """
        return collect_arguments(self._require_root())

    def dump(self) -> str:
        """Human-readable listing of the statement text and its numbered arguments."""
        lines = [f"query: {self.render()} "]
        lines.extend(f"arg: {index:<5d} {value!r} " for index, value in enumerate(self.args(), start=1))
        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Forget the rendered text and restart placeholder numbering. The tree is kept."""
        self._rendered = None
        self._counter.reset()
        logger.debug("Builder reset")

    def __str__(self) -> str:
        return self.render()
