"""Constructors for the expression trees passed to :class:`~sqlchain.builder.Builder` clauses.

Operators render with surrounding spaces and perform no operand validation::

    equal(name("id"), builder.arg(7))  # id = $1
    and_(equal(...), is_(name("x"), not_null()))  # (... AND x IS  NOT NULL )
"""

from sqlchain.core.nodes import Expression, ListNode, NameListNode, TextNode

__all__ = (
    "and_",
    "as_",
    "contains",
    "equal",
    "group",
    "has_key",
    "in_",
    "is_",
    "is_contained_by",
    "list_",
    "name",
    "names",
    "not_null",
    "or_",
)


def _binary(operator: str, left: Expression, right: Expression) -> Expression:
    return TextNode(operator, left=left, right=right)


def _wrapped(separator: str, expressions: "tuple[Expression, ...]") -> ListNode:
    return ListNode(expressions, separator, left=TextNode(" ("), right=TextNode(") "))


def name(identifier: str) -> Expression:
    """Raw identifier or literal text, rendered as-is."""
    return TextNode(identifier)


def names(*identifiers: str) -> Expression:
    """Comma separated identifiers without wrappers, e.g. a select target list."""
    return NameListNode(identifiers, ", ")


def equal(left: Expression, right: Expression) -> Expression:
    return _binary(" = ", left, right)


def is_(left: Expression, right: Expression) -> Expression:
    return _binary(" IS ", left, right)


def not_null() -> Expression:
    return TextNode(" NOT NULL ")


def contains(left: Expression, right: Expression) -> Expression:
    """Containment, ``left @> right``."""
    return _binary(" @> ", left, right)


def is_contained_by(left: Expression, right: Expression) -> Expression:
    """Contained-by, ``left <@ right``."""
    return _binary(" <@ ", left, right)


def has_key(left: Expression, right: Expression) -> Expression:
    """Key existence, ``left ? right``."""
    return _binary(" ? ", left, right)


def in_(left: Expression, right: Expression) -> Expression:
    """Membership, ``left IN right``.

    ``right`` is usually :func:`group` of placeholders, which supplies the parentheses.
    """
    return _binary(" IN ", left, right)


def as_(expression: Expression, alias: str) -> Expression:
    return _binary(" AS ", expression, TextNode(alias))


def and_(*expressions: Expression) -> Expression:
    """Parenthesized conjunction. With no operands it renders only ``()``."""
    return _wrapped(" AND ", expressions)


def or_(*expressions: Expression) -> Expression:
    """Parenthesized disjunction. With no operands it renders only ``()``."""
    return _wrapped(" OR ", expressions)


def list_(*expressions: Expression) -> Expression:
    """Comma separated expressions without wrappers."""
    return ListNode(expressions, ", ")


def group(*expressions: Expression) -> Expression:
    """Comma separated expressions inside parentheses, e.g. an IN-list or a subquery."""
    return _wrapped(", ", expressions)
