"""sqlchain: composable SQL statements with numbered positional placeholders."""

from sqlchain import core, exceptions, expressions, utils
from sqlchain.__metadata__ import __version__
from sqlchain.builder import Builder
from sqlchain.core import Expression, ListNode, NameListNode, PlaceholderCounter, PlaceholderNode, TextNode
from sqlchain.exceptions import ImproperConfigurationError, SQLBuilderError, SQLChainError
from sqlchain.expressions import (
    and_,
    as_,
    contains,
    equal,
    group,
    has_key,
    in_,
    is_,
    is_contained_by,
    list_,
    name,
    names,
    not_null,
    or_,
)

__all__ = (
    "Builder",
    "Expression",
    "ImproperConfigurationError",
    "ListNode",
    "NameListNode",
    "PlaceholderCounter",
    "PlaceholderNode",
    "SQLBuilderError",
    "SQLChainError",
    "TextNode",
    "__version__",
    "and_",
    "as_",
    "contains",
    "core",
    "equal",
    "exceptions",
    "expressions",
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
    "utils",
)
