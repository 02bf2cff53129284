"""Expression tree, rendering and supporting infrastructure."""

from sqlchain.core.config import RenderConfig, get_global_config, load_config_from_env, set_global_config
from sqlchain.core.counter import PlaceholderCounter
from sqlchain.core.nodes import Expression, ListNode, NameListNode, PlaceholderNode, TextNode, tail, walk
from sqlchain.core.render import collect_arguments, count_placeholders, write_expression

__all__ = (
    "Expression",
    "ListNode",
    "NameListNode",
    "PlaceholderCounter",
    "PlaceholderNode",
    "RenderConfig",
    "TextNode",
    "collect_arguments",
    "count_placeholders",
    "get_global_config",
    "load_config_from_env",
    "set_global_config",
    "tail",
    "walk",
    "write_expression",
)
