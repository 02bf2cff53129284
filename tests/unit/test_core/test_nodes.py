"""Unit tests for expression nodes, canonical traversal and rendering."""

import io

import pytest

from sqlchain.core.counter import PlaceholderCounter
from sqlchain.core.nodes import Expression, ListNode, NameListNode, PlaceholderNode, TextNode, tail, walk
from sqlchain.core.render import collect_arguments, count_placeholders, write_expression
from sqlchain.protocols import SupportsWrite


class FailingSink:
    """Text sink that fails after a number of successful writes."""

    def __init__(self, fail_after: int) -> None:
        self.writes: list[str] = []
        self.fail_after = fail_after

    def write(self, text: str) -> int:
        if len(self.writes) >= self.fail_after:
            msg = "disk full"
            raise OSError(msg)
        self.writes.append(text)
        return len(text)


def render(expression: Expression) -> str:
    sink = io.StringIO()
    write_expression(expression, sink)
    return sink.getvalue()


def test_text_node_renders_left_body_right() -> None:
    """Test a text node renders left neighbour, body, then right neighbour."""
    node = TextNode(" = ", left=TextNode("a"), right=TextNode("b"))
    assert render(node) == "a = b"


def test_text_node_without_children() -> None:
    """Test absent children are simply omitted."""
    assert render(TextNode(" NOT NULL ")) == " NOT NULL "
    assert render(TextNode(" = ", right=TextNode("b"))) == " = b"


def test_placeholder_renders_numbered_token() -> None:
    """Test placeholders render $N from their counter in visit order."""
    counter = PlaceholderCounter()
    node = TextNode(" = ", left=PlaceholderNode("x", counter), right=PlaceholderNode("y", counter))
    assert render(node) == "$1 = $2"
    assert counter.value == 2


def test_placeholder_renders_its_neighbours() -> None:
    """Test a clause chained after a placeholder is rendered and collected."""
    counter = PlaceholderCounter()
    placeholder = PlaceholderNode(7, counter)
    placeholder.right = TextNode(" OFFSET ", right=PlaceholderNode(8, counter))
    node = TextNode(" LIMIT ", right=placeholder)

    assert render(node) == " LIMIT $1 OFFSET $2"
    assert collect_arguments(node) == [7, 8]


def test_list_node_interleaves_separator() -> None:
    """Test list elements are joined with the separator inside the wrappers."""
    node = ListNode([TextNode("a"), TextNode("b"), TextNode("c")], ", ", left=TextNode("("), right=TextNode(")"))
    assert render(node) == "(a, b, c)"


def test_empty_list_node_renders_only_wrappers() -> None:
    """Test an empty list contributes nothing between its wrappers."""
    node = ListNode([], " AND ", left=TextNode(" ("), right=TextNode(") "))
    assert render(node) == " () "
    assert collect_arguments(node) == []


def test_name_list_node() -> None:
    """Test name lists render raw identifiers and carry no arguments."""
    node = NameListNode(["username", "first_name"], ", ", left=TextNode(" ("), right=TextNode(") "))
    assert render(node) == " (username, first_name) "
    assert collect_arguments(node) == []
    assert count_placeholders(node) == 0


def test_walk_yields_fragments_and_placeholders() -> None:
    """Test the canonical traversal order."""
    counter = PlaceholderCounter()
    placeholder = PlaceholderNode(1, counter)
    node = TextNode(" IN ", left=TextNode("h"), right=ListNode([placeholder, TextNode("2")], ", "))

    assert list(walk(node)) == ["h", " IN ", placeholder, ", ", "2"]
    assert counter.value == 0


def test_walk_rejects_unknown_node() -> None:
    """Test nodes outside the four variants are refused."""
    with pytest.raises(TypeError, match="Unsupported expression node"):
        list(walk(Expression()))


def test_collect_arguments_nested_lists() -> None:
    """Test collection follows render order inside lists of lists."""
    counter = PlaceholderCounter()
    inner = ListNode([PlaceholderNode("b", counter), PlaceholderNode("c", counter)], " OR ")
    outer = ListNode(
        [PlaceholderNode("a", counter), inner, PlaceholderNode("d", counter)],
        " AND ",
        left=PlaceholderNode("left", counter),
        right=PlaceholderNode("right", counter),
    )

    assert render(outer) == "$1$2 AND $3 OR $4 AND $5$6"
    assert collect_arguments(outer) == ["left", "a", "b", "c", "d", "right"]


def test_collect_arguments_does_not_touch_counter() -> None:
    """Test argument collection is independent of numbering."""
    counter = PlaceholderCounter()
    node = TextNode(" = ", left=TextNode("a"), right=PlaceholderNode(5, counter))
    assert collect_arguments(node) == [5]
    assert counter.value == 0


def test_write_to_returns_characters_written() -> None:
    """Test the node-level render entry point."""
    sink = io.StringIO()
    assert TextNode(" = ", left=TextNode("a"), right=TextNode("b")).write_to(sink) == 5
    assert sink.getvalue() == "a = b"


def test_sink_error_aborts_render() -> None:
    """Test a failing sink stops the render and its error propagates unchanged."""
    counter = PlaceholderCounter()
    node = ListNode([PlaceholderNode(1, counter), PlaceholderNode(2, counter), PlaceholderNode(3, counter)], ", ")
    sink = FailingSink(fail_after=2)

    with pytest.raises(OSError, match="disk full"):
        write_expression(node, sink)

    assert sink.writes == ["$1", ", "]
    assert counter.value == 2


def test_tail_follows_right_chain() -> None:
    """Test tail returns the last node reachable through right links."""
    last = TextNode("c")
    node = TextNode("a", right=TextNode("b", right=last))
    assert tail(node) is last
    assert tail(last) is last


def test_node_repr() -> None:
    """Test node representations used in debug logging."""
    counter = PlaceholderCounter()
    assert repr(TextNode(" FROM ")) == "TextNode(' FROM ')"
    assert str(TextNode("user")) == "user"
    assert repr(PlaceholderNode("x", counter)) == "PlaceholderNode('x')"
    assert repr(NameListNode(["a"], ", ")) == "NameListNode(', ', ['a'])"


def test_sinks_satisfy_write_protocol() -> None:
    assert isinstance(io.StringIO(), SupportsWrite)
    assert isinstance(FailingSink(fail_after=0), SupportsWrite)
    assert not isinstance(TextNode("a"), SupportsWrite)


def test_foreign_placeholders_use_pass_local_numbering() -> None:
    """Test only the rendering statement's counter advances when one is given."""
    own, other = PlaceholderCounter(), PlaceholderCounter()
    node = ListNode(
        [
            PlaceholderNode("a", own),
            PlaceholderNode("x", other),
            PlaceholderNode("b", own),
            PlaceholderNode("y", other),
        ],
        ", ",
    )

    for _ in range(2):
        own.reset()
        sink = io.StringIO()
        write_expression(node, sink, own)
        assert sink.getvalue() == "$1, $1, $2, $2"

    assert own.value == 2
    assert other.value == 0
