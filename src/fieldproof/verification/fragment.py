"""Minimal HTML fragment tree.

Remote profile values arrive as markup that was already sanitized by the
remote renderer. This module only needs to turn that markup into a tree of
element and text nodes so link checks can reason about structure instead
of pattern-matching raw strings. It is not a general HTML parser: there is
no implied-tag insertion, no foster parenting and no scripting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html.parser import HTMLParser

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass
class TextNode:
    """A run of character data, with entities already decoded."""

    text: str
    parent: ElementNode | None = field(default=None, repr=False, compare=False)


@dataclass
class CommentNode:
    """A comment. Contributes no text, but still occupies a place in the tree."""

    text: str
    parent: ElementNode | None = field(default=None, repr=False, compare=False)


@dataclass
class ElementNode:
    """An element with its attributes and children.

    Attribute names are lower-cased; a repeated attribute keeps its first
    value, as browsers do. Valueless attributes map to ``""``.
    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    parent: ElementNode | None = field(default=None, repr=False, compare=False)

    @property
    def classes(self) -> frozenset[str]:
        """Whitespace-separated tokens of the ``class`` attribute."""
        return frozenset(self.attrs.get("class", "").split())

    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(node.text for node in iter_text(self))


Node = TextNode | CommentNode | ElementNode


def iter_text(node: Node):
    """Yield descendant text nodes of ``node`` in document order."""
    if isinstance(node, TextNode):
        yield node
        return
    if isinstance(node, CommentNode):
        return
    for child in node.children:
        yield from iter_text(child)


class _FragmentBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.roots: list[Node] = []
        self._open: list[ElementNode] = []

    def _append(self, node: Node) -> None:
        if self._open:
            node.parent = self._open[-1]
            self._open[-1].children.append(node)
        else:
            self.roots.append(node)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        values: dict[str, str] = {}
        for name, value in attrs:
            values.setdefault(name, value or "")
        element = ElementNode(tag=tag, attrs=values)
        self._append(element)
        if tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag not in VOID_ELEMENTS:
            self._open.pop()

    def handle_endtag(self, tag: str) -> None:
        # Close up to the nearest matching open element; stray end tags are dropped
        for depth in range(len(self._open) - 1, -1, -1):
            if self._open[depth].tag == tag:
                del self._open[depth:]
                return

    def handle_data(self, data: str) -> None:
        if not data:
            return
        parent_children = self._open[-1].children if self._open else self.roots
        if parent_children and isinstance(parent_children[-1], TextNode):
            parent_children[-1].text += data
        else:
            self._append(TextNode(text=data))

    def handle_comment(self, data: str) -> None:
        self._append(CommentNode(text=data))


def parse_fragment(html: str) -> list[Node]:
    """Parse ``html`` into its top-level nodes.

    Comments are kept as nodes; doctypes and processing instructions are
    discarded. Elements left open at the end of input are closed implicitly.
    """
    builder = _FragmentBuilder()
    builder.feed(html)
    builder.close()
    return builder.roots
