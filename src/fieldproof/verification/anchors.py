"""Sole-link extraction from remote field values.

A remote renderer turns a bare URL into markup like::

    <a href="https://www.patreon.com/mastodon" rel="me"><span class="invisible">https://www.</span><span class="">patreon.com/mastodon</span><span class="invisible"></span></a>

The ``invisible`` spans hide the scheme prefix and any overflow from
sighted readers while keeping the full URL in the text for screen readers.
Unwrapping them gives back the text the link was generated from, which must
equal the ``href`` for the value to count as a plain link.
"""

from __future__ import annotations

from dataclasses import dataclass

from .fragment import ElementNode, Node, TextNode, iter_text, parse_fragment


@dataclass(frozen=True)
class SoleLink:
    """The single anchor a fragment consists of.

    Attributes:
        href: The anchor's link target, as written.
        visible_text: All text inside the anchor with wrapper markup
            (invisible spans included) stripped away.
        display_text: Only the text a sighted reader sees; text inside
            invisible spans is left out.
    """

    href: str
    visible_text: str
    display_text: str


def _is_hidden(node: TextNode, anchor: ElementNode, invisible_class: str) -> bool:
    parent = node.parent
    while parent is not None:
        if invisible_class in parent.classes:
            return True
        if parent is anchor:
            return False
        parent = parent.parent
    return False


def _contains_anchor(node: Node) -> bool:
    if not isinstance(node, ElementNode):
        return False
    return any(isinstance(child, ElementNode) and (child.tag == "a" or _contains_anchor(child)) for child in node.children)


def extract_sole_link(html: str, *, invisible_class: str = "invisible") -> SoleLink | None:
    """Return the link ``html`` consists of, or None.

    Fails unless the fragment's entire top-level content is one ``<a>``
    element: any sibling element, comment or text, whitespace included,
    disqualifies it. Also fails when the anchor has no ``href``, nests another anchor, or
    shows no text to a sighted reader.
    """
    if not isinstance(html, str):
        return None

    nodes = parse_fragment(html)
    if len(nodes) != 1:
        return None

    anchor = nodes[0]
    if not isinstance(anchor, ElementNode) or anchor.tag != "a":
        return None
    if _contains_anchor(anchor):
        return None

    href = anchor.attrs.get("href")
    if not href:
        return None

    visible_text = anchor.text_content()
    display_text = "".join(
        node.text for node in iter_text(anchor) if not _is_hidden(node, anchor, invisible_class)
    )
    if not display_text:
        return None

    return SoleLink(href=href, visible_text=visible_text, display_text=display_text)
