"""
Hyperlink extraction from parsed HTML documents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from sitemapper.errors import ParseError


@dataclass(frozen=True, slots=True)
class Link:
    """A single <a> element: raw href plus its flattened inner text."""
    href: str
    text: str


def _is_text(node: PageElement) -> bool:
    # Comments, doctypes, CDATA and PIs are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _is_anchor(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.name == "a"


def _inner_text(anchor: Tag) -> str:
    """Concatenate descendant text in document order, then collapse whitespace."""
    raw = "".join(str(node) for node in anchor.descendants if _is_text(node))
    return " ".join(raw.split())


def _build_link(anchor: Tag) -> Link:
    return Link(href=anchor.get("href", ""), text=_inner_text(anchor))


def extract_links(root: PageElement) -> List[Link]:
    """
    Return every anchor in the tree under root, in document pre-order.

    Anchors nested inside another anchor are never reported: once an <a> is
    matched its subtree is skipped. Walks with an explicit stack so deeply
    nested documents cannot exhaust the interpreter's recursion limit.
    """
    links: List[Link] = []
    stack: List[PageElement] = [root]

    while stack:
        node = stack.pop()
        if _is_anchor(node):
            links.append(_build_link(node))
            continue
        if isinstance(node, Tag):
            # Reversed so the first child is popped next
            stack.extend(reversed(node.contents))

    return links


def parse_links(document: Union[bytes, str]) -> List[Link]:
    """Parse an HTML byte stream and extract its links."""
    if not isinstance(document, (bytes, str)):
        raise ParseError(f"Unable to parse HTML: expected bytes or str, got {type(document).__name__}")
    try:
        soup = BeautifulSoup(document, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Unable to parse HTML: {e}") from e
    return extract_links(soup)
