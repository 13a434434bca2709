"""Node classification for the Markdown renderers.

Every node handed to a renderer is tagged with exactly one ``NodeKind``.
The block and inline classifiers check their rules in a fixed priority
order and fall back to ``NodeKind.GENERIC`` for anything unrecognized.
"""

from enum import Enum
from typing import Any

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

HEADING_TAGS = frozenset(['h1', 'h2', 'h3', 'h4', 'h5', 'h6'])
LIST_TAGS = frozenset(['ul', 'ol'])
BOLD_TAGS = frozenset(['strong', 'b'])
ITALIC_TAGS = frozenset(['em', 'i'])
CONTAINER_TAGS = frozenset(['div', 'section', 'article'])

# Elements that never carry page content
IGNORED_TAGS = frozenset(['script', 'style', 'noscript', 'template', 'head'])


class NodeKind(Enum):
    """Closed set of node variants the renderers know how to emit."""
    TEXT = "text"
    IGNORED = "ignored"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    PREFORMATTED = "preformatted"
    CODE = "code"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    RULE = "rule"
    PANEL = "panel"
    CONTAINER = "container"
    LINK = "link"
    BOLD = "bold"
    ITALIC = "italic"
    BREAK = "break"
    GENERIC = "generic"


def is_text(node: Any) -> bool:
    """True for plain text nodes (comments, doctypes and CDATA excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def class_string(node: Any) -> str:
    """Return the element's class attribute as one space-separated string."""
    if not isinstance(node, Tag):
        return ''
    classes = node.get('class') or []
    if isinstance(classes, str):
        return classes
    return ' '.join(classes)


def is_panel(node: Any) -> bool:
    """Check whether a container carries one of the panel/note/info class markers."""
    classes = class_string(node)
    return any(marker in classes for marker in ('panel', 'note', 'info'))


def _classify_string(node: Any) -> NodeKind:
    if is_text(node):
        return NodeKind.TEXT
    return NodeKind.IGNORED


def classify_block(node: Any) -> NodeKind:
    """
    Classify a node encountered during the block-level walk.

    Args:
        node: BeautifulSoup Tag or NavigableString

    Returns:
        The first matching NodeKind, GENERIC when nothing matches
    """
    if not isinstance(node, Tag):
        return _classify_string(node)

    name = node.name
    if name in IGNORED_TAGS:
        return NodeKind.IGNORED
    if name in HEADING_TAGS:
        return NodeKind.HEADING
    if name == 'p':
        return NodeKind.PARAGRAPH
    if name in LIST_TAGS:
        return NodeKind.LIST
    if name == 'li':
        return NodeKind.LIST_ITEM
    if name == 'pre':
        return NodeKind.PREFORMATTED
    if name == 'code' and not (node.parent is not None and node.parent.name == 'pre'):
        return NodeKind.CODE
    if name == 'blockquote':
        return NodeKind.BLOCKQUOTE
    if name == 'table':
        return NodeKind.TABLE
    if name == 'hr':
        return NodeKind.RULE
    if name in CONTAINER_TAGS:
        return NodeKind.PANEL if is_panel(node) else NodeKind.CONTAINER
    if name == 'a':
        return NodeKind.LINK
    if name in BOLD_TAGS:
        return NodeKind.BOLD
    if name in ITALIC_TAGS:
        return NodeKind.ITALIC
    if name == 'br':
        return NodeKind.BREAK
    return NodeKind.GENERIC


def classify_inline(node: Any) -> NodeKind:
    """Classify a direct content of an inline run."""
    if not isinstance(node, Tag):
        return _classify_string(node)

    name = node.name
    if name in IGNORED_TAGS:
        return NodeKind.IGNORED
    if name == 'a':
        return NodeKind.LINK
    if name in BOLD_TAGS:
        return NodeKind.BOLD
    if name in ITALIC_TAGS:
        return NodeKind.ITALIC
    if name == 'code':
        return NodeKind.CODE
    if name == 'br':
        return NodeKind.BREAK
    return NodeKind.GENERIC


__all__ = [
    'NodeKind',
    'classify_block',
    'classify_inline',
    'class_string',
    'is_panel',
    'is_text',
    'HEADING_TAGS',
    'LIST_TAGS',
]
