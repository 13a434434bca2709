"""Inline run rendering: text, links, emphasis, inline code and line breaks."""

import logging
from typing import Any

from .node_kinds import NodeKind, classify_inline

logger = logging.getLogger('confluence_html2md.converters.inlinerenderer')

DEFAULT_MAX_DEPTH = 200


def render_link(element: Any) -> str:
    """Render an anchor as [text](href), bare text without href, or nothing."""
    text = element.get_text()
    href = element.get('href') or ''
    if text and href:
        return f'[{text}]({href})'
    return text


class InlineRenderer:
    """
    Flattens an element's contents into one line of Markdown.

    Nested inline containers (span, font, p inside a cell...) are expanded
    transparently. Text is appended as written; each run is trimmed once at
    the end so spacing between fragments survives. Literal Markdown
    characters in the source text are not escaped.
    """

    def __init__(self, logger: logging.Logger = None, max_depth: int = DEFAULT_MAX_DEPTH):
        """Initialize inline renderer with optional logger and nesting cap."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.inlinerenderer')
        self.max_depth = max_depth

        self.fragment_renderers = {
            NodeKind.TEXT: str,
            NodeKind.IGNORED: lambda node: '',
            NodeKind.LINK: render_link,
            NodeKind.BOLD: lambda node: f'**{node.get_text()}**',
            NodeKind.ITALIC: lambda node: f'*{node.get_text()}*',
            NodeKind.CODE: lambda node: f'`{node.get_text()}`',
            NodeKind.BREAK: lambda node: '\n',
        }

    def render(self, element: Any, depth: int = 0) -> str:
        """
        Render the direct contents of an element as a trimmed inline run.

        Args:
            element: BeautifulSoup Tag whose contents form the run
            depth: Current nesting depth of the run

        Returns:
            Inline Markdown text
        """
        contents = getattr(element, 'contents', None) or []
        parts = [self.render_fragment(child, depth) for child in contents]
        return ''.join(parts).strip()

    def render_fragment(self, node: Any, depth: int = 0) -> str:
        """Render a single content node using the inline rules."""
        kind = classify_inline(node)
        if kind is not NodeKind.GENERIC:
            return self.fragment_renderers[kind](node)

        if depth >= self.max_depth:
            self.logger.warning(f"Inline nesting deeper than {self.max_depth} levels at <{node.name}>, flattening to text")
            return node.get_text()
        return self.render(node, depth + 1)


__all__ = ['InlineRenderer', 'render_link']
