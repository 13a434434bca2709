"""Block-level dispatcher walking the content tree in document order."""

import logging
from typing import Any, Callable, Dict, List

from bs4 import Tag

from .inline_renderer import DEFAULT_MAX_DEPTH, InlineRenderer, render_link
from .list_renderer import ListRenderer
from .node_kinds import NodeKind, classify_block
from .panel_handler import PanelHandler
from .table_renderer import TableRenderer
from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters.blockrenderer')


class BlockRenderer:
    """
    Emits Markdown for every node of the content tree.

    Each node is classified into a NodeKind and handed to the matching
    handler. Unrecognized elements and plain containers recurse into their
    contents. Block constructs end with one blank line; inline constructs met
    at block level (links, emphasis, breaks, inline code) are written
    without one.
    """

    def __init__(
        self,
        logger: logging.Logger = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        inline_renderer: InlineRenderer = None,
        list_renderer: ListRenderer = None,
        table_renderer: TableRenderer = None,
        panel_handler: PanelHandler = None
    ):
        """Initialize block renderer and its helper renderers."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.blockrenderer')
        self.max_depth = max_depth

        self.inline_renderer = inline_renderer or InlineRenderer(self.logger, max_depth)
        self.list_renderer = list_renderer or ListRenderer(self.inline_renderer, self.logger, max_depth)
        self.table_renderer = table_renderer or TableRenderer(self.logger)
        self.panel_handler = panel_handler or PanelHandler(self.logger)

        # Handlers receive (node, out, level, depth)
        self.block_handlers: Dict[NodeKind, Callable[[Any, List[str], int, int], None]] = {
            NodeKind.TEXT: self._render_text,
            NodeKind.IGNORED: self._render_nothing,
            NodeKind.HEADING: self._render_heading,
            NodeKind.PARAGRAPH: self._render_paragraph,
            NodeKind.LIST: self._render_list,
            NodeKind.LIST_ITEM: self._render_nothing,
            NodeKind.PREFORMATTED: self._render_preformatted,
            NodeKind.CODE: self._render_inline_code,
            NodeKind.BLOCKQUOTE: self._render_blockquote,
            NodeKind.TABLE: self._render_table,
            NodeKind.RULE: self._render_rule,
            NodeKind.PANEL: self._render_panel,
            NodeKind.CONTAINER: self._render_children_of,
            NodeKind.LINK: self._render_link,
            NodeKind.BOLD: self._render_bold,
            NodeKind.ITALIC: self._render_italic,
            NodeKind.BREAK: self._render_break,
            NodeKind.GENERIC: self._render_children_of,
        }

    def render_children(self, element: Any, out: List[str], level: int = 0, depth: int = 0) -> None:
        """
        Render every content node of an element, left to right.

        Args:
            element: Tag whose contents are walked
            out: Output buffer
            level: List nesting level passed down to list rendering
            depth: Current tree depth, bounded by max_depth
        """
        for child in list(getattr(element, 'contents', None) or []):
            self.render_node(child, out, level, depth)

    def render_node(self, node: Any, out: List[str], level: int = 0, depth: int = 0) -> None:
        """Classify one node and dispatch it to its handler."""
        kind = classify_block(node)
        self.block_handlers[kind](node, out, level, depth)

    def _render_children_of(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        if depth >= self.max_depth:
            self.logger.warning(
                f"Content nested deeper than {self.max_depth} levels at <{element.name}>, flattening to text"
            )
            text = clean_text(element.get_text())
            if text:
                out.append(text + '\n\n')
            return
        self.render_children(element, out, level, depth + 1)

    def _render_nothing(self, node: Any, out: List[str], level: int, depth: int) -> None:
        pass

    def _render_text(self, node: Any, out: List[str], level: int, depth: int) -> None:
        text = clean_text(str(node))
        if text:
            out.append(text)

    def _render_heading(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        heading_level = int(element.name[1])
        out.append('#' * heading_level + ' ' + clean_text(element.get_text()) + '\n\n')

    def _render_paragraph(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        text = self.inline_renderer.render(element, depth)
        if text:
            out.append(text + '\n\n')

    def _render_list(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        self.list_renderer.render(element, out, level, element.name == 'ol', depth)

    def _render_preformatted(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        """Fence the text of the inner code elements, or of the pre block itself."""
        code = ''.join(code_element.get_text() for code_element in element.find_all('code'))
        if not code:
            code = element.get_text()
        out.append('```\n' + code + '\n```\n\n')

    def _render_inline_code(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append('`' + element.get_text() + '`')

    def _render_blockquote(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        text = self.inline_renderer.render(element, depth)
        for line in text.split('\n'):
            out.append('> ' + line + '\n')
        out.append('\n')

    def _render_table(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        self.table_renderer.render(element, out)

    def _render_rule(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append('---\n\n')

    def _render_panel(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        """Render a panel/note/info container as a labelled blockquote line."""
        title = self.panel_handler.extract_title(element)
        self.logger.debug(f"Rendering panel '{title}'")
        out.append('> **' + title + '**: ' + clean_text(element.get_text()) + '\n\n')

    def _render_link(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append(render_link(element))

    def _render_bold(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append('**' + element.get_text() + '**')

    def _render_italic(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append('*' + element.get_text() + '*')

    def _render_break(self, element: Tag, out: List[str], level: int, depth: int) -> None:
        out.append('\n')


__all__ = ['BlockRenderer']
