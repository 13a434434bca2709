"""List rendering with nesting depth and per-list ordered numbering."""

import logging
from typing import List

from bs4 import Tag

from .inline_renderer import DEFAULT_MAX_DEPTH, InlineRenderer
from .node_kinds import LIST_TAGS, NodeKind, classify_inline
from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters.listrenderer')

INDENT = '  '


class ListRenderer:
    """Renders ul/ol trees as indented bullet and numbered lines."""

    def __init__(
        self,
        inline_renderer: InlineRenderer = None,
        logger: logging.Logger = None,
        max_depth: int = DEFAULT_MAX_DEPTH
    ):
        """Initialize list renderer with the inline renderer used for item text."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.listrenderer')
        self.inline_renderer = inline_renderer or InlineRenderer(self.logger, max_depth)
        self.max_depth = max_depth

    def render(
        self,
        element: Tag,
        out: List[str],
        level: int = 0,
        ordered: bool = False,
        depth: int = 0
    ) -> None:
        """
        Append a list and its nested lists to the output buffer.

        Item numbers come from each item's position among its own list's
        li children, so every list (nested or sibling) starts again at 1.
        Only the outermost call closes the block with a blank line.

        Args:
            element: ul or ol Tag
            out: Output buffer
            level: Nesting level, 0 for a top-level list
            ordered: Whether items are numbered
            depth: Tree depth the list was reached at; depth plus level is
                bounded by max_depth
        """
        if depth + level >= self.max_depth:
            self.logger.warning(f"List nested deeper than {self.max_depth} levels, flattening to text")
            text = clean_text(element.get_text())
            if text:
                out.append(f'{INDENT * level}- {text}\n')
            if level == 0:
                out.append('\n')
            return

        items = element.find_all('li', recursive=False)
        self.logger.debug(f"Rendering {'ordered' if ordered else 'unordered'} list with {len(items)} items at level {level}")

        for index, item in enumerate(items, start=1):
            text = self._item_text(item, depth + level + 1)
            if text:
                marker = f'{index}. ' if ordered else '- '
                out.append(f'{INDENT * level}{marker}{text}\n')

            for nested in item.find_all(list(LIST_TAGS), recursive=False):
                self.render(nested, out, level + 1, nested.name == 'ol', depth)

        if level == 0:
            out.append('\n')

    def _item_text(self, item: Tag, depth: int) -> str:
        """
        Build the item's own text, leaving nested lists out.

        Text children are taken as written; every other child contributes
        the inline run of its own contents, so emphasis and link markup of a
        direct child is reduced to its text.
        """
        parts = []
        for child in item.contents:
            if not isinstance(child, Tag):
                parts.append(self.inline_renderer.render_fragment(child, depth))
            elif child.name not in LIST_TAGS and classify_inline(child) is not NodeKind.IGNORED:
                parts.append(self.inline_renderer.render(child, depth))
        return ''.join(parts).strip()


__all__ = ['ListRenderer']
