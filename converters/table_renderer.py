"""Table rendering to GitHub-style pipe tables."""

import logging
from typing import Iterable, List

from bs4 import Tag

from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters.tablerenderer')


class TableRenderer:
    """Converts Confluence tables (confluenceTable, plain table) to pipe syntax."""

    def __init__(self, logger: logging.Logger = None):
        """Initialize table renderer with optional logger."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.tablerenderer')

    def render(self, element: Tag, out: List[str]) -> None:
        """
        Append a table to the output buffer.

        A first row made of th cells becomes the header plus separator line.
        Remaining rows without td cells are dropped. Cell text is normalized
        to a single line.

        Args:
            element: table Tag
            out: Output buffer
        """
        rows = element.find_all('tr')
        if not rows:
            self.logger.debug("Skipping table without rows")
            return

        header_cells = rows[0].find_all('th')
        if header_cells:
            out.append(self._format_row(header_cells))
            out.append('|' + ' --- |' * len(header_cells) + '\n')
            rows = rows[1:]

        for row in rows:
            cells = row.find_all('td')
            if cells:
                out.append(self._format_row(cells))

        out.append('\n')

    @staticmethod
    def _format_row(cells: Iterable[Tag]) -> str:
        """Format one row of cells as a pipe table line."""
        return '|' + ''.join(f' {clean_text(cell.get_text())} |' for cell in cells) + '\n'


__all__ = ['TableRenderer']
