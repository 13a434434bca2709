"""Converters package for Confluence HTML export to Markdown conversion."""

import logging

from .block_renderer import BlockRenderer
from .inline_renderer import InlineRenderer
from .list_renderer import ListRenderer
from .markdown_converter import ConversionError, HtmlParseError, MarkdownConverter
from .node_kinds import NodeKind, classify_block, classify_inline
from .panel_handler import PanelHandler
from .table_renderer import TableRenderer
from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters')


def convert_html(html_content, config=None, logger=None):
    """
    Convenience function to convert one Confluence HTML page to Markdown.

    This runs the full pipeline:
    1. HTML parsing (BeautifulSoup)
    2. Title extraction and content root discovery
    3. Block/inline/list/table/panel rendering
    4. Trimming of the assembled Markdown

    Args:
        html_content: Raw HTML text of the exported page
        config: Optional configuration dictionary for converter behavior
        logger: Optional logger instance (uses module logger if not provided)

    Returns:
        str: Markdown text

    Raises:
        HtmlParseError: If the input cannot be parsed

    Example:
        >>> from converters import convert_html
        >>> convert_html('<h3>Title</h3>')
        '### Title'
    """
    if logger is None:
        logger = logging.getLogger('confluence_html2md.converters')

    converter = MarkdownConverter(logger=logger, config=config)
    return converter.convert(html_content)


__all__ = [
    'convert_html',
    'MarkdownConverter',
    'ConversionError',
    'HtmlParseError',
    'BlockRenderer',
    'InlineRenderer',
    'ListRenderer',
    'TableRenderer',
    'PanelHandler',
    'NodeKind',
    'classify_block',
    'classify_inline',
    'clean_text'
]
