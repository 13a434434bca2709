"""Markdown converter entry point for Confluence HTML export pages."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from models import ConversionJob, ConversionStatus

from .block_renderer import BlockRenderer
from .inline_renderer import DEFAULT_MAX_DEPTH
from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters.markdownconverter')


class ConversionError(Exception):
    """Base exception for conversion-related errors."""
    pass


class HtmlParseError(ConversionError):
    """Raised when the input cannot be parsed into an HTML tree."""
    pass


def _is_document_title(tag: Tag) -> bool:
    return tag.name == 'title' and tag.find_parent('svg') is None


class MarkdownConverter:
    """
    Converts one Confluence HTML export page into Markdown.

    The pipeline is:
    1. Parse HTML with BeautifulSoup
    2. Emit the page title as a level 1 heading
    3. Locate the main content (#main-content / .wiki-content, then any
       div whose class mentions "content", then the body)
    4. Walk the content with BlockRenderer into a fragment buffer
    5. Join and trim the buffer
    """

    # Confluence exports keep the page body under one of these
    CONTENT_ROOT_SELECTOR = '#main-content, .wiki-content'
    FALLBACK_ROOT_SELECTOR = "div[class*='content']"

    def __init__(self, logger: logging.Logger = None, config: Dict[str, Any] = None):
        """Initialize markdown converter with logger and configuration."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.markdownconverter')
        self.config = config or {}

        conversion_config = self.config.get('conversion', {})
        self.parser = conversion_config.get('parser', 'lxml')
        self.max_depth = conversion_config.get('max_depth', DEFAULT_MAX_DEPTH)

        self.block_renderer = BlockRenderer(self.logger, self.max_depth)

    def convert(self, html_content: str) -> str:
        """
        Convert an HTML document to Markdown.

        Args:
            html_content: Raw HTML text of the exported page

        Returns:
            Markdown text with surrounding whitespace trimmed

        Raises:
            HtmlParseError: If the input cannot be parsed
        """
        soup = self._parse_html(html_content)
        _, markdown = self._render_document(soup)
        return markdown

    def convert_job(self, job: ConversionJob) -> bool:
        """
        Convert a ConversionJob's HTML content and record the outcome on it.

        Args:
            job: ConversionJob with html_content populated

        Returns:
            bool: True if conversion succeeded, False otherwise
        """
        self.logger.info(f"Converting {job.source_path} to markdown")

        try:
            soup = self._parse_html(job.html_content)
        except HtmlParseError as e:
            self.logger.error(f"Conversion failed for {job.source_path}: {str(e)}")
            job.mark_failed(str(e))
            return False

        title, markdown = self._render_document(soup)
        job.title = title or None
        job.markdown_content = markdown
        job.status = ConversionStatus.CONVERTED

        self.logger.info(f"Converted {job.source_path} ({len(markdown)} characters)")
        return True

    def _render_document(self, soup: BeautifulSoup) -> Tuple[str, str]:
        """Render a parsed document, returning (title, markdown)."""
        out: List[str] = []

        title = self.extract_title(soup)
        if title:
            out.append('# ' + title + '\n\n')

        content_root = self.find_content_root(soup)
        self.block_renderer.render_children(content_root, out, 0)

        markdown = ''.join(out).strip()
        self.logger.debug(f"Rendered {len(out)} fragments into {len(markdown)} characters")
        return title, markdown

    def extract_title(self, soup: BeautifulSoup) -> str:
        """
        Return the normalized text of the document's title element, or ''.

        Only the first title outside inline SVG counts; SVG titles are icon
        tooltips and never part of the page heading.
        """
        title_element = soup.find(_is_document_title)
        if title_element is None:
            return ''
        return clean_text(title_element.get_text())

    def find_content_root(self, soup: BeautifulSoup) -> Tag:
        """
        Locate the element holding the page body.

        Args:
            soup: Parsed document

        Returns:
            The content root element (the document itself when it has no body)
        """
        root = soup.select_one(self.CONTENT_ROOT_SELECTOR)
        if root is not None:
            self.logger.debug(f"Content root: <{root.name}> {root.get('id') or root.get('class')}")
            return root

        root = soup.select_one(self.FALLBACK_ROOT_SELECTOR)
        if root is not None:
            self.logger.debug(f"Content root (fallback): <div> {root.get('class')}")
            return root

        if soup.body is not None:
            self.logger.debug("No content container found, using document body")
            return soup.body

        self.logger.debug("Document has no body, rendering whole document")
        return soup

    def _parse_html(self, html_content: Optional[str]) -> BeautifulSoup:
        """Parse HTML content with BeautifulSoup."""
        if not isinstance(html_content, (str, bytes)):
            raise HtmlParseError(
                f"Failed to parse HTML: expected text, got {type(html_content).__name__}"
            )

        try:
            return BeautifulSoup(html_content, self.parser)
        except ParserRejectedMarkup as e:
            raise HtmlParseError(f"Failed to parse HTML: {e}") from e


__all__ = ['MarkdownConverter', 'ConversionError', 'HtmlParseError']
