"""Fetchers package for reading Confluence HTML export files."""

from .html_source import HTML_SUFFIXES, HtmlSourceReader, SourceReadError

__all__ = [
    'HtmlSourceReader',
    'SourceReadError',
    'HTML_SUFFIXES'
]
