"""Markdown export package for writing converted Confluence pages.

Package Structure:
- markdown_exporter: Resolves output paths, enforces overwrite protection and
  writes markdown files

Configuration Referenced:
- export.overwrite: Replace existing output files
- export.output_extension: Suffix of generated files (default .md)
- export.encoding: Encoding used when writing
"""

from .markdown_exporter import MarkdownExporter, OutputEncodeError, OutputExistsError

__all__ = [
    'MarkdownExporter',
    'OutputEncodeError',
    'OutputExistsError'
]
