"""Reader for Confluence HTML export files on the local filesystem."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from converters import ConversionError
from models import ConversionJob

logger = logging.getLogger('confluence_html2md.fetchers.htmlsource')

HTML_SUFFIXES = ('.html', '.htm')


class SourceReadError(ConversionError):
    """Raised when an input file is missing or cannot be decoded."""
    pass


class HtmlSourceReader:
    """Loads exported HTML pages and discovers them inside export directories."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, logger: Optional[logging.Logger] = None):
        """
        Initialize source reader.

        Args:
            config: Configuration dictionary (export.encoding is used)
            logger: Logger instance (optional, uses module logger if not provided)
        """
        self.config = config or {}
        self.logger = logger or logging.getLogger('confluence_html2md.fetchers.htmlsource')
        self.encoding = self.config.get('export', {}).get('encoding', 'utf-8')

    def read(self, source_path: Path) -> str:
        """
        Read the raw HTML text of one exported page.

        Args:
            source_path: Path to the HTML file

        Returns:
            Decoded file content

        Raises:
            SourceReadError: If the file is missing, unreadable or not decodable
        """
        source_path = Path(source_path)
        if not source_path.is_file():
            raise SourceReadError(f"Input file does not exist: {source_path}")

        try:
            return source_path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise SourceReadError(f"Failed to decode {source_path} as {self.encoding}: {e}") from e
        except OSError as e:
            raise SourceReadError(f"Failed to read input file {source_path}: {e}") from e

    def load_job(self, source_path: Path, output_path: Optional[Path] = None) -> ConversionJob:
        """Create a ConversionJob for a file and read its content into it."""
        job = ConversionJob(source_path=Path(source_path).resolve(), output_path=output_path)
        job.html_content = self.read(job.source_path)
        self.logger.debug(f"Read {len(job.html_content)} characters from {job.source_path}")
        return job

    def discover(self, export_dir: Path) -> List[Path]:
        """
        Recursively find all HTML pages in an export directory.

        Args:
            export_dir: Root directory to scan

        Returns:
            Sorted list of HTML file paths
        """
        export_dir = Path(export_dir)
        if not export_dir.is_dir():
            raise SourceReadError(f"Input path is not a directory: {export_dir}")

        html_files = [
            file_path for file_path in export_dir.rglob('*')
            if file_path.is_file() and file_path.suffix.lower() in HTML_SUFFIXES
        ]

        # Sort by path for consistent processing order
        html_files.sort()

        self.logger.info(f"Found {len(html_files)} HTML files in {export_dir}")
        return html_files


__all__ = ['HtmlSourceReader', 'SourceReadError', 'HTML_SUFFIXES']
