"""Markdown exporter writing converted pages to local files."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from converters import ConversionError
from models import ConversionJob, ConversionStatus


class OutputExistsError(ConversionError):
    """Raised when the output file exists and overwriting is disabled."""
    pass


class OutputEncodeError(ConversionError):
    """Raised when the markdown cannot be represented in the output encoding."""
    pass


class MarkdownExporter:
    """
    Writes converted jobs to markdown files.

    This exporter:
    1. Resolves output paths (next to the input, explicit path, or mirrored
       into an output directory)
    2. Refuses to replace existing files unless overwrite is enabled
    3. Creates missing parent directories
    4. Tracks write statistics
    """

    def __init__(
        self,
        config: Dict[str, Any],
        logger: Optional[logging.Logger] = None,
        output_dir: Optional[str] = None,
        overwrite: Optional[bool] = None
    ):
        """
        Initialize the markdown exporter.

        Args:
            config: Configuration dictionary with export settings
            logger: Logger instance
            output_dir: Optional output directory for mirrored batch output
            overwrite: Optional overwrite override (takes precedence over config)
        """
        self.config = config
        self.logger = logger or logging.getLogger('confluence_html2md.exporters.markdown_exporter')

        export_config = config.get('export', {})
        self.output_directory = Path(output_dir).resolve() if output_dir else None
        self.overwrite = overwrite if overwrite is not None else export_config.get('overwrite', False)
        self.output_extension = export_config.get('output_extension', '.md')
        self.encoding = export_config.get('encoding', 'utf-8')

        self.stats = {
            'files_written': 0,
            'files_refused': 0,
            'bytes_written': 0
        }

    def resolve_output_path(
        self,
        source_path: Path,
        output_path: Optional[str] = None,
        input_root: Optional[Path] = None
    ) -> Path:
        """
        Determine where the markdown for a source file goes.

        Args:
            source_path: Input HTML file
            output_path: Explicit output file path, if given
            input_root: Root of a batch; with an output directory the source's
                relative path is mirrored below it

        Returns:
            Absolute output file path
        """
        if output_path:
            return Path(output_path).resolve()

        source_path = Path(source_path).resolve()
        if self.output_directory is not None:
            if input_root is not None:
                relative = source_path.relative_to(Path(input_root).resolve())
            else:
                relative = Path(source_path.name)
            return (self.output_directory / relative).with_suffix(self.output_extension)

        return source_path.with_suffix(self.output_extension)

    def check_writable(self, output_path: Path) -> None:
        """
        Ensure an output path may be written.

        Raises:
            OutputExistsError: If the file exists and overwrite is disabled
        """
        if output_path.exists() and not self.overwrite:
            self.stats['files_refused'] += 1
            raise OutputExistsError(f"Output file already exists: {output_path} (use -f to overwrite)")

    def export(self, job: ConversionJob) -> Path:
        """
        Write a converted job's markdown to its output path.

        Args:
            job: ConversionJob with markdown_content and output_path set

        Returns:
            Path of the written file

        Raises:
            OutputExistsError: If the file exists and overwrite is disabled
            OutputEncodeError: If the markdown does not fit export.encoding
            OSError: If the file cannot be written
        """
        output_path = Path(job.output_path)
        self.check_writable(output_path)

        try:
            data = (job.markdown_content or '').encode(self.encoding)
        except UnicodeEncodeError as e:
            raise OutputEncodeError(f"Cannot write {output_path} as {self.encoding}: {e}") from e

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)

        job.status = ConversionStatus.WRITTEN
        self.stats['files_written'] += 1
        self.stats['bytes_written'] += len(data)

        self.logger.info(f"Wrote {output_path} ({self._format_bytes(len(data))})")
        return output_path

    def log_summary(self) -> None:
        """Log final export statistics."""
        self.logger.info("=" * 60)
        self.logger.info("MARKDOWN EXPORT SUMMARY")
        self.logger.info("=" * 60)
        self.logger.info(f"Files written: {self.stats['files_written']}")
        if self.stats['files_refused'] > 0:
            self.logger.info(f"Files refused (already exist): {self.stats['files_refused']}")
        self.logger.info(f"Total size: {self._format_bytes(self.stats['bytes_written'])}")

    @staticmethod
    def _format_bytes(bytes_val: float) -> str:
        """Format bytes to human-readable string."""
        if bytes_val == 0:
            return "0 B"

        for unit in ['B', 'KB', 'MB', 'GB']:
            if bytes_val < 1024.0:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024.0

        return f"{bytes_val:.1f} TB"


__all__ = ['MarkdownExporter', 'OutputEncodeError', 'OutputExistsError']
