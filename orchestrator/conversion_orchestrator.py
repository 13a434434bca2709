"""
Conversion orchestrator for single files and export directories.

Sequences the pipeline phases for each page: Read → Convert → Write, and
collects per-job outcomes for reporting.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from tqdm import tqdm

from converters import MarkdownConverter
from exporters import MarkdownExporter, OutputEncodeError, OutputExistsError
from fetchers import HtmlSourceReader, SourceReadError
from logger import ProgressTracker, log_section
from models import ConversionBatch, ConversionJob, ConversionStatus

from .conversion_report import ConversionReport

logger = logging.getLogger('confluence_html2md.orchestrator')


class ConversionOrchestrator:
    """Central coordinator sequencing Read → Convert → Write for each page."""

    def __init__(
        self,
        config: Dict[str, Any],
        logger: Optional[logging.Logger] = None,
        output_dir: Optional[str] = None,
        overwrite: Optional[bool] = None,
        show_progress: bool = True
    ):
        """
        Initialize conversion orchestrator.

        Args:
            config: Configuration dictionary
            logger: Optional logger instance
            output_dir: Optional directory receiving batch output
            overwrite: Optional overwrite override for existing files
            show_progress: Show a progress bar for batch runs
        """
        self.config = config
        self.logger = logger or logging.getLogger('confluence_html2md.orchestrator')
        self.show_progress = show_progress

        self.reader = HtmlSourceReader(config, self.logger)
        self.converter = MarkdownConverter(logger=self.logger, config=config)
        self.exporter = MarkdownExporter(config, self.logger, output_dir=output_dir, overwrite=overwrite)
        self.report = ConversionReport(self.logger)

    def convert_file(self, input_path: str, output_path: Optional[str] = None) -> ConversionJob:
        """
        Convert one HTML file and write the markdown next to it (or to output_path).

        The output location is checked before anything is read, so an
        existing file is never parsed for nothing.

        Args:
            input_path: HTML file to convert
            output_path: Optional explicit output file

        Returns:
            The written ConversionJob

        Raises:
            SourceReadError: If the input is missing or unreadable
            OutputExistsError: If the output exists and overwrite is disabled
            HtmlParseError: If the input cannot be parsed
            OutputEncodeError: If the markdown does not fit export.encoding
            OSError: If the output cannot be written
        """
        source_path = Path(input_path).resolve()
        if not source_path.is_file():
            raise SourceReadError(f"Input file does not exist: {source_path}")

        target = self.exporter.resolve_output_path(source_path, output_path)
        self.exporter.check_writable(target)

        job = self.reader.load_job(source_path, target)
        job.markdown_content = self.converter.convert(job.html_content)
        job.status = ConversionStatus.CONVERTED

        self.exporter.export(job)
        return job

    def convert_directory(self, input_dir: str, report_path: Optional[str] = None) -> ConversionBatch:
        """
        Convert every HTML page below a directory.

        Failures are recorded on their job and do not stop the batch.

        Args:
            input_dir: Export directory to scan recursively
            report_path: Optional JSON report destination

        Returns:
            ConversionBatch with one job per discovered file
        """
        input_root = Path(input_dir).resolve()
        batch = ConversionBatch(input_root=input_root, output_root=self.exporter.output_directory)

        log_section("Converting HTML export")
        start_time = time.time()

        html_files = self.reader.discover(input_root)

        with ProgressTracker(len(html_files), "pages") as tracker:
            iterator = tqdm(html_files, desc="Converting pages", unit="page", disable=not self.show_progress)
            for source_path in iterator:
                job = ConversionJob(
                    source_path=source_path,
                    output_path=self.exporter.resolve_output_path(source_path, input_root=input_root)
                )
                batch.add_job(job)
                tracker.increment(success=self._process_job(job))

        self.exporter.log_summary()

        report = self.report.generate_report(batch, time.time() - start_time)
        self.logger.info("\n" + self.report.format_console_report(report))
        if report_path:
            self.report.export_json_report(report, report_path)

        return batch

    def _process_job(self, job: ConversionJob) -> bool:
        """Run read, convert and write for one batch job."""
        try:
            self.exporter.check_writable(job.output_path)
        except OutputExistsError as e:
            self.logger.warning(f"Skipping {job.source_path}: {e}")
            job.status = ConversionStatus.SKIPPED
            job.error_message = str(e)
            return True

        try:
            job.html_content = self.reader.read(job.source_path)
        except SourceReadError as e:
            self.logger.error(str(e))
            job.mark_failed(str(e))
            return False

        if not self.converter.convert_job(job):
            return False

        try:
            self.exporter.export(job)
        except (OutputExistsError, OutputEncodeError, OSError) as e:
            self.logger.error(f"Failed to write {job.output_path}: {e}")
            job.mark_failed(str(e))
            return False
        finally:
            # Page bodies are not kept once written
            job.html_content = None

        return True


__all__ = ['ConversionOrchestrator']
