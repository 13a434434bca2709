"""
Conversion report generator for batch runs.

Aggregates per-job outcomes of a ConversionBatch into a summary that can be
shown on the console or exported as JSON.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models import ConversionBatch

logger = logging.getLogger('confluence_html2md.orchestrator.report')


class ConversionReport:
    """Builds and exports reports for a finished ConversionBatch."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize conversion report generator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger('confluence_html2md.orchestrator.report')

    def generate_report(self, batch: ConversionBatch, duration: float) -> Dict[str, Any]:
        """
        Generate a report dictionary.

        Args:
            batch: Batch whose jobs have been processed
            duration: Total run time in seconds

        Returns:
            Report with summary, per-file entries and errors
        """
        stats = batch.get_statistics()
        total = stats['total']
        succeeded = sum(1 for job in batch.jobs if job.succeeded)

        return {
            'summary': {
                'input_root': str(batch.input_root),
                'output_root': str(batch.output_root) if batch.output_root else None,
                'files': total,
                'written': stats['written'],
                'converted': stats['converted'],
                'skipped': stats['skipped'],
                'failed': stats['failed'],
                'success_rate': (succeeded / total * 100) if total > 0 else 0,
                'duration_seconds': round(duration, 3),
                'duration_formatted': self._format_duration(duration),
                'generated_at': datetime.now(timezone.utc).isoformat()
            },
            'files': [job.to_dict() for job in batch.jobs],
            'errors': [
                {'file': str(job.source_path), 'error': job.error_message}
                for job in batch.failed_jobs()
            ]
        }

    def format_console_report(self, report: Dict[str, Any]) -> str:
        """
        Format report for console display.

        Args:
            report: Report dictionary

        Returns:
            Formatted console string
        """
        summary = report.get('summary', {})
        sections = [
            "=" * 60,
            "CONVERSION REPORT",
            "=" * 60,
            f"  Files:    {summary.get('files', 0)}",
            f"  Written:  {summary.get('written', 0)}",
            f"  Skipped:  {summary.get('skipped', 0)}",
            f"  Failed:   {summary.get('failed', 0)}",
            f"  Duration: {summary.get('duration_formatted', '0s')}",
        ]

        errors = report.get('errors', [])
        if errors:
            sections.append("")
            sections.append("Errors:")
            for error in errors:
                sections.append(f"  {error['file']}: {error['error']}")

        sections.append("=" * 60)
        return '\n'.join(sections)

    def export_json_report(self, report: Dict[str, Any], filepath: str) -> None:
        """
        Export report to JSON file.

        Args:
            report: Report dictionary
            filepath: Output file path
        """
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(report, f, indent=2, ensure_ascii=False, default=str)

            self.logger.info(f"JSON report exported to {filepath}")

        except OSError as e:
            self.logger.error(f"Failed to export JSON report: {str(e)}")

    @staticmethod
    def _format_duration(seconds: float) -> str:
        """Format duration in human-readable format."""
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        else:
            hours = int(seconds // 3600)
            minutes = int((seconds % 3600) // 60)
            secs = int(seconds % 60)
            return f"{hours}h {minutes}m {secs}s"


__all__ = ['ConversionReport']
