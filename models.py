"""Data models for the Confluence HTML to Markdown conversion pipeline."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger('confluence_html2md')


class ConversionStatus(Enum):
    """Lifecycle states of a single file conversion."""
    PENDING = "pending"
    CONVERTED = "converted"
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ConversionJob:
    """One exported HTML page and the Markdown produced from it."""

    source_path: Path
    output_path: Optional[Path] = None
    html_content: Optional[str] = None
    markdown_content: Optional[str] = None
    title: Optional[str] = None
    status: ConversionStatus = ConversionStatus.PENDING
    error_message: Optional[str] = None
    timestamp: Optional[str] = None

    def __post_init__(self) -> None:
        """Coerce paths and set timestamp if not provided."""
        self.source_path = Path(self.source_path)
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def mark_failed(self, error_message: str) -> None:
        """Record a failure for this job."""
        self.status = ConversionStatus.FAILED
        self.error_message = error_message

    @property
    def succeeded(self) -> bool:
        """True once the job has produced Markdown without failing."""
        return self.status in (ConversionStatus.CONVERTED, ConversionStatus.WRITTEN)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize job to dictionary (without the document bodies)."""
        return {
            'source_path': str(self.source_path),
            'output_path': str(self.output_path) if self.output_path else None,
            'title': self.title,
            'status': self.status.value,
            'error_message': self.error_message,
            'markdown_length': len(self.markdown_content) if self.markdown_content is not None else 0,
            'timestamp': self.timestamp
        }


@dataclass
class ConversionBatch:
    """A set of conversion jobs sharing one input root and output root."""

    input_root: Path
    output_root: Optional[Path] = None
    jobs: List[ConversionJob] = field(default_factory=list)

    def add_job(self, job: ConversionJob) -> None:
        """Add a job to the batch."""
        self.jobs.append(job)

    def get_statistics(self) -> Dict[str, int]:
        """Count jobs per status."""
        counts = {status.value: 0 for status in ConversionStatus}
        for job in self.jobs:
            counts[job.status.value] += 1
        counts['total'] = len(self.jobs)
        return counts

    def failed_jobs(self) -> List[ConversionJob]:
        """Return the jobs that failed."""
        return [job for job in self.jobs if job.status == ConversionStatus.FAILED]


__all__ = [
    'ConversionBatch',
    'ConversionJob',
    'ConversionStatus'
]
