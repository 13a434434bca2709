"""
Orchestration package for coordinating conversion pipeline phases.

This package sequences Read → Convert → Write for single files and whole
export directories, and reports the outcome of batch runs.
"""

from .conversion_orchestrator import ConversionOrchestrator
from .conversion_report import ConversionReport

__all__ = [
    'ConversionOrchestrator',
    'ConversionReport'
]
