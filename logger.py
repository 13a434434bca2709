"""Logging setup for the converter: colored console output, optional rotating log file."""

import logging
import logging.handlers
import time
from typing import Any, Dict, Optional

import colorlog

LOGGER_NAME = 'confluence_html2md'

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# -v / -vv map onto these
VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}

# Rotate the log file at 10MB, keep 5 backups
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def resolve_level(verbosity: int = 0, level: Optional[str] = None) -> int:
    """
    Pick the effective log level.

    An explicit level name (from logging.level) wins over the -v count.

    Raises:
        ValueError: If the level name is unknown
    """
    if level:
        level_upper = level.upper()
        if level_upper not in LOG_COLORS:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {sorted(LOG_COLORS)}")
        return getattr(logging, level_upper)
    return VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)


def _console_handler(log_level: int, log_format: str, date_format: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + log_format,
        datefmt=date_format,
        log_colors=LOG_COLORS
    ))
    return handler


def _file_handler(log_file: str, log_level: int, log_format: str, date_format: str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8'
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=date_format))
    return handler


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger.

    Records from every converter module (all named below ``confluence_html2md``)
    go to a colored stderr handler and, when log_file is set, to a rotating
    plain-text file. Calling this again replaces the previous handlers.

    Args:
        verbosity: Number of -v flags (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional path to log file
        log_format: Optional custom log format string
        date_format: Optional custom date format string
        level: Optional explicit log level name, overrides verbosity

    Returns:
        Configured package logger
    """
    log_level = resolve_level(verbosity, level)
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_console_handler(log_level, log_format, date_format))

    if log_file:
        try:
            logger.addHandler(_file_handler(log_file, log_level, log_format, date_format))
        except OSError as e:
            logger.warning(f"Failed to set up file logging: {str(e)}")
        else:
            logger.info(f"Logging to file: {log_file} (level {logging.getLevelName(log_level)})")

    return logger


class ProgressTracker:
    """Context manager counting converted, skipped and failed pages of a batch."""
    
    def __init__(self, total_items: int, item_type: str = "pages"):
        """
        Initialize progress tracker.
        
        Args:
            total_items: Number of files the batch will process
            item_type: Label used in log lines
        """
        self.total_items = total_items
        self.item_type = item_type
        self.processed_items = 0
        self.failed_items = 0
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)
    
    @property
    def successful_items(self) -> int:
        return self.processed_items - self.failed_items
    
    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.info(f"Starting conversion of {self.total_items} {self.item_type}")
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log the batch summary, at warning level when anything failed."""
        if self.start_time is None:
            return
        
        elapsed = time.time() - self.start_time
        log_method = self.logger.warning if self.failed_items else self.logger.info
        
        log_method(
            f"Converted {self.successful_items}/{self.total_items} {self.item_type} "
            f"({self.failed_items} failed) in {elapsed:.1f}s"
        )
    
    def increment(self, success: bool = True) -> None:
        """
        Record one processed item.
        
        Args:
            success: Whether the item was processed successfully
        """
        self.processed_items += 1
        if not success:
            self.failed_items += 1
        
        # Log progress every 10 items or on failure
        if self.processed_items % 10 == 0 or not success:
            status = "Success" if success else "Failed"
            self.logger.info(
                f"Processed {self.processed_items}/{self.total_items} {self.item_type} - Last: {status}"
            )


def log_section(title: str) -> None:
    """
    Log a decorative section header.
    
    Args:
        title: Section title to display
    """
    logger = logging.getLogger(LOGGER_NAME)
    
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {title.upper()}")
    logger.info(separator)


def log_config(config: Dict[str, Any]) -> None:
    """
    Log effective configuration for debugging.
    
    Args:
        config: Configuration dictionary to log
    """
    logger = logging.getLogger(LOGGER_NAME)
    
    log_section("Configuration")
    
    conversion = config.get('conversion', {})
    logger.info(f"Parser: {conversion.get('parser', 'lxml')}")
    logger.info(f"Max Depth: {conversion.get('max_depth', 200)}")
    
    logger.info("")
    
    export_settings = config.get('export', {})
    logger.info(f"Overwrite: {export_settings.get('overwrite', False)}")
    logger.info(f"Output Extension: {export_settings.get('output_extension', '.md')}")
    logger.info(f"Encoding: {export_settings.get('encoding', 'utf-8')}")
    
    logger.info("")
    
    logging_settings = config.get('logging', {})
    logger.info(f"Log Level: {logging_settings.get('level', 'WARNING')}")
    logger.info(f"Log File: {logging_settings.get('file') or 'Not Set'}")


__all__ = [
    'resolve_level',
    'setup_logging',
    'ProgressTracker',
    'log_section',
    'log_config'
]
