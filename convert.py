#!/usr/bin/env python3
"""
Confluence HTML to Markdown Converter - Main CLI Entry Point

This script provides the command-line interface for converting Confluence
HTML export pages to clean Markdown, keeping the main page content and
dropping navigation and other UI chrome.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from config_loader import ConfigLoader, get_nested
from converters import HtmlParseError
from exporters import OutputEncodeError, OutputExistsError
from fetchers import SourceReadError
from logger import log_config, log_section, setup_logging
from orchestrator import ConversionOrchestrator

__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='confluence2md',
        description="Convert Confluence HTML export files to clean Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert one page next to the input (page.html -> page.md)
  confluence2md md page.html

  # Choose the output file and replace it if it exists
  confluence2md md page.html -o docs/page.md -f

  # Convert a whole export directory into another directory
  confluence2md batch ./export -o ./markdown --report report.json

  # Verbose logging
  confluence2md -vv md page.html
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file (optional)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write log records to this file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')
    subparsers.required = True

    md_parser = subparsers.add_parser(
        'md',
        help='Convert a Confluence HTML file to Markdown',
        description=(
            'Parse a Confluence HTML export file and convert it to clean Markdown format. '
            'The command extracts the main content while filtering out navigation elements '
            'and other UI components.'
        )
    )
    md_parser.add_argument('file', help='Confluence HTML file to convert')
    md_parser.add_argument(
        '-o', '--output',
        type=str,
        help='Output file path (default: input file with .md extension)'
    )
    md_parser.add_argument(
        '-f', '--force',
        action='store_true',
        help='Overwrite output file if it exists'
    )

    batch_parser = subparsers.add_parser(
        'batch',
        help='Convert every HTML file below a directory'
    )
    batch_parser.add_argument('directory', help='Confluence HTML export directory')
    batch_parser.add_argument(
        '-o', '--output',
        type=str,
        help='Output directory mirroring the input layout (default: next to each input)'
    )
    batch_parser.add_argument(
        '-f', '--force',
        action='store_true',
        help='Overwrite output files that already exist'
    )
    batch_parser.add_argument(
        '--report',
        type=str,
        help='Write a JSON conversion report to this path'
    )
    batch_parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the progress bar'
    )

    return parser


def validate_arguments(args: argparse.Namespace, logger: logging.Logger) -> bool:
    """Validate input paths before any conversion starts."""
    if args.command == 'md':
        path = Path(args.file).resolve()
        if not path.is_file():
            logger.error(f"Input file does not exist: {path}")
            return False
    elif args.command == 'batch':
        path = Path(args.directory).resolve()
        if not path.is_dir():
            logger.error(f"Input directory does not exist or is not a directory: {path}")
            return False
    return True


def run_md(config: dict, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Convert a single file."""
    orchestrator = ConversionOrchestrator(config, logger, show_progress=False)

    print(f"Parsing {Path(args.file).resolve()}...")
    job = orchestrator.convert_file(args.file, args.output)
    print(f"Successfully converted to {job.output_path}")
    return 0


def run_batch(config: dict, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Convert an export directory."""
    orchestrator = ConversionOrchestrator(
        config,
        logger,
        output_dir=args.output,
        show_progress=not args.no_progress
    )

    batch = orchestrator.convert_directory(args.directory, report_path=args.report)
    stats = batch.get_statistics()

    print(
        f"Converted {stats['written']} of {stats['total']} files "
        f"({stats['skipped']} skipped, {stats['failed']} failed)"
    )
    return 1 if stats['failed'] else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        # Load configuration and merge with CLI arguments (CLI takes precedence)
        config = ConfigLoader.load(args.config)
        config = ConfigLoader.merge_with_args(config, args)
        ConfigLoader.validate(config)

        setup_logging(
            verbosity=args.verbose,
            log_file=get_nested(config, 'logging.file'),
            level=get_nested(config, 'logging.level')
        )
        logger = logging.getLogger('confluence_html2md.cli')

        log_section("Confluence HTML to Markdown")
        logger.info(f"Version: {__version__}")
        log_config(config)

        if not validate_arguments(args, logger):
            return 2

        if args.command == 'md':
            return run_md(config, args, logger)
        return run_batch(config, args, logger)

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except OutputExistsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2
    except (HtmlParseError, SourceReadError, OutputEncodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: Failed to write output file: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nConversion interrupted by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
