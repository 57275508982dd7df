#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Image Analyzer.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .commands.sort import SortCommand
from .config import DEFAULT_MAX_CONCURRENT, DEFAULT_THUMBNAIL_SIZE
from .errors import SourceDirectoryError
from .jsonio import enable_json_logging


def setup_logging(verbose: bool):
    """Configure logging for the CLI tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="image-analyzer",
        description="Sort an image tree into valid, invalid and duplicate directories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Sort in place (creates valid_images/, invalid_images/, duplicate_images/ inside the source)
  %(prog)s /mnt/photos

  # Sort into a separate destination with 8 images in flight
  %(prog)s /mnt/photos ./sorted --workers 8

  # Machine-readable summary
  %(prog)s /mnt/photos ./sorted --json
        """
    )

    parser.add_argument("source",
                        help="Source directory to scan recursively")
    parser.add_argument("destination", nargs="?",
                        help="Base directory for the category folders (default: source)")
    parser.add_argument("--workers", type=_positive_int, default=DEFAULT_MAX_CONCURRENT,
                        help=f"Maximum images decoded concurrently (default: {DEFAULT_MAX_CONCURRENT})")
    parser.add_argument("--thumbnail-size", type=_positive_int, default=DEFAULT_THUMBNAIL_SIZE,
                        help=f"Images no larger than this on both sides are thumbnails "
                             f"(default: {DEFAULT_THUMBNAIL_SIZE})")
    parser.add_argument("--no-progress", action="store_true",
                        help="Disable the progress bar")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                        help="Output the run summary as JSON instead of human-readable text")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # For JSON output, send logs to stderr and suppress info noise
    if args.json:
        enable_json_logging()
    else:
        setup_logging(args.verbose)

    logging.debug("Parsed arguments: %s", args)

    source = Path(args.source)
    destination = Path(args.destination) if args.destination else None
    command = SortCommand(source, destination)

    try:
        report = command.execute(
            workers=args.workers,
            thumbnail_size=args.thumbnail_size,
            show_progress=not (args.no_progress or args.json),
            echo=not args.json,
        )
    except SourceDirectoryError as e:
        if args.json:
            from .jsonio import error
            return error("sort", str(e), code=1)
        print(str(e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        if args.json:
            from .jsonio import error
            return error("sort", "Operation interrupted by user", code=130)
        logging.warning("Operation interrupted by user.")
        return 130
    except Exception as e:
        if args.json:
            from .jsonio import error
            debug_info = {"exception_type": type(e).__name__} if args.verbose else None
            return error("sort", str(e), debug=debug_info, code=1)
        logging.error("Error occurred: %s", e, exc_info=args.verbose)
        return 1

    if args.json:
        from .jsonio import report as emit_report
        return emit_report("sort", report, meta={
            "source": str(source),
            "destination": str(destination or source),
            "workers": args.workers,
        })

    if report.interrupted:
        logging.warning("Operation interrupted by user.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
