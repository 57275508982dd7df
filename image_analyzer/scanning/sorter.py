#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main sorter for the Image Analyzer.
Coordinates discovery, concurrent classification and relocation.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_MAX_CONCURRENT, DEFAULT_THUMBNAIL_SIZE
from ..errors import SourceDirectoryError
from ..models.candidate import CandidateFile
from ..models.category import Category
from ..models.outcome import FileOutcome, RunReport
from ..storage.relocator import Relocator
from ..utils.path import is_within
from ..utils.time import utc_now_str
from .classifier import FileClassifier
from .discovery import FileDiscovery
from .dispatcher import BoundedDispatcher
from .registry import DuplicateRegistry

logger = logging.getLogger(__name__)


class ImageSorter:
    """
    Sort a source tree into valid / invalid / duplicate image directories.
    One instance handles one run; the duplicate registry is not reused.
    """

    def __init__(self, source: Path, destination: Optional[Path] = None,
                 max_concurrent: int = DEFAULT_MAX_CONCURRENT,
                 thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE,
                 show_progress: bool = True, echo: bool = True):
        self.source = Path(source)
        self.destination = Path(destination) if destination is not None else self.source
        self.max_concurrent = max_concurrent
        self.thumbnail_size = thumbnail_size
        self.show_progress = show_progress
        self.echo = echo

        self.registry = DuplicateRegistry()
        self.classifier = FileClassifier(self.registry, thumbnail_size=thumbnail_size)
        self.relocator = Relocator(self.destination)
        self.dispatcher = BoundedDispatcher(self.process_file, max_concurrent=max_concurrent,
                                            show_progress=show_progress)

    def validate_source(self) -> None:
        if not self.source.exists():
            raise SourceDirectoryError(f"Source directory doesn't exist: {self.source}")
        if not self.source.is_dir():
            raise SourceDirectoryError(f"Source is not a directory: {self.source}")

    def run(self) -> RunReport:
        """Validate, prepare output directories, discover and sort."""
        self.validate_source()
        self._print_header()

        self.relocator.prepare()
        candidates = self.discover()
        if not candidates:
            self._echo("No image files found.")
            report = RunReport()
        else:
            self._echo(f"[{utc_now_str()}] Sorting {len(candidates):,} files "
                       f"with up to {self.max_concurrent} in flight...")
            report = self.dispatcher.run(candidates)

        self._print_summary(report)
        return report

    def discover(self) -> List[CandidateFile]:
        exclude = [root for root in self.relocator.category_roots if is_within(root, self.source)]
        return FileDiscovery(exclude=exclude).discover_files(self.source)

    def process_file(self, candidate: CandidateFile) -> FileOutcome:
        """Classify one file and move it to its category directory."""
        classification = self.classifier.classify(candidate)
        if classification.category is Category.DUPLICATE:
            logger.debug("%s duplicates %s", candidate.relative_path, classification.canonical_path)
        elif classification.detail:
            logger.debug("%s rejected as %s: %s", candidate.relative_path,
                         classification.category.value, classification.detail)

        target, failure = self.relocator.move(classification.category, candidate)
        return FileOutcome(candidate, classification=classification, target=target, failure=failure)

    def _echo(self, message: str) -> None:
        if self.echo:
            print(message)

    def _print_header(self):
        """Print run configuration header."""
        self._echo("=" * 80)
        self._echo(f"IMAGE ANALYZER - {utc_now_str()}")
        self._echo("=" * 80)
        self._echo(f"Source: {self.source}")
        self._echo(f"Destination: {self.destination}")
        self._echo(f"Max concurrent images: {self.max_concurrent}, thumbnail size: {self.thumbnail_size}px")
        self._echo("")

    def _print_summary(self, report: RunReport):
        """Print final statistics and footer."""
        self._echo("")
        self._echo("=== SORT SUMMARY ===")
        self._echo(f"Files found: {report.total:,}")
        self._echo(f"Files processed: {report.processed:,} (moved: {report.moved:,})")
        for category in Category:
            count = report.count(category)
            if count:
                self._echo(f"  - {category.value}: {count:,}")
        self._echo(f"Unique fingerprints: {len(self.registry):,}")
        if report.failures:
            self._echo(f"Failures: {len(report.failures):,}")
            for failure in report.failures:
                self._echo(f"  - [{failure.reason}] {failure.path}: {failure.message}")
        if report.interrupted:
            self._echo(f"⚠️  Run interrupted! {report.skipped:,} files were left in place.")
        self._echo("=" * 80)
        status = "INTERRUPTED" if report.interrupted else "COMPLETED"
        self._echo(f"SORT {status} - {utc_now_str()}")
        self._echo("=" * 80)
