#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File discovery logic for the Image Analyzer.
Handles recursive scanning of the source directory to find image files.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional, Set

from ..config import IMAGE_EXT
from ..models.candidate import CandidateFile

logger = logging.getLogger(__name__)


class FileDiscovery:
    """Collect candidate image files below a source root."""

    def __init__(self, extensions: Optional[Set[str]] = None,
                 exclude: Optional[Iterable[Path]] = None):
        self.extensions = {e.lower() for e in (extensions or IMAGE_EXT)}
        # category roots that sit inside the source tree are never re-sorted
        self.exclude = {Path(p).resolve() for p in (exclude or ())}

    def discover_files(self, source: Path) -> List[CandidateFile]:
        """
        Discover image files in the source directory.

        Args:
            source: Source directory to scan

        Returns:
            List of CandidateFile entries, in no particular order
        """
        source = source.resolve()
        logger.info("Discovering image files in %s...", source)

        candidates: List[CandidateFile] = []
        stats = {
            'total_scanned': 0,
            'permission_errors': 0,
            'skipped_extension': 0,
        }

        start_time = time.perf_counter()
        self._scan_recursive(source, source, candidates, stats)
        elapsed = time.perf_counter() - start_time

        logger.info("Discovery complete: %d image files found (%d entries scanned in %.2fs)",
                    len(candidates), stats['total_scanned'], elapsed)
        if stats['skipped_extension']:
            logger.debug("Ignored %d non-image files", stats['skipped_extension'])
        if stats['permission_errors']:
            logger.warning("Could not read %d entries (permission or I/O errors)", stats['permission_errors'])

        return candidates

    def _scan_recursive(self, root: Path, path: Path, candidates: List[CandidateFile], stats: dict):
        """Recursively scan directory for image files."""
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    stats['total_scanned'] += 1

                    try:
                        # file links are followed, directory links are not
                        if entry.is_file():
                            if self.is_image_file(entry.name):
                                candidates.append(CandidateFile.from_root(root, Path(entry.path)))
                            else:
                                stats['skipped_extension'] += 1

                        elif entry.is_dir(follow_symlinks=False):
                            child = Path(entry.path)
                            if child.resolve() in self.exclude:
                                logger.debug("Skipping output directory %s", child)
                                continue
                            self._scan_recursive(root, child, candidates, stats)
                    except OSError as e:
                        logger.debug("Cannot stat %s: %s", entry.path, e)
                        stats['permission_errors'] += 1

        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            stats['permission_errors'] += 1

    def is_image_file(self, filename: str) -> bool:
        """Check if file has a supported image extension (case-insensitive)."""
        return Path(filename).suffix.lower() in self.extensions


def discover_image_files(source: Path, exclude: Optional[Iterable[Path]] = None) -> List[CandidateFile]:
    """Convenience wrapper around :class:`FileDiscovery`."""
    return FileDiscovery(exclude=exclude).discover_files(source)
