#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Moves classified files into their category directory.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from ..config import DUPLICATES_DIRNAME, INVALID_DIRNAME, VALID_DIRNAME
from ..models.candidate import CandidateFile
from ..models.category import Category
from ..models.outcome import Failure
from ..utils.path import ensure_dir

logger = logging.getLogger(__name__)


class Relocator:
    """Move files to ``<destination>/<category root>/<relative path>``."""

    def __init__(self, destination: Path,
                 valid_dirname: str = VALID_DIRNAME,
                 invalid_dirname: str = INVALID_DIRNAME,
                 duplicates_dirname: str = DUPLICATES_DIRNAME):
        self.destination = destination
        self.roots: Dict[str, Path] = {
            "valid": destination / valid_dirname,
            "invalid": destination / invalid_dirname,
            "duplicate": destination / duplicates_dirname,
        }

    @property
    def category_roots(self) -> Iterable[Path]:
        return self.roots.values()

    def prepare(self) -> None:
        """Create the three category roots."""
        for root in self.category_roots:
            ensure_dir(root)

    def target_for(self, category: Category, candidate: CandidateFile) -> Path:
        return self.roots[category.root] / candidate.relative_path

    def move(self, category: Category, candidate: CandidateFile) -> Tuple[Path, Optional[Failure]]:
        """Move one file, replacing whatever already sits at the target.

        Errors are logged and returned as a Failure; the file stays where it
        was (a cross-device copy that failed half way is not rolled back).
        """
        source = candidate.path
        target = self.target_for(category, candidate)
        try:
            ensure_dir(target.parent)
            self._replace(source, target)
        except PermissionError as e:
            logger.error("Access denied moving file: %s - %s", source, e)
            return target, Failure(source, "relocate", "permission_denied", str(e))
        except FileExistsError as e:
            logger.error("File already exists: %s - %s", target, e)
            return target, Failure(source, "relocate", "destination_exists", str(e))
        except OSError as e:
            logger.error("Error moving file: %s - %s", source, e)
            return target, Failure(source, "relocate", "io_error", str(e))

        logger.info("Moved [%s]: %s -> %s", category.label, source, target)
        return target, None

    @staticmethod
    def _replace(source: Path, target: Path) -> None:
        try:
            os.replace(source, target)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            # different filesystem: copy then delete
            if target.exists() and not target.is_dir():
                target.unlink()
            shutil.move(str(source), str(target))
