#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sort command (thin wrapper).
All sorting logic lives in `scanning/sorter.py`; this keeps only the
CLI-facing `SortCommand`.
"""

from pathlib import Path
from typing import Optional

from ..config import DEFAULT_MAX_CONCURRENT, DEFAULT_THUMBNAIL_SIZE
from ..models.outcome import RunReport
from ..scanning.sorter import ImageSorter


class SortCommand:
    def __init__(self, source: Path, destination: Optional[Path] = None):
        self.source = source
        self.destination = destination

    def execute(
        self,
        workers: int = DEFAULT_MAX_CONCURRENT,
        thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE,
        show_progress: bool = True,
        echo: bool = True,
    ) -> RunReport:
        """Run a sort by delegating to ImageSorter."""
        engine = ImageSorter(
            self.source,
            self.destination,
            max_concurrent=workers,
            thumbnail_size=thumbnail_size,
            show_progress=show_progress,
            echo=echo,
        )
        return engine.run()
