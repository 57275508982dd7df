#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data structures for discovered files in the Image Analyzer.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CandidateFile:
    """Image file found under the source root, consumed by exactly one task."""
    path: Path           # absolute
    relative_path: Path  # relative to the source root

    @classmethod
    def from_root(cls, root: Path, path: Path) -> "CandidateFile":
        return cls(path=path, relative_path=path.relative_to(root))

    @property
    def name(self) -> str:
        return self.path.name
