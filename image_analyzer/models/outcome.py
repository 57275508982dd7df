#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Per-file results and the aggregated run report.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .candidate import CandidateFile
from .category import Category


@dataclass(frozen=True)
class Classification:
    """Result of running the classifier on one file."""
    category: Category
    fingerprint: Optional[str] = None
    canonical_path: Optional[str] = None  # registry entry this file duplicates
    detail: Optional[str] = None          # decode failure message


@dataclass(frozen=True)
class Failure:
    """Structured, non-fatal failure for a single file."""
    path: Path
    stage: str   # 'relocate' or 'task'
    reason: str  # 'permission_denied', 'destination_exists', 'io_error', 'unexpected'
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": str(self.path),
            "stage": self.stage,
            "reason": self.reason,
            "message": self.message,
        }


@dataclass
class FileOutcome:
    """What happened to one dispatched file."""
    candidate: CandidateFile
    classification: Optional[Classification] = None
    target: Optional[Path] = None
    failure: Optional[Failure] = None

    @property
    def category(self) -> Optional[Category]:
        return self.classification.category if self.classification else None

    @property
    def moved(self) -> bool:
        return self.target is not None and self.failure is None


@dataclass
class RunReport:
    """Aggregate of all file outcomes for one run."""
    total: int = 0
    categories: Counter = field(default_factory=Counter)
    moved: int = 0
    failures: List[Failure] = field(default_factory=list)
    skipped: int = 0
    interrupted: bool = False
    elapsed: float = 0.0

    def add(self, outcome: FileOutcome) -> None:
        if outcome.category is not None:
            self.categories[outcome.category] += 1
        if outcome.moved:
            self.moved += 1
        if outcome.failure is not None:
            self.failures.append(outcome.failure)

    @property
    def processed(self) -> int:
        return self.total - self.skipped

    def count(self, category: Category) -> int:
        return self.categories.get(category, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "processed": self.processed,
            "skipped": self.skipped,
            "moved": self.moved,
            "interrupted": self.interrupted,
            "elapsed_seconds": round(self.elapsed, 3),
            "categories": {c.value: self.count(c) for c in Category},
            "failures": [f.to_dict() for f in self.failures],
        }
