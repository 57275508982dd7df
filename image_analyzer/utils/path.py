#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the Image Analyzer.
"""

from pathlib import Path


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary."""
    p.mkdir(parents=True, exist_ok=True)


def is_within(path: Path, root: Path) -> bool:
    """Return True if ``path`` is ``root`` or lies below it."""
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True
