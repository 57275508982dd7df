#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Thread-safe, first-writer-wins duplicate registry.
"""

import logging
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class DuplicateRegistry:
    """Map of fingerprint -> relative path of the canonical file.

    Lives for one run only. The single mutating operation is :meth:`claim`,
    which tests and inserts under one lock so no two callers can both become
    the canonical owner of a fingerprint.
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = Lock()

    def claim(self, fingerprint: str, path: str) -> Optional[str]:
        """Register ``path`` for ``fingerprint`` unless already taken.

        Returns the previously registered path, or None if this call became
        the canonical entry.
        """
        with self._lock:
            existing = self._entries.get(fingerprint)
            if existing is None:
                self._entries[fingerprint] = path
        if existing is not None:
            logger.debug("Fingerprint %s already claimed by %s (rejecting %s)", fingerprint, existing, path)
        return existing

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        with self._lock:
            return fingerprint in self._entries
