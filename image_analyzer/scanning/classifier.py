#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Per-file classification for the Image Analyzer.

Classification is an ordered chain of rules. Name-based rules run first so
thumbnails and icons are rejected without paying for a decode; the file is
decoded once, right before the first rule that needs pixels. A file that
survives every rule is fingerprinted and claimed in the duplicate registry.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image

from ..config import DEFAULT_THUMBNAIL_SIZE, ICON_EXT, THUMBNAIL_KEYWORDS
from ..models.candidate import CandidateFile
from ..models.category import Category
from ..models.outcome import Classification
from .decoder import DecodedImage, decode_image
from .fingerprint import compute_fingerprint
from .registry import DuplicateRegistry

logger = logging.getLogger(__name__)

Predicate = Callable[[str, Optional[DecodedImage]], bool]
Decoder = Callable[[Path], Optional[DecodedImage]]

# Pillow raises DecompressionBombError for images far beyond MAX_IMAGE_PIXELS
MEMORY_ERRORS = (MemoryError, Image.DecompressionBombError)


@dataclass(frozen=True)
class Rule:
    """``predicate(lower_name, decoded)`` true -> file gets ``category``."""
    category: Category
    predicate: Predicate
    requires_decode: bool = False


def is_thumbnail_name(name: str) -> bool:
    """Check if a lower-cased file name contains a thumbnail keyword."""
    return any(keyword in name for keyword in THUMBNAIL_KEYWORDS)


def is_icon_name(name: str) -> bool:
    return any(name.endswith(ext) for ext in ICON_EXT)


def is_thumbnail_size(decoded: DecodedImage, threshold: int = DEFAULT_THUMBNAIL_SIZE) -> bool:
    return decoded.width <= threshold and decoded.height <= threshold


def default_rules(thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE) -> Tuple[Rule, ...]:
    """Build the standard rule chain, in evaluation order."""
    return (
        Rule(Category.THUMBNAIL_BY_NAME, lambda name, _: is_thumbnail_name(name)),
        Rule(Category.ICON_FILE, lambda name, _: is_icon_name(name)),
        Rule(Category.THUMBNAIL_BY_SIZE,
             lambda _, decoded: is_thumbnail_size(decoded, thumbnail_size),
             requires_decode=True),
    )


class FileClassifier:
    """Assign exactly one :class:`Category` to each candidate file."""

    def __init__(self, registry: DuplicateRegistry,
                 thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE,
                 rules: Optional[Sequence[Rule]] = None,
                 decoder: Decoder = decode_image):
        self.registry = registry
        self.rules = tuple(rules) if rules is not None else default_rules(thumbnail_size)
        self.decoder = decoder

    def classify(self, candidate: CandidateFile) -> Classification:
        """Run the rule chain, then fingerprint and register survivors.

        Decode problems are turned into CORRUPT or MEMORY_ERROR; nothing
        raised by Pillow escapes this method.
        """
        name = candidate.name.lower()
        decoded: Optional[DecodedImage] = None
        try:
            for rule in self.rules:
                if rule.requires_decode and decoded is None:
                    decoded, rejected = self._decode(candidate.path)
                    if rejected is not None:
                        return rejected
                if rule.predicate(name, decoded):
                    return Classification(rule.category)

            if decoded is None:
                decoded, rejected = self._decode(candidate.path)
                if rejected is not None:
                    return rejected
            return self._register(candidate, decoded)
        finally:
            if decoded is not None:
                decoded.close()

    def _decode(self, path: Path) -> Tuple[Optional[DecodedImage], Optional[Classification]]:
        try:
            decoded = self.decoder(path)
        except MEMORY_ERRORS as e:
            logger.warning("Memory error processing: %s - %s", path, e)
            return None, Classification(Category.MEMORY_ERROR, detail=str(e) or type(e).__name__)
        except Exception as e:
            logger.debug("Could not decode %s: %s", path, e)
            return None, Classification(Category.CORRUPT, detail=str(e) or type(e).__name__)

        if decoded is None:
            return None, Classification(Category.CORRUPT, detail="no image decoded")
        return decoded, None

    def _register(self, candidate: CandidateFile, decoded: DecodedImage) -> Classification:
        try:
            fingerprint = compute_fingerprint(decoded)
        except MEMORY_ERRORS as e:
            logger.warning("Memory error fingerprinting: %s - %s", candidate.path, e)
            return Classification(Category.MEMORY_ERROR, detail=str(e) or type(e).__name__)
        except Exception as e:
            # loaded but unconvertible pixel data counts as corrupt
            logger.debug("Could not fingerprint %s: %s", candidate.path, e)
            return Classification(Category.CORRUPT, detail=str(e) or type(e).__name__)

        existing = self.registry.claim(fingerprint, str(candidate.relative_path))
        if existing is not None:
            return Classification(Category.DUPLICATE, fingerprint=fingerprint, canonical_path=existing)
        return Classification(Category.VALID, fingerprint=fingerprint)
