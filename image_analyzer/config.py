#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Image Analyzer.
"""

from typing import Set, Tuple

# File type categories
IMAGE_EXT: Set[str] = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif", ".webp"}
ICON_EXT: Set[str] = {".ico"}

# Lower-cased substrings that mark a file name as a thumbnail
THUMBNAIL_KEYWORDS: Tuple[str, ...] = ("thumb", "thumbnail", "small", "tiny", "icon")

# Directory names for organization
VALID_DIRNAME = "valid_images"
INVALID_DIRNAME = "invalid_images"
DUPLICATES_DIRNAME = "duplicate_images"

# Default thresholds (can be overridden by CLI)
DEFAULT_THUMBNAIL_SIZE = 128  # px, both sides must be <= to count as thumbnail
HASH_THUMBNAIL_SIZE = 32      # side of the square the fingerprint is computed on

# Processing defaults
DEFAULT_MAX_CONCURRENT = 16   # admitted decode/classify operations
PERMIT_POLL_SECONDS = 0.1
