#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Classification categories for the Image Analyzer.
"""

from enum import Enum


class Category(Enum):
    """Terminal classification of a single image file.

    The value is the unique key used in run reports. ``label`` is the word
    printed in move logs, where both thumbnail kinds read "thumbnail". ``root``
    says which of the three category directories the file is relocated under.
    """

    VALID = "valid"
    DUPLICATE = "duplicate"
    THUMBNAIL_BY_NAME = "thumbnail"
    THUMBNAIL_BY_SIZE = "thumbnail_size"
    ICON_FILE = "ico"
    CORRUPT = "corrupt"
    MEMORY_ERROR = "memory_error"

    @property
    def root(self) -> str:
        """Return 'valid', 'duplicate' or 'invalid'."""
        if self is Category.VALID:
            return "valid"
        if self is Category.DUPLICATE:
            return "duplicate"
        return "invalid"

    @property
    def label(self) -> str:
        if self is Category.THUMBNAIL_BY_SIZE:
            return Category.THUMBNAIL_BY_NAME.value
        return self.value
