#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by the Image Analyzer.
"""


class ImageAnalyzerError(Exception):
    """Base class for errors that abort a run."""


class SourceDirectoryError(ImageAnalyzerError):
    """Source directory is missing or not a directory."""
