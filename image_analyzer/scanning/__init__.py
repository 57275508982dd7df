"""Scanning and processing modules for the Image Analyzer."""

from .classifier import FileClassifier, Rule, default_rules
from .decoder import DecodedImage, decode_image
from .discovery import FileDiscovery, discover_image_files
from .dispatcher import BoundedDispatcher
from .fingerprint import compute_fingerprint
from .registry import DuplicateRegistry
from .sorter import ImageSorter

__all__ = [
    'FileClassifier',
    'Rule',
    'default_rules',
    'DecodedImage',
    'decode_image',
    'FileDiscovery',
    'discover_image_files',
    'BoundedDispatcher',
    'compute_fingerprint',
    'DuplicateRegistry',
    'ImageSorter',
]
