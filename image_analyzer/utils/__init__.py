"""Utility functions for the Image Analyzer."""

from .time import utc_now_str
from .path import ensure_dir, is_within

__all__ = ['utc_now_str', 'ensure_dir', 'is_within']
