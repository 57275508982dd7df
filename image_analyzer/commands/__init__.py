"""CLI command implementations for the Image Analyzer."""

from .sort import SortCommand

__all__ = ['SortCommand']
