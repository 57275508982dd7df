"""Storage helpers for the Image Analyzer."""

from .relocator import Relocator

__all__ = ['Relocator']
