"""Data models for the Image Analyzer."""

from .candidate import CandidateFile
from .category import Category
from .outcome import Classification, Failure, FileOutcome, RunReport

__all__ = ['CandidateFile', 'Category', 'Classification', 'Failure', 'FileOutcome', 'RunReport']
