"""Image Analyzer - sort image trees into valid, invalid and duplicate folders."""

__version__ = "1.0.0"
__author__ = "Image Analyzer Team"

# Import key classes for convenient top-level access
from .commands import SortCommand
from .scanning import ImageSorter, FileClassifier, DuplicateRegistry, BoundedDispatcher, FileDiscovery
from .storage import Relocator
from .models import CandidateFile, Category, Classification, FileOutcome, RunReport
from .errors import ImageAnalyzerError, SourceDirectoryError

__all__ = [
    # Core classes
    'SortCommand',
    'ImageSorter',

    # Pipeline components
    'FileClassifier',
    'DuplicateRegistry',
    'BoundedDispatcher',
    'FileDiscovery',
    'Relocator',

    # Data models
    'CandidateFile',
    'Category',
    'Classification',
    'FileOutcome',
    'RunReport',

    # Errors
    'ImageAnalyzerError',
    'SourceDirectoryError',

    # Package metadata
    '__version__',
    '__author__'
]
