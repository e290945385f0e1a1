"""
EPUB Assembler - assemblage de conteneurs EPUB 3.
"""

from .core.book import Book
from .core.errors import (
    AssetNotFoundError,
    EpubAssemblerError,
    NameConflictError,
    SourceFetchFailedError,
    SourceUnreadableError,
    UnsupportedMediaTypeError,
    UnwritableError,
    WriteFailedError,
)
from .core.io_providers import LocalFilesystem, MemoryFilesystem
from .core.models import AssetKind

__version__ = "0.1.0"

__all__ = [
    "AssetKind",
    "AssetNotFoundError",
    "Book",
    "EpubAssemblerError",
    "LocalFilesystem",
    "MemoryFilesystem",
    "NameConflictError",
    "SourceFetchFailedError",
    "SourceUnreadableError",
    "UnsupportedMediaTypeError",
    "UnwritableError",
    "WriteFailedError",
]
