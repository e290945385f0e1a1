"""
Module EPUB - Sérialisation et vérification des archives.

Ce module fournit l'écrivain d'archive OCF et les fonctions de relecture
utilisées pour contrôler une archive produite.
"""

from .reader import safe_read_epub, verify_epub
from .writer import ArchiveWriter

__all__ = [
    "ArchiveWriter",
    "safe_read_epub",
    "verify_epub",
]
