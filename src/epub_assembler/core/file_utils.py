"""
Logique de nommage des fichiers internes (nettoyage, collisions).
"""

import os
import posixpath
import re
from typing import Callable
from urllib.parse import unquote, urlparse

from .io_providers import is_remote

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(value: str) -> str:
    """Nettoie un texte pour un nom de fichier interne valide."""
    value = re.sub(r"\s+", "_", value.strip())
    value = _UNSAFE_CHARS_RE.sub("_", value)
    return value.lstrip(".")


def source_basename(source: str) -> str:
    """Nom de base d'une source (chemin local ou URL)."""
    source = os.fspath(source)
    if is_remote(source):
        return posixpath.basename(unquote(urlparse(source).path))
    return os.path.basename(source)


def resolve_filename_collision(filename: str, is_taken: Callable[[str], bool]) -> str:
    """
    Retourne filename, ou la première variante libre "stem-N.ext" (N >= 1).
    """
    if not is_taken(filename):
        return filename

    stem, ext = os.path.splitext(filename)
    counter = 1
    candidate = f"{stem}-{counter}{ext}"
    while is_taken(candidate):
        counter += 1
        candidate = f"{stem}-{counter}{ext}"
    return candidate


def make_xml_id(prefix: str, filename: str) -> str:
    """Construit un identifiant XML (NCName) stable à partir d'un nom de fichier."""
    return f"{prefix}-{_UNSAFE_CHARS_RE.sub('_', filename)}"
