# epub_assembler/src/epub_assembler/core/epub/reader.py
"""
Module de vérification EPUB.

Responsabilité unique: relire une archive produite pour contrôler sa
structure (mimetype, références du manifeste) et en extraire les
métadonnées principales.
"""

import logging
import posixpath
import zipfile
from typing import Any, Dict, List, Optional

from ebooklib.epub import EpubBook, read_epub

from ...config import CONTENT_FOLDER, MIMETYPE, MIMETYPE_FILENAME

logger = logging.getLogger(__name__)


def safe_read_epub(epub_path: str) -> Optional[EpubBook]:
    """
    Lit un fichier EPUB de manière sécurisée.

    Args:
        epub_path: Chemin vers le fichier EPUB

    Returns:
        Objet EpubBook si succès, None sinon
    """
    try:
        return read_epub(epub_path)
    except Exception as e:
        logger.exception("ebooklib failed to read %s: %s", epub_path, e)
        return None


def _get_metadata_field(book: EpubBook, namespace: str, name: str) -> Optional[Any]:
    meta = book.get_metadata(namespace, name)
    if meta:
        return meta[0][0]
    return None


def _get_authors(book: EpubBook) -> Optional[List[str]]:
    authors = [a[0] for a in book.get_metadata("DC", "creator") if a[0]]
    return authors or None


def _check_container(epub_path: str) -> List[str]:
    """Contrôle l'entrée mimetype (première, non compressée, contenu exact)."""
    problems = []
    try:
        with zipfile.ZipFile(epub_path) as zf:
            infos = zf.infolist()
            if not infos or infos[0].filename != MIMETYPE_FILENAME:
                problems.append("mimetype is not the first entry")
            else:
                if infos[0].compress_type != zipfile.ZIP_STORED:
                    problems.append("mimetype is compressed")
                if zf.read(MIMETYPE_FILENAME) != MIMETYPE.encode("ascii"):
                    problems.append("mimetype has unexpected content")
            for info in infos[1:]:
                if info.compress_type != zipfile.ZIP_DEFLATED:
                    problems.append(f"{info.filename} is not deflated")
    except (OSError, zipfile.BadZipFile) as e:
        problems.append(f"not a zip archive: {e}")
    return problems


def verify_epub(epub_path: str) -> Dict:
    """
    Vérifie une archive EPUB produite et retourne un résumé.

    Returns:
        Dictionnaire avec les clés: title, authors, language, identifier,
        sections (taille du spine), problems (liste de messages)
    """
    data: Dict[str, Any] = {
        "title": None,
        "authors": None,
        "language": None,
        "identifier": None,
        "sections": 0,
        "problems": _check_container(epub_path),
    }
    if data["problems"]:
        logger.warning("Container problems in %s: %s", epub_path, data["problems"])
        return data

    book = safe_read_epub(epub_path)
    if not book:
        data["problems"].append("ebooklib could not read the package")
        return data

    data["title"] = _get_metadata_field(book, "DC", "title")
    data["authors"] = _get_authors(book)
    data["language"] = _get_metadata_field(book, "DC", "language")
    data["identifier"] = _get_metadata_field(book, "DC", "identifier")
    data["sections"] = len(book.spine)

    with zipfile.ZipFile(epub_path) as zf:
        names = set(zf.namelist())
    for item in book.get_items():
        entry = posixpath.join(CONTENT_FOLDER, item.file_name)
        if entry not in names:
            data["problems"].append(f"manifest item {item.id} has no entry {entry}")

    logger.info("Verified %s: %d problem(s)", epub_path, len(data["problems"]))
    return data
