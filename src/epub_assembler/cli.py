"""
Logique pour le mode ligne de commande.

Construit un livre à partir d'une recette JSON puis l'écrit.
"""

import json
import logging
import os
from typing import Dict, List, Optional

from .core.book import Book
from .core.io_providers import Filesystem, LocalFilesystem, is_remote
from .core.models import AssetKind

logger = logging.getLogger(__name__)

_ASSET_SECTIONS = (
    ("stylesheets", AssetKind.STYLESHEET),
    ("images", AssetKind.IMAGE),
    ("fonts", AssetKind.FONT),
)


def _resolve(base_dir: str, source: str) -> str:
    """Résout une source relative au dossier de la recette."""
    if is_remote(source) or os.path.isabs(source):
        return source
    return os.path.join(base_dir, source)


def _lookup(paths: Dict[str, str], source: Optional[str], what: str) -> str:
    if not source:
        return ""
    try:
        return paths[source]
    except KeyError:
        raise ValueError(f"{what} {source!r} is not declared in the recipe") from None


def load_recipe(recipe_path: str, fs: Optional[Filesystem] = None) -> Dict:
    """Lit et décode une recette JSON."""
    fs = fs if fs is not None else LocalFilesystem()
    return json.loads(fs.read_bytes(recipe_path).decode("utf-8"))


def build_from_recipe(recipe_path: str, fs: Optional[Filesystem] = None) -> Book:
    """
    Construit un livre à partir d'une recette JSON.

    Les chemins relatifs sont résolus depuis le dossier de la recette.
    Les références aux feuilles de style (sections, couverture) et à
    l'image de couverture utilisent la valeur "source" déclarée.

    Args:
        recipe_path: Chemin de la recette
        fs: Système de fichiers (disque par défaut)

    Returns:
        Le livre assemblé, prêt à être écrit
    """
    fs = fs if fs is not None else LocalFilesystem()
    recipe = load_recipe(recipe_path, fs)
    base_dir = os.path.dirname(recipe_path)

    book = Book(recipe.get("title") or "Untitled", fs=fs)
    if recipe.get("author"):
        book.author = recipe["author"]
    if recipe.get("language"):
        book.language = recipe["language"]
    if recipe.get("identifier"):
        book.identifier = recipe["identifier"]
    if recipe.get("description"):
        book.description = recipe["description"]
    if recipe.get("direction"):
        book.direction = recipe["direction"]

    # Chemins internes indexés par la source déclarée dans la recette
    paths: Dict[str, str] = {}
    for key, kind in _ASSET_SECTIONS:
        for entry in recipe.get(key, []):
            source = entry["source"]
            paths[source] = book.add_asset(
                kind, _resolve(base_dir, source), entry.get("filename", "")
            )

    for entry in recipe.get("sections", []):
        if "source" in entry:
            body = fs.read_bytes(_resolve(base_dir, entry["source"])).decode("utf-8")
        else:
            body = entry.get("body", "")
        book.add_section(
            body,
            title=entry.get("title", ""),
            filename=entry.get("filename", ""),
            css_path=_lookup(paths, entry.get("stylesheet"), "Stylesheet"),
        )

    cover = recipe.get("cover")
    if cover:
        book.set_cover(
            _lookup(paths, cover["image"], "Cover image"),
            _lookup(paths, cover.get("stylesheet"), "Stylesheet"),
        )

    logger.info(
        "Recipe %s: %d section(s), %d asset(s)", recipe_path, len(book.sections), len(book.assets)
    )
    return book


def print_build_summary(output_path: str, summary: Dict):
    """Affiche un résumé de l'archive produite."""
    print("\n=== Résumé de la construction ===")
    print(f"Fichier: {output_path}")
    print(f"Titre: {summary.get('title')}")

    authors: List[str] = summary.get("authors") or []
    if authors:
        print(f"Auteurs: {', '.join(authors)}")

    print(f"Langue: {summary.get('language')}")
    print(f"Identifiant: {summary.get('identifier')}")
    print(f"Documents dans le spine: {summary.get('sections')}")

    problems = summary.get("problems") or []
    if problems:
        print(f"\n=== Problèmes détectés ({len(problems)}) ===")
        for problem in problems:
            print(f"  - {problem}")
    else:
        print("Aucun problème détecté")
