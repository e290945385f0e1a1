"""
Construction des documents de navigation (nav.xhtml et toc.ncx).

Les deux documents sont dérivés de la même liste ordonnée de sections:
ils suivent toujours l'ordre du spine.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

from ..config import XHTML_FOLDER
from .rendering import render_template

if TYPE_CHECKING:
    from .book import Book

logger = logging.getLogger(__name__)


@dataclass
class NavEntry:
    label: str
    href: str
    play_order: int


class NavigationBuilder:
    """Produit le document de navigation EPUB 3 et le NCX hérité."""

    def __init__(self, book: "Book"):
        self.book = book

    def entries(self) -> List[NavEntry]:
        """
        Entrées de la table des matières, dans l'ordre du spine.

        Les sections sans titre restent lisibles mais n'apparaissent pas
        dans la table. Si aucune section n'a de titre, le premier document
        du spine est listé sous le titre du livre.
        """
        content = self.book.content
        titled = [s for s in content.sections if s.title]
        if titled:
            pairs = [(s.title, s.filename) for s in titled]
        else:
            documents = content.documents()
            pairs = [(self.book.title, documents[0])] if documents else []

        return [
            NavEntry(label=label, href=f"{XHTML_FOLDER}/{filename}", play_order=index)
            for index, (label, filename) in enumerate(pairs, start=1)
        ]

    def landmarks(self) -> List[dict]:
        cover = self.book.content.cover
        if cover is None:
            return []
        return [{"type": "cover", "href": f"{XHTML_FOLDER}/{cover.filename}", "label": "Cover"}]

    def build(self) -> Tuple[str, str]:
        """
        Rend les deux documents de navigation.

        Returns:
            Tuple (nav.xhtml, toc.ncx)
        """
        entries = self.entries()
        logger.debug("Building navigation with %d entries", len(entries))

        nav = render_template(
            "nav.xhtml",
            title=self.book.title,
            entries=entries,
            landmarks=self.landmarks(),
        )
        ncx = render_template(
            "toc.ncx",
            identifier=self.book.identifier,
            title=self.book.title,
            entries=entries,
        )
        return nav, ncx
