"""
Assembleur de contenu.

Responsabilité unique: tenir la liste ordonnée des sections et la page de
couverture, et produire leurs documents XHTML.
"""

import logging
from typing import List, Optional

from ..config import COVER_XHTML_FILENAME, SECTION_FILENAME_FORMAT
from .assets import AssetRegistry
from .errors import NameConflictError
from .file_utils import resolve_filename_collision, sanitize_filename
from .models import AssetKind, Cover, Section
from .rendering import render_template

logger = logging.getLogger(__name__)


class ContentAssembler:
    """
    Sections et couverture d'un livre.

    Les noms de fichiers des sections et de la couverture partagent le même
    espace de noms (le dossier des documents XHTML).
    """

    def __init__(self, registry: AssetRegistry):
        self.registry = registry
        self.sections: List[Section] = []
        self.cover: Optional[Cover] = None

    def _is_taken(self, filename: str) -> bool:
        if self.cover is not None and self.cover.filename == filename:
            return True
        return any(s.filename == filename for s in self.sections)

    def _next_section_filename(self) -> str:
        index = len(self.sections) + 1
        filename = SECTION_FILENAME_FORMAT.format(index)
        while self._is_taken(filename):
            index += 1
            filename = SECTION_FILENAME_FORMAT.format(index)
        return filename

    def add_section(self, body: str, title: str = "", filename: str = "", css_path: str = "") -> str:
        """
        Ajoute une section à la fin de l'ordre de lecture.

        Args:
            body: Fragment de balisage inséré tel quel dans <body>
            title: Titre de la section (table des matières et <title>)
            filename: Nom interne souhaité (vide = sectionNNNN.xhtml)
            css_path: Chemin d'une feuille de style déjà enregistrée

        Returns:
            Chemin de la section relatif au dossier des documents XHTML

        Raises:
            NameConflictError: si le nom explicite est déjà utilisé
            AssetNotFoundError: si css_path n'est pas une feuille de style connue
        """
        if css_path:
            self.registry.get(css_path, AssetKind.STYLESHEET)

        internal = sanitize_filename(filename) if filename else ""
        if internal:
            if self._is_taken(internal):
                logger.warning("Section filename already used: %s", internal)
                raise NameConflictError(internal)
        else:
            internal = self._next_section_filename()

        section = Section(filename=internal, body=body, title=title, css_path=css_path)
        self.sections.append(section)
        logger.info("Added section %s (%s)", internal, title or "untitled")
        return section.path

    def set_cover(self, image_path: str, css_path: str = "") -> None:
        """
        Définit (ou remplace) la page de couverture.

        Si css_path est vide, la feuille de style de couverture intégrée est
        enregistrée et utilisée.
        """
        self.registry.get(image_path, AssetKind.IMAGE)
        if css_path:
            self.registry.get(css_path, AssetKind.STYLESHEET)
        else:
            css_path = self.registry.add_default_cover_css()

        # Le nom de l'ancienne couverture est libéré avant d'en choisir un
        self.cover = None
        filename = resolve_filename_collision(COVER_XHTML_FILENAME, self._is_taken)
        self.cover = Cover(image_path=image_path, css_path=css_path, filename=filename)
        logger.info("Cover set: %s (%s)", image_path, filename)

    def render_section(self, section: Section, book_title: str) -> str:
        """Produit le document XHTML d'une section."""
        return render_template(
            "section.xhtml",
            title=section.title or book_title,
            css_path=section.css_path,
            body=section.body,
        )

    def render_cover(self, book_title: str) -> Optional[str]:
        """Produit le document XHTML de couverture, ou None sans couverture."""
        if self.cover is None:
            return None
        return render_template(
            "cover.xhtml",
            title=book_title,
            css_path=self.cover.css_path,
            image_path=self.cover.image_path,
        )

    def documents(self) -> List[str]:
        """Noms des documents dans l'ordre de lecture (couverture en tête)."""
        names = [self.cover.filename] if self.cover is not None else []
        return names + [s.filename for s in self.sections]
