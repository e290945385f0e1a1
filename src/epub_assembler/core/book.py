"""
Livre en cours d'assemblage (racine d'agrégat).

Un Book accumule métadonnées, sections et assets via ses méthodes de
mutation, puis les sérialise en une archive EPUB avec write(). Après
écriture, le livre reste modifiable et peut être réécrit.
"""

import logging
import posixpath
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..config import (
    CONTAINER_FILENAME,
    CONTENT_FOLDER,
    DEFAULT_LANGUAGE,
    META_INF_FOLDER,
    MIMETYPE,
    MIMETYPE_FILENAME,
    NAV_FILENAME,
    NCX_FILENAME,
    PKG_FILENAME,
    VALID_DIRECTIONS,
    XHTML_FOLDER,
)
from .assets import AssetRegistry
from .content import ContentAssembler
from .epub.writer import ArchiveWriter, VirtualFile
from .io_providers import Fetcher, Filesystem, LocalFilesystem, SourceLoader
from .models import Asset, AssetKind, Cover, Section
from .navigation import NavigationBuilder
from .package import PackageDescriptorBuilder, format_modified
from .rendering import render_template

logger = logging.getLogger(__name__)


def new_identifier() -> str:
    """Identifiant unique par défaut (URN UUID)."""
    return f"urn:uuid:{uuid.uuid4()}"


class Book:
    """
    Livre EPUB en mémoire.

    Args:
        title: Titre du livre
        fs: Système de fichiers pour lire les sources et écrire l'archive
        fetcher: Fonction url -> octets pour les sources distantes
    """

    def __init__(
        self,
        title: str,
        fs: Optional[Filesystem] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        self.fs = fs if fs is not None else LocalFilesystem()
        self.title = title
        self.author: Optional[str] = None
        self.language = DEFAULT_LANGUAGE
        self.identifier = new_identifier()
        self.description: Optional[str] = None
        self._direction: Optional[str] = None

        self.registry = AssetRegistry(SourceLoader(self.fs, fetcher))
        self.content = ContentAssembler(self.registry)

    # --- Métadonnées ---

    @property
    def direction(self) -> Optional[str]:
        """page-progression-direction ("ltr", "rtl", "default" ou None)."""
        return self._direction

    @direction.setter
    def direction(self, value: Optional[str]):
        if value is not None and value not in VALID_DIRECTIONS:
            raise ValueError(f"Invalid page progression direction: {value!r}")
        self._direction = value

    # --- Assets ---

    def add_asset(self, kind: AssetKind, source: str, filename: str = "") -> str:
        """Ajoute un asset et retourne son chemin relatif aux documents XHTML."""
        return self.registry.add_asset(kind, source, filename)

    def add_css(self, source: str, filename: str = "") -> str:
        return self.add_asset(AssetKind.STYLESHEET, source, filename)

    def add_image(self, source: str, filename: str = "") -> str:
        return self.add_asset(AssetKind.IMAGE, source, filename)

    def add_font(self, source: str, filename: str = "") -> str:
        return self.add_asset(AssetKind.FONT, source, filename)

    # --- Contenu ---

    def add_section(self, body: str, title: str = "", filename: str = "", css_path: str = "") -> str:
        """Ajoute une section et retourne son chemin relatif aux documents XHTML."""
        return self.content.add_section(body, title, filename, css_path)

    def set_cover(self, image_path: str, css_path: str = "") -> None:
        """Définit la couverture à partir d'une image (et d'une CSS) déjà ajoutées."""
        self.content.set_cover(image_path, css_path)

    @property
    def sections(self) -> List[Section]:
        return list(self.content.sections)

    @property
    def cover(self) -> Optional[Cover]:
        return self.content.cover

    @property
    def assets(self) -> List[Asset]:
        return self.registry.assets()

    # --- Écriture ---

    def virtual_files(self, moment: datetime) -> List[VirtualFile]:
        """
        Liste ordonnée des fichiers de l'archive (chemin, octets).

        mimetype et container.xml d'abord, puis le descripteur, la
        navigation, les documents et les assets.
        """
        package_path = posixpath.join(CONTENT_FOLDER, PKG_FILENAME)
        nav, ncx = NavigationBuilder(self).build()
        opf = PackageDescriptorBuilder(self).build(format_modified(moment))

        files: List[VirtualFile] = [
            (MIMETYPE_FILENAME, MIMETYPE.encode("ascii")),
            (
                posixpath.join(META_INF_FOLDER, CONTAINER_FILENAME),
                render_template("container.xml", package_path=package_path).encode("utf-8"),
            ),
            (package_path, opf.encode("utf-8")),
            (posixpath.join(CONTENT_FOLDER, NAV_FILENAME), nav.encode("utf-8")),
            (posixpath.join(CONTENT_FOLDER, NCX_FILENAME), ncx.encode("utf-8")),
        ]

        xhtml_folder = posixpath.join(CONTENT_FOLDER, XHTML_FOLDER)
        cover_xhtml = self.content.render_cover(self.title)
        if cover_xhtml is not None:
            files.append(
                (posixpath.join(xhtml_folder, self.content.cover.filename), cover_xhtml.encode("utf-8"))
            )

        for section in self.content.sections:
            document = self.content.render_section(section, self.title)
            files.append((posixpath.join(xhtml_folder, section.filename), document.encode("utf-8")))

        for asset in self.registry.assets():
            files.append((posixpath.join(CONTENT_FOLDER, asset.href), asset.data))

        return files

    def write(self, destination: str) -> None:
        """
        Écrit le livre dans destination.

        Raises:
            WriteFailedError: destination impossible à créer
            UnwritableError: échec pendant la copie d'une entrée
        """
        moment = datetime.now(timezone.utc).replace(microsecond=0)
        logger.info("Writing EPUB '%s' to %s", self.title, destination)
        ArchiveWriter(self.fs).write(destination, self.virtual_files(moment), moment)
