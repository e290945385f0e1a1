"""
Construction du descripteur de paquet (package.opf).

Métadonnées, manifeste et spine sont dérivés de l'état courant du livre à
chaque appel de build(); seul l'horodatage dcterms:modified change entre
deux appels sans mutation.
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from ..config import MODIFIED_FORMAT, NAV_FILENAME, NCX_FILENAME, XHTML_FOLDER
from .file_utils import make_xml_id
from .media_types import NCX_MEDIA_TYPE, XHTML_MEDIA_TYPE
from .models import Asset, ManifestItem
from .rendering import render_template

if TYPE_CHECKING:
    from .book import Book

logger = logging.getLogger(__name__)

NAV_ID = "nav"
NCX_ID = "ncx"
COVER_ID = "cover"


def section_id(filename: str) -> str:
    return make_xml_id("section", filename)


def asset_id(asset: Asset) -> str:
    return make_xml_id(asset.kind.id_prefix, asset.filename)


def format_modified(moment: Optional[datetime] = None) -> str:
    """Horodatage UTC à la seconde, format dcterms:modified."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(MODIFIED_FORMAT)


class PackageDescriptorBuilder:
    """Produit le document OPF d'un livre."""

    def __init__(self, book: "Book"):
        self.book = book

    def manifest(self) -> List[ManifestItem]:
        """
        Items du manifeste: navigation, couverture, sections puis assets.

        L'image de couverture porte la propriété "cover-image".
        """
        content = self.book.content
        items = [
            ManifestItem(NAV_ID, NAV_FILENAME, XHTML_MEDIA_TYPE, ["nav"]),
            ManifestItem(NCX_ID, NCX_FILENAME, NCX_MEDIA_TYPE),
        ]

        if content.cover is not None:
            items.append(
                ManifestItem(COVER_ID, f"{XHTML_FOLDER}/{content.cover.filename}", XHTML_MEDIA_TYPE)
            )

        for section in content.sections:
            items.append(
                ManifestItem(
                    section_id(section.filename),
                    f"{XHTML_FOLDER}/{section.filename}",
                    XHTML_MEDIA_TYPE,
                )
            )

        cover_image = content.cover.image_path if content.cover is not None else None
        for asset in self.book.registry.assets():
            properties = ["cover-image"] if asset.path == cover_image else []
            items.append(ManifestItem(asset_id(asset), asset.href, asset.media_type, properties))

        return items

    def spine(self) -> List[str]:
        """Idrefs dans l'ordre de lecture, couverture en tête."""
        content = self.book.content
        idrefs = [COVER_ID] if content.cover is not None else []
        return idrefs + [section_id(s.filename) for s in content.sections]

    def build(self, modified: Optional[str] = None) -> str:
        """
        Rend le document package.opf.

        Args:
            modified: Horodatage à utiliser (par défaut: maintenant, UTC)
        """
        book = self.book
        cover = book.content.cover
        cover_image_id = None
        cover_href = None
        if cover is not None:
            cover_image_id = asset_id(book.registry.get(cover.image_path))
            cover_href = f"{XHTML_FOLDER}/{cover.filename}"

        manifest = self.manifest()
        spine = self.spine()
        logger.debug("Building OPF: %d manifest items, %d spine entries", len(manifest), len(spine))

        return render_template(
            "package.opf",
            ncx_id=NCX_ID,
            identifier=book.identifier,
            title=book.title,
            language=book.language,
            author=book.author,
            description=book.description,
            modified=modified or format_modified(),
            cover_image_id=cover_image_id,
            cover_href=cover_href,
            manifest=manifest,
            spine=spine,
            direction=book.direction,
        )
