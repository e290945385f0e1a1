"""
Registre des assets embarqués.

Responsabilité unique: suivre chaque CSS/image/police, dédupliquer par
empreinte de contenu et attribuer des noms de fichiers internes stables.
"""

import hashlib
import logging
from typing import Dict, List, Optional

from ..config import COVER_CSS_FILENAME
from .errors import AssetNotFoundError, NameConflictError
from .file_utils import resolve_filename_collision, sanitize_filename, source_basename
from .io_providers import SourceLoader
from .media_types import detect_media_type
from .models import Asset, AssetKind

logger = logging.getLogger(__name__)

DEFAULT_COVER_CSS = b"""body {
  background-color: #FFFFFF;
  margin-bottom: 0px;
  margin-left: 0px;
  margin-right: 0px;
  margin-top: 0px;
  text-align: center;
}
img {
  max-height: 100%;
  max-width: 100%;
}
"""

# Nom utilisé quand la source ne fournit aucun nom exploitable
_FALLBACK_NAMES = {
    AssetKind.STYLESHEET: "style.css",
    AssetKind.IMAGE: "image",
    AssetKind.FONT: "font",
}


def fingerprint(data: bytes) -> str:
    """Empreinte SHA-256 du contenu."""
    return hashlib.sha256(data).hexdigest()


class AssetRegistry:
    """
    Registre des assets d'un livre.

    Les noms sont uniques par type (un dossier par type). Deux ajouts dont
    le contenu est identique retournent toujours le même chemin.
    """

    def __init__(self, loader: Optional[SourceLoader] = None):
        self.loader = loader if loader is not None else SourceLoader()
        self._by_name: Dict[AssetKind, Dict[str, Asset]] = {kind: {} for kind in AssetKind}
        self._by_fingerprint: Dict[AssetKind, Dict[str, Asset]] = {kind: {} for kind in AssetKind}

    def add_asset(self, kind: AssetKind, source: str, requested_name: str = "") -> str:
        """
        Ajoute un asset depuis un chemin local ou une URL.

        Le contenu est lu et validé immédiatement; en cas d'erreur le
        registre n'est pas modifié.

        Args:
            kind: Type d'asset
            source: Chemin local ou URL http(s)
            requested_name: Nom interne souhaité (vide = dérivé de la source)

        Returns:
            Chemin de l'asset relatif au dossier des documents XHTML

        Raises:
            SourceUnreadableError, SourceFetchFailedError,
            UnsupportedMediaTypeError, NameConflictError
        """
        data = self.loader.load(source)
        return self.add_content(kind, data, str(source), requested_name)

    def add_content(
        self, kind: AssetKind, data: bytes, source: str, requested_name: str = ""
    ) -> str:
        """Enregistre un contenu déjà chargé (même règles que add_asset)."""
        digest = fingerprint(data)
        names = self._by_name[kind]

        filename = sanitize_filename(requested_name) if requested_name else ""
        if filename:
            claimed = names.get(filename)
            if claimed is not None:
                if claimed.fingerprint == digest:
                    logger.debug("Reusing %s for %s", claimed.filename, source)
                    return claimed.path
                logger.warning("Name conflict on %s (source %s)", filename, source)
                raise NameConflictError(filename)

        existing = self._by_fingerprint[kind].get(digest)
        if existing is not None:
            logger.info("Duplicate content for %s, reusing %s", source, existing.filename)
            return existing.path

        if not filename:
            base = sanitize_filename(source_basename(source)) or _FALLBACK_NAMES[kind]
            filename = resolve_filename_collision(base, lambda n: n in names)

        media_type = detect_media_type(kind, data, filename)

        asset = Asset(
            kind=kind,
            source=source,
            data=data,
            fingerprint=digest,
            filename=filename,
            media_type=media_type,
        )
        names[filename] = asset
        self._by_fingerprint[kind][digest] = asset
        logger.info("Registered %s %s as %s (%s)", kind.name.lower(), source, filename, media_type)
        return asset.path

    def add_default_cover_css(self) -> str:
        """Enregistre la feuille de style de couverture intégrée."""
        return self.add_content(AssetKind.STYLESHEET, DEFAULT_COVER_CSS, COVER_CSS_FILENAME)

    def get(self, path: str, kind: Optional[AssetKind] = None) -> Asset:
        """
        Retrouve un asset par son chemin relatif.

        Raises:
            AssetNotFoundError: si le chemin n'est pas enregistré (pour ce type)
        """
        kinds = [kind] if kind is not None else list(AssetKind)
        for k in kinds:
            for asset in self._by_name[k].values():
                if asset.path == path:
                    return asset
        raise AssetNotFoundError(path)

    def assets(self, kind: Optional[AssetKind] = None) -> List[Asset]:
        """Liste des assets, par type puis ordre d'enregistrement."""
        kinds = [kind] if kind is not None else list(AssetKind)
        return [asset for k in kinds for asset in self._by_name[k].values()]

    def __len__(self) -> int:
        return sum(len(names) for names in self._by_name.values())
