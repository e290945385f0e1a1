from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..config import CSS_FOLDER, FONTS_FOLDER, IMAGES_FOLDER


class AssetKind(Enum):
    """Types d'assets embarqués, avec leur dossier dans le contenu."""

    STYLESHEET = CSS_FOLDER
    IMAGE = IMAGES_FOLDER
    FONT = FONTS_FOLDER

    @property
    def folder(self) -> str:
        return self.value

    @property
    def id_prefix(self) -> str:
        return {"STYLESHEET": "css", "IMAGE": "image", "FONT": "font"}[self.name]


@dataclass
class Asset:
    """Modèle de données pour une ressource embarquée (CSS, image, police)."""

    kind: AssetKind
    source: str
    data: bytes
    fingerprint: str
    filename: str
    media_type: str

    @property
    def href(self) -> str:
        """Chemin relatif au fichier OPF."""
        return f"{self.kind.folder}/{self.filename}"

    @property
    def path(self) -> str:
        """Chemin relatif au dossier des documents XHTML."""
        return f"../{self.href}"


@dataclass
class Section:
    """Modèle de données pour une section de texte."""

    filename: str
    body: str
    title: str = ""
    css_path: str = ""

    @property
    def path(self) -> str:
        # Les sections vivent dans le même dossier que les références résolues
        return self.filename


@dataclass
class Cover:
    """Page de couverture synthétisée."""

    image_path: str
    css_path: str
    filename: str


@dataclass
class ManifestItem:
    """Entrée du manifeste OPF."""

    id: str
    href: str
    media_type: str
    properties: List[str] = field(default_factory=list)

    @property
    def properties_attr(self) -> Optional[str]:
        return " ".join(self.properties) if self.properties else None
