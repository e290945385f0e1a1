"""
Détection du type de média des assets.

Chaque type d'asset a son détecteur:
- images: signature via Pillow (plus SVG par inspection du texte)
- polices: nombres magiques, puis extension en dernier recours
- feuilles de style: texte UTF-8
"""

import io
import logging
import os
import re

from ebooklib.utils import guess_type
from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedMediaTypeError
from .models import AssetKind

logger = logging.getLogger(__name__)

CSS_MEDIA_TYPE = "text/css"
XHTML_MEDIA_TYPE = "application/xhtml+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
SVG_MEDIA_TYPE = "image/svg+xml"

# Types d'images du socle EPUB 3
_CORE_IMAGE_FORMATS = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "GIF": "image/gif",
    "WEBP": "image/webp",
    # JPEG avec segment MPF (appareils photo, téléphones)
    "MPO": "image/jpeg",
}

_FONT_SIGNATURES = (
    (b"\x00\x01\x00\x00", "font/ttf"),
    (b"true", "font/ttf"),
    (b"OTTO", "font/otf"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
)

# Prologue XML (déclaration, commentaires, doctype) puis élément racine svg
_SVG_ROOT_RE = re.compile(
    rb"\A(?:\xef\xbb\xbf)?\s*"
    rb"(?:<\?xml[^>]*\?>\s*)?"
    rb"(?:(?:<!--.*?-->|<!DOCTYPE[^>\[]*(?:\[.*?\])?\s*>)\s*)*"
    rb"<(?:\w+:)?svg[\s>/]",
    re.DOTALL,
)


def _detect_image(data: bytes, name: str) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError):
        fmt = None

    if fmt in _CORE_IMAGE_FORMATS:
        return _CORE_IMAGE_FORMATS[fmt]

    if _SVG_ROOT_RE.match(data):
        return SVG_MEDIA_TYPE

    raise UnsupportedMediaTypeError(f"{name}: not a supported image format ({fmt or 'unknown'})")


def _detect_font(data: bytes, name: str) -> str:
    head = data[:4]
    for signature, media_type in _FONT_SIGNATURES:
        if head == signature:
            return media_type

    # Fallback sur l'extension
    ext = os.path.splitext(name)[1].lower()
    guessed = guess_type(f"font{ext}")[0] if ext else None
    if guessed and guessed.startswith("font/"):
        logger.debug("Font type for %s guessed from extension: %s", name, guessed)
        return guessed

    raise UnsupportedMediaTypeError(f"{name}: not a recognized font format")


def _detect_stylesheet(data: bytes, name: str) -> str:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnsupportedMediaTypeError(f"{name}: stylesheet is not UTF-8 text") from e
    return CSS_MEDIA_TYPE


_DETECTORS = {
    AssetKind.IMAGE: _detect_image,
    AssetKind.FONT: _detect_font,
    AssetKind.STYLESHEET: _detect_stylesheet,
}


def detect_media_type(kind: AssetKind, data: bytes, name: str = "") -> str:
    """
    Détermine le media-type d'un asset selon son type déclaré.

    Args:
        kind: Type d'asset déclaré
        data: Contenu brut
        name: Nom de la source (messages d'erreur, extension)

    Returns:
        Media-type à déclarer dans le manifeste

    Raises:
        UnsupportedMediaTypeError: si le détecteur ne reconnaît pas le contenu
    """
    return _DETECTORS[kind](data, name)
