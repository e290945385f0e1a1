"""
Tests pour le module core.media_types.
"""

import io

import pytest
from PIL import Image

from epub_assembler.core.errors import UnsupportedMediaTypeError
from epub_assembler.core.media_types import detect_media_type
from epub_assembler.core.models import AssetKind


def _image(fmt: str) -> bytes:
    buf = io.BytesIO()
    img = Image.new("RGB", (4, 4), (10, 20, 30))
    if fmt == "MPO":
        # Deux vues: segment MPF écrit dans l'entête JPEG
        img.save(buf, format=fmt, save_all=True, append_images=[Image.new("RGB", (4, 4))])
    else:
        img.save(buf, format=fmt)
    return buf.getvalue()


class TestImageDetection:
    """Tests pour la détection des images."""

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            ("PNG", "image/png"),
            ("JPEG", "image/jpeg"),
            ("GIF", "image/gif"),
            # JPEG d'appareil photo, lu comme MPO par Pillow
            ("MPO", "image/jpeg"),
        ],
    )
    def test_core_formats(self, fmt, expected):
        assert detect_media_type(AssetKind.IMAGE, _image(fmt), "x") == expected

    @pytest.mark.parametrize(
        "data",
        [
            b'<svg xmlns="http://www.w3.org/2000/svg"/>',
            b'<?xml version="1.0"?>\n<svg xmlns="http://www.w3.org/2000/svg"></svg>',
            b'\xef\xbb\xbf<?xml version="1.0"?>\n<!-- logo -->\n'
            b'<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
            b'"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
            b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>',
        ],
    )
    def test_svg(self, data):
        assert detect_media_type(AssetKind.IMAGE, data, "x.svg") == "image/svg+xml"

    def test_xhtml_with_inline_svg_rejected(self):
        """Test document XHTML contenant un svg: la racine n'est pas svg."""
        data = (
            b'<?xml version="1.0"?>\n<html xmlns="http://www.w3.org/1999/xhtml"><body>'
            b'<svg xmlns="http://www.w3.org/2000/svg"></svg></body></html>'
        )
        with pytest.raises(UnsupportedMediaTypeError):
            detect_media_type(AssetKind.IMAGE, data, "page.svg")

    def test_non_core_format_rejected(self):
        """Test format reconnu par Pillow mais hors socle EPUB."""
        with pytest.raises(UnsupportedMediaTypeError):
            detect_media_type(AssetKind.IMAGE, _image("BMP"), "x.bmp")

    def test_garbage_rejected(self):
        with pytest.raises(UnsupportedMediaTypeError):
            detect_media_type(AssetKind.IMAGE, b"not an image", "x.png")


class TestFontDetection:
    """Tests pour la détection des polices."""

    @pytest.mark.parametrize(
        "head,expected",
        [
            (b"\x00\x01\x00\x00", "font/ttf"),
            (b"OTTO", "font/otf"),
            (b"wOFF", "font/woff"),
            (b"wOF2", "font/woff2"),
        ],
    )
    def test_signatures(self, head, expected):
        assert detect_media_type(AssetKind.FONT, head + b"\x00" * 12, "font") == expected

    def test_unknown_font_rejected(self):
        with pytest.raises(UnsupportedMediaTypeError):
            detect_media_type(AssetKind.FONT, b"GIF89a", "x.gif")


class TestStylesheetDetection:
    """Tests pour les feuilles de style."""

    def test_utf8_css(self):
        assert detect_media_type(AssetKind.STYLESHEET, "p { content: 'é'; }".encode(), "a.css") == "text/css"

    def test_binary_css_rejected(self):
        with pytest.raises(UnsupportedMediaTypeError):
            detect_media_type(AssetKind.STYLESHEET, b"\xff\xfe\xfa", "a.css")
