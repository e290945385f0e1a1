"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests.
"""

import io
import zipfile
from typing import Dict

import pytest
from PIL import Image

from epub_assembler.core.book import Book
from epub_assembler.core.io_providers import MemoryFilesystem

TEST_TITLE = "My title"
TEST_CSS_SOURCE = "testdata/cover.css"
TEST_IMAGE_SOURCE = "testdata/gophercolor16x16.png"
TEST_OTHER_IMAGE_SOURCE = "testdata/other16x16.png"
TEST_FONT_SOURCE = "testdata/redacted-script-regular.ttf"


def _png(color) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), color).save(buf, format="PNG")
    return buf.getvalue()


def _trim_all_space(s: str) -> str:
    return "\n".join(line.strip() for line in s.split("\n") if line.strip())


def _read_archive(data: bytes) -> Dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


@pytest.fixture
def trim_all_space():
    """Supprime les espaces de chaque ligne et les lignes vides (comparaisons)."""
    return _trim_all_space


@pytest.fixture
def read_archive():
    """Extrait toutes les entrées d'une archive en mémoire."""
    return _read_archive


@pytest.fixture(scope="session")
def png_bytes() -> bytes:
    """PNG 16x16 valide."""
    return _png((0, 128, 255))


@pytest.fixture(scope="session")
def other_png_bytes() -> bytes:
    """Second PNG, de contenu différent."""
    return _png((255, 0, 0))


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """Entête TrueType minimal."""
    return b"\x00\x01\x00\x00" + b"\x00" * 60


@pytest.fixture(scope="session")
def css_bytes() -> bytes:
    return b"body {\n  background-color: #FFFFFF;\n}\nimg {\n  max-width: 100%;\n}\n"


@pytest.fixture
def memory_fs(png_bytes, other_png_bytes, font_bytes, css_bytes) -> MemoryFilesystem:
    """Système de fichiers en mémoire contenant les données de test."""
    return MemoryFilesystem(
        {
            TEST_CSS_SOURCE: css_bytes,
            TEST_IMAGE_SOURCE: png_bytes,
            TEST_OTHER_IMAGE_SOURCE: other_png_bytes,
            TEST_FONT_SOURCE: font_bytes,
        }
    )


@pytest.fixture
def book(memory_fs) -> Book:
    """Livre vide adossé au système de fichiers en mémoire."""
    return Book(TEST_TITLE, fs=memory_fs)


@pytest.fixture
def write_and_extract(memory_fs):
    """Écrit un livre en mémoire et retourne ses entrées extraites."""

    def _write(book: Book, destination: str = "My EPUB.epub") -> Dict[str, bytes]:
        book.write(destination)
        return _read_archive(memory_fs.files[destination])

    return _write


@pytest.fixture
def testdata_dir(tmp_path, png_bytes, font_bytes, css_bytes):
    """Dossier réel contenant les données de test."""
    data_dir = tmp_path / "testdata"
    data_dir.mkdir()
    (data_dir / "cover.css").write_bytes(css_bytes)
    (data_dir / "gophercolor16x16.png").write_bytes(png_bytes)
    (data_dir / "redacted-script-regular.ttf").write_bytes(font_bytes)
    return data_dir
