# tests/core/test_epub_reader.py
"""
Tests pour le module core.epub.reader.
"""

import zipfile
from unittest.mock import MagicMock

from epub_assembler.core.book import Book
from epub_assembler.core.epub.reader import _get_authors, safe_read_epub, verify_epub


def _write_book(tmp_path, testdata_dir, monkeypatch) -> str:
    monkeypatch.chdir(tmp_path)
    book = Book("Verified title")
    book.author = "Jane Doe"
    book.language = "fr"
    book.identifier = "urn:uuid:00000000-0000-4000-8000-000000000000"
    css_path = book.add_css("testdata/cover.css")
    book.add_section("<p>One</p>", "One", css_path=css_path)
    book.add_section("<p>Two</p>", "Two")
    book.set_cover(book.add_image("testdata/gophercolor16x16.png"))
    destination = str(tmp_path / "verified.epub")
    book.write(destination)
    return destination


class TestSafeReadEpub:
    """Tests pour safe_read_epub."""

    def test_safe_read_epub_nonexistent_file(self):
        """Test qu'un fichier inexistant retourne None."""
        result = safe_read_epub("/fake/path/nonexistent.epub")
        assert result is None

    def test_safe_read_epub_invalid_file(self, tmp_path):
        """Test qu'un fichier invalide retourne None."""
        invalid_file = tmp_path / "invalid.epub"
        invalid_file.write_text("This is not an EPUB")

        result = safe_read_epub(str(invalid_file))
        assert result is None

    def test_safe_read_epub_written_book(self, tmp_path, testdata_dir, monkeypatch):
        path = _write_book(tmp_path, testdata_dir, monkeypatch)
        assert safe_read_epub(path) is not None


class TestGetAuthors:
    """Tests pour _get_authors."""

    def test_authors_filtered(self):
        book = MagicMock()
        book.get_metadata.return_value = [("Author 1", {}), ("", {}), ("Author 2", {})]
        assert _get_authors(book) == ["Author 1", "Author 2"]

    def test_no_authors(self):
        book = MagicMock()
        book.get_metadata.return_value = []
        assert _get_authors(book) is None


class TestVerifyEpub:
    """Tests pour verify_epub."""

    def test_nonexistent_file(self):
        """Test fichier inexistant: problème signalé, métadonnées vides."""
        result = verify_epub("/fake/path/nonexistent.epub")

        assert result["title"] is None
        assert result["sections"] == 0
        assert len(result["problems"]) == 1
        assert "not a zip archive" in result["problems"][0]

    def test_written_book(self, tmp_path, testdata_dir, monkeypatch):
        path = _write_book(tmp_path, testdata_dir, monkeypatch)

        result = verify_epub(path)

        assert result["problems"] == []
        assert result["title"] == "Verified title"
        assert result["authors"] == ["Jane Doe"]
        assert result["language"] == "fr"
        assert result["identifier"] == "urn:uuid:00000000-0000-4000-8000-000000000000"
        # couverture + deux sections
        assert result["sections"] == 3

    def test_mimetype_not_first(self, tmp_path):
        path = tmp_path / "bad.epub"
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("META-INF/container.xml", "<container/>")
            zf.writestr("mimetype", "application/epub+zip")

        result = verify_epub(str(path))

        assert "mimetype is not the first entry" in result["problems"]
        assert result["title"] is None

    def test_mimetype_compressed(self, tmp_path):
        path = tmp_path / "bad.epub"
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("mimetype", "application/epub+zip")

        result = verify_epub(str(path))

        assert result["problems"] == ["mimetype is compressed"]
