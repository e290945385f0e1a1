# epub_assembler/src/epub_assembler/config.py
"""
Configuration et constantes pour EPUB Assembler
"""

import os

# ---------- Format OCF ----------
MIMETYPE = "application/epub+zip"
MIMETYPE_FILENAME = "mimetype"
META_INF_FOLDER = "META-INF"
CONTAINER_FILENAME = "container.xml"

# ---------- Dossiers du contenu ----------
CONTENT_FOLDER = "EPUB"
XHTML_FOLDER = "xhtml"
CSS_FOLDER = "css"
IMAGES_FOLDER = "images"
FONTS_FOLDER = "fonts"

# ---------- Fichiers fixes ----------
PKG_FILENAME = "package.opf"
NAV_FILENAME = "nav.xhtml"
NCX_FILENAME = "toc.ncx"
COVER_XHTML_FILENAME = "cover.xhtml"
COVER_CSS_FILENAME = "cover.css"
SECTION_FILENAME_FORMAT = "section{:04d}.xhtml"

# ---------- Métadonnées par défaut ----------
DEFAULT_LANGUAGE = "en"
VALID_DIRECTIONS = ("ltr", "rtl", "default")
MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# ---------- Réseau ----------
FETCH_TIMEOUT_ENV_VAR = "EPUB_ASSEMBLER_FETCH_TIMEOUT"
REMOTE_SCHEMES = ("http", "https")


def _read_fetch_timeout():
    raw = os.getenv(FETCH_TIMEOUT_ENV_VAR)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


# Pas de timeout par défaut: l'appelant choisit
FETCH_TIMEOUT = _read_fetch_timeout()

# ---------- Dossiers ----------
LOG_DIR = "logs"

# ---------- Configuration logging ----------
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)
