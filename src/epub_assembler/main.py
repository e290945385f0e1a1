"""
Point d'entrée principal pour EPUB Assembler
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)

USAGE = """Usage: python -m epub_assembler <recipe.json> <output.epub>
  recipe.json: Description JSON du livre (métadonnées, assets, sections)
  output.epub: Chemin du fichier EPUB à produire"""


def setup_logging():
    """Configure le système de logging."""
    ensure_directories()
    logger = logging.getLogger("epub_assembler")
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_assembler.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def run_cli(argv=None) -> int:
    """Construit un EPUB à partir d'une recette."""
    logger = logging.getLogger("epub_assembler")
    args = sys.argv[1:] if argv is None else argv

    if len(args) < 2:
        print(USAGE)
        return 1

    recipe_path, output_path = args[0], args[1]
    if not os.path.isfile(recipe_path):
        print(f"Error: {recipe_path} is not a valid file")
        return 1

    try:
        from .cli import build_from_recipe, print_build_summary
        from .core.epub import verify_epub

        book = build_from_recipe(recipe_path)
        book.write(output_path)
        summary = verify_epub(output_path)
        print_build_summary(output_path, summary)
        return 0 if not summary["problems"] else 2
    except Exception as e:
        logger.exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1


def main(argv=None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    logger = logging.getLogger("epub_assembler")
    logger.info("Starting EPUB Assembler")
    return run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
