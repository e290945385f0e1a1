# epub_assembler/src/epub_assembler/core/epub/writer.py
"""
Module d'écriture EPUB.

Responsabilité unique: sérialiser la liste virtuelle des fichiers du livre
dans une archive OCF, en contrôlant l'ordre et la compression de chaque
entrée (le fichier mimetype doit être la première entrée, non compressée).
"""

import logging
import zipfile
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ...config import MIMETYPE_FILENAME
from ..errors import UnwritableError, WriteFailedError
from ..io_providers import Filesystem, LocalFilesystem

logger = logging.getLogger(__name__)

VirtualFile = Tuple[str, bytes]

# rw-r--r--
_ENTRY_PERMISSIONS = 0o644 << 16


def _make_zip_info(name: str, moment: datetime) -> zipfile.ZipInfo:
    """
    Prépare l'entête d'une entrée.

    Args:
        name: Chemin de l'entrée dans l'archive
        moment: Date appliquée à toutes les entrées d'une même écriture

    Returns:
        ZipInfo en mode "store" pour mimetype, "deflate" sinon
    """
    info = zipfile.ZipInfo(name, date_time=moment.timetuple()[:6])
    if name == MIMETYPE_FILENAME:
        info.compress_type = zipfile.ZIP_STORED
    else:
        info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = _ENTRY_PERMISSIONS
    return info


class ArchiveWriter:
    """
    Écrit une archive EPUB à partir d'une liste (chemin, octets).

    L'écrivain ne modifie rien: il peut être appelé plusieurs fois vers des
    destinations différentes.
    """

    def __init__(self, fs: Optional[Filesystem] = None):
        self.fs = fs if fs is not None else LocalFilesystem()

    def write(self, destination: str, files: Iterable[VirtualFile], moment: datetime) -> None:
        """
        Sérialise les fichiers dans destination, dans l'ordre donné.

        Le premier fichier doit être mimetype.

        Raises:
            WriteFailedError: si la destination ne peut pas être créée/tronquée
            UnwritableError: si une entrée ne peut pas être copiée
        """
        files = list(files)
        if not files or files[0][0] != MIMETYPE_FILENAME:
            raise ValueError("The mimetype file must be the first archive entry")

        try:
            handle = self.fs.open_write(destination)
        except OSError as e:
            logger.exception("Cannot create destination %s", destination)
            raise WriteFailedError(f"Cannot create {destination}: {e}") from e

        current = None
        try:
            with handle, zipfile.ZipFile(handle, "w") as zf:
                for name, data in files:
                    current = name
                    zf.writestr(_make_zip_info(name, moment), data)
                current = None
        except (OSError, zipfile.LargeZipFile) as e:
            logger.exception("Failed writing %s (entry %s)", destination, current)
            raise UnwritableError(f"Cannot write entry {current or '<central directory>'}: {e}") from e

        logger.info("Wrote %d entries to %s", len(files), destination)
