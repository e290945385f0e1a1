"""
Fournisseurs d'entrées/sorties injectables.

Le moteur ne parle jamais directement au disque ni au réseau: il passe
par un Filesystem (lecture des sources, écriture de l'archive) et par
un fetcher HTTP. Les tests utilisent MemoryFilesystem à la place du
disque réel.
"""

import io
import logging
import os
from typing import BinaryIO, Callable, Dict, Optional, Protocol
from urllib.parse import urlparse

import requests

from ..config import REMOTE_SCHEMES
from .errors import SourceFetchFailedError, SourceUnreadableError
from .network_utils import http_download_bytes

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], bytes]


class Filesystem(Protocol):
    def read_bytes(self, path: str) -> bytes:
        """Contenu complet du fichier. Lève OSError en cas d'échec."""
        ...

    def open_write(self, path: str) -> BinaryIO:
        """Fichier binaire ouvert en écriture (tronqué). Lève OSError en cas d'échec."""
        ...


class LocalFilesystem:
    """Accès au système de fichiers réel."""

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def open_write(self, path: str) -> BinaryIO:
        return open(path, "wb")


class _MemoryFile(io.BytesIO):
    """Fichier en mémoire dont le contenu est publié à la fermeture."""

    def __init__(self, store: Dict[str, bytes], path: str):
        super().__init__()
        self._store = store
        self._path = path

    def close(self):
        if not self.closed:
            self._store[self._path] = self.getvalue()
        super().close()


class MemoryFilesystem:
    """Système de fichiers en mémoire (dict chemin -> octets)."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})

    def read_bytes(self, path: str) -> bytes:
        try:
            return self.files[os.fspath(path)]
        except KeyError:
            raise FileNotFoundError(path) from None

    def open_write(self, path: str) -> BinaryIO:
        return _MemoryFile(self.files, os.fspath(path))


def is_remote(source: str) -> bool:
    """Indique si la source est une URL http(s)."""
    return urlparse(str(source)).scheme.lower() in REMOTE_SCHEMES


class SourceLoader:
    """
    Lit les octets d'une source, locale ou distante.

    Le registre d'assets n'a pas à connaître le type de source: les
    erreurs sont converties en SourceUnreadableError / SourceFetchFailedError.
    """

    def __init__(self, fs: Optional[Filesystem] = None, fetcher: Optional[Fetcher] = None):
        self.fs = fs if fs is not None else LocalFilesystem()
        self.fetcher = fetcher if fetcher is not None else http_download_bytes

    def load(self, source: str) -> bytes:
        source = os.fspath(source)
        if is_remote(source):
            return self._fetch(source)
        try:
            return self.fs.read_bytes(source)
        except OSError as e:
            logger.warning("Cannot read local source %s: %s", source, e)
            raise SourceUnreadableError(source, str(e)) from e

    def _fetch(self, url: str) -> bytes:
        try:
            return self.fetcher(url)
        except (requests.RequestException, OSError) as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            raise SourceFetchFailedError(url, str(e)) from e
