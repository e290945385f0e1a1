"""
Utilitaires réseau (téléchargement des assets distants).

Aucun retry automatique: une erreur transitoire remonte immédiatement,
c'est à l'appelant de relancer l'ajout.
"""

import logging
from typing import Optional

import requests

from .. import config

logger = logging.getLogger(__name__)


def http_download_bytes(url: str, timeout: Optional[float] = None) -> bytes:
    """Télécharge des données binaires. Lève requests.RequestException en cas d'échec."""
    if timeout is None:
        timeout = config.FETCH_TIMEOUT
    logger.debug("Downloading bytes from %s", url)
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    # 3xx non suivis (300 sans Location, 304): pas de contenu exploitable
    if not 200 <= r.status_code < 300:
        raise requests.HTTPError(f"{r.status_code} for {url}", response=r)
    return r.content
