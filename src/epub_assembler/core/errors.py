# epub_assembler/src/epub_assembler/core/errors.py
"""
Exceptions levées par le moteur d'assemblage EPUB.

Toutes les erreurs sont levées de manière synchrone par l'opération
fautive (ajout d'asset, de section, écriture) et héritent de
EpubAssemblerError.
"""


class EpubAssemblerError(Exception):
    """Erreur de base du package."""


class SourceUnreadableError(EpubAssemblerError):
    """Fichier source local absent ou impossible à ouvrir."""

    def __init__(self, source: str, reason: str = ""):
        self.source = source
        super().__init__(f"Cannot read source {source!r}: {reason}" if reason else source)


class SourceFetchFailedError(EpubAssemblerError):
    """Source distante en erreur (transport ou statut non 2xx)."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        super().__init__(f"Cannot fetch {url!r}: {reason}" if reason else url)


class UnsupportedMediaTypeError(EpubAssemblerError):
    """Le contenu ne correspond pas au type d'asset déclaré."""


class NameConflictError(EpubAssemblerError):
    """Nom de fichier explicite déjà utilisé par un autre contenu."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Filename already used by different content: {filename}")


class AssetNotFoundError(EpubAssemblerError):
    """Chemin d'asset inconnu du registre."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No registered asset for path: {path}")


class WriteFailedError(EpubAssemblerError):
    """Impossible de créer ou tronquer la destination."""


class UnwritableError(EpubAssemblerError):
    """Échec de copie d'une entrée dans l'archive."""
