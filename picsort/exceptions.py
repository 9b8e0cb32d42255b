"""Exceptions personnalisées pour les opérations de picsort."""

from pathlib import Path
from typing import List, Optional

from picsort.models.media import MoveRecord


class PicsortError(Exception):
    """Classe de base pour toutes les erreurs picsort."""

    pass


class PathNotFoundError(PicsortError):
    """Chemin introuvable sur le disque."""

    pass


class SourceNotFoundError(PathNotFoundError):
    """Fichier source d'un déplacement ou d'une miniature introuvable."""

    pass


class InvalidDirectoryError(PicsortError):
    """Le chemin attendu comme répertoire n'en est pas un."""

    pass


class DestinationInvalidError(InvalidDirectoryError):
    """Répertoire de destination absent ou qui n'est pas un répertoire."""

    pass


class InvalidNameError(PicsortError):
    """Nom de fichier inutilisable (vide, séparateur de chemin, etc.)."""

    pass


class NameSpaceExhaustedError(PicsortError):
    """Aucun nom libre trouvé dans la limite de tentatives."""

    pass


class FileOperationError(PicsortError):
    """Erreur du système de fichiers (déplacement, lecture, écriture)."""

    pass


class MoveFailedError(FileOperationError):
    """Le renommage vers la destination a échoué."""

    pass


class ReadFailedError(FileOperationError):
    """L'énumération d'un répertoire a échoué."""

    pass


class BatchMoveError(PicsortError):
    """
    Échec d'un déplacement par lot.

    Le lot s'arrête au premier échec. Les fichiers déjà déplacés le restent
    et sont listés dans ``completed``.

    Attributs :
        failed_source: Source dont le déplacement a échoué.
        completed: MoveRecord des éléments déplacés avant l'échec.
    """

    def __init__(
        self,
        message: str,
        failed_source: Path,
        completed: Optional[List[MoveRecord]] = None,
    ) -> None:
        super().__init__(message)
        self.failed_source = failed_source
        self.completed: List[MoveRecord] = list(completed or [])

    @property
    def moved_paths(self) -> List[Path]:
        """Chemins finaux des éléments déplacés avant l'échec."""
        return [record.new_path for record in self.completed]


class ThumbnailGenerationError(PicsortError):
    """
    Échec du décodage, du redimensionnement ou de l'outil externe.

    Attributs :
        diagnostics: Sortie d'erreur de l'outil externe, telle quelle.
        returncode: Code de sortie du processus externe, si applicable.
    """

    def __init__(
        self,
        message: str,
        diagnostics: str = "",
        returncode: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics
        self.returncode = returncode


class WatchSetupError(PicsortError):
    """Le sous-système de notification n'a pas pu être initialisé."""

    pass


class SettingsError(PicsortError):
    """Fichier de configuration illisible ou mal formé."""

    pass
