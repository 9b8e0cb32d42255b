"""Persistance des réglages (emplacements de destination, thème, langue)."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

from picsort.config.settings import (
    DEFAULT_LANGUAGE,
    DEFAULT_THEME,
    DESTINATION_SLOTS,
)
from picsort.exceptions import SettingsError


def _default_destinations() -> Dict[str, Optional[str]]:
    return {str(slot): None for slot in range(1, DESTINATION_SLOTS + 1)}


@dataclass
class Settings:
    """
    Réglages de l'utilisateur.

    Attributs :
        destinations: Emplacements "1" à "5" vers un répertoire, ou None.
        theme: Thème d'affichage ("system", "light", "dark").
        language: Code de langue de l'interface.
    """

    destinations: Dict[str, Optional[str]] = field(default_factory=_default_destinations)
    theme: str = DEFAULT_THEME
    language: str = DEFAULT_LANGUAGE

    def destination(self, slot: Union[int, str]) -> Optional[Path]:
        """
        Retourne le répertoire associé à un emplacement.

        Arguments :
            slot: Numéro d'emplacement.

        Retourne :
            Chemin du répertoire, ou None si l'emplacement est vide.

        Lève :
            SettingsError: Si l'emplacement n'existe pas.
        """
        key = self._slot_key(slot)
        value = self.destinations.get(key)
        return Path(value) if value else None

    def set_destination(self, slot: Union[int, str], directory: Optional[Union[str, Path]]) -> None:
        """Associe (ou efface avec None) le répertoire d'un emplacement."""
        key = self._slot_key(slot)
        self.destinations[key] = str(directory) if directory is not None else None

    @staticmethod
    def _slot_key(slot: Union[int, str]) -> str:
        key = str(slot).strip()
        if key not in _default_destinations():
            raise SettingsError(
                f"Unknown destination slot {slot!r} (expected 1-{DESTINATION_SLOTS})"
            )
        return key


def load_settings(config_path: Union[str, Path]) -> Settings:
    """
    Charge les réglages depuis un fichier JSON.

    Un fichier absent donne les réglages par défaut. Les clés inconnues
    sont ignorées et les emplacements manquants valent None.

    Arguments :
        config_path: Chemin du fichier de réglages.

    Retourne :
        Instance Settings.

    Lève :
        SettingsError: Si le fichier est illisible ou mal formé.
    """
    path = Path(config_path)
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return Settings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SettingsError(f"Cannot read settings {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Malformed settings {path}: expected an object")

    settings = Settings()
    destinations = data.get("destinations") or {}
    if not isinstance(destinations, dict):
        raise SettingsError(f"Malformed settings {path}: destinations must be an object")
    for key, value in destinations.items():
        if key in settings.destinations:
            settings.destinations[key] = str(value) if value else None

    settings.theme = str(data.get("theme", settings.theme))
    settings.language = str(data.get("language", settings.language))
    return settings


def save_settings(settings: Settings, config_path: Union[str, Path]) -> None:
    """
    Enregistre les réglages au format JSON indenté.

    Arguments :
        settings: Réglages à écrire.
        config_path: Fichier de destination (répertoires parents créés).

    Lève :
        SettingsError: Si l'écriture échoue.
    """
    path = Path(config_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(asdict(settings), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise SettingsError(f"Cannot write settings {path}: {e}") from e
    logger.debug(f"Settings saved: {path}")
