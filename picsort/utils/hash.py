"""Utilitaires de hachage pour les clés du cache de miniatures."""

import hashlib
import os
from pathlib import Path
from typing import Union

from picsort.config.settings import CACHE_KEY_LENGTH


def path_digest(path: Union[str, Path], length: int = CACHE_KEY_LENGTH) -> str:
    """
    Calcule une clé stable à partir du chemin absolu d'un fichier.

    Seul le chemin est haché, pas le contenu : la même source donne
    toujours la même clé, d'une exécution à l'autre. Les liens
    symboliques ne sont pas résolus.

    Arguments :
        path: Chemin du fichier source.
        length: Nombre de caractères hexadécimaux conservés.

    Retourne :
        Préfixe hexadécimal du SHA-256 du chemin absolu.
    """
    absolute = os.path.abspath(os.fspath(path))
    digest = hashlib.sha256(os.fsencode(absolute))
    return digest.hexdigest()[:length]
