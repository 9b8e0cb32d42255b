"""Génération de miniatures : Pillow pour les images, ffmpeg pour les vidéos."""

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger
from PIL import Image

from picsort.config.settings import (
    FFMPEG_BINARY,
    THUMBNAIL_FORMAT,
    THUMBNAIL_JPEG_QUALITY,
    VIDEO_FRAME_QUALITY,
    VIDEO_FRAME_SEEK_SECONDS,
)
from picsort.exceptions import ThumbnailGenerationError


def generate_image_thumbnail(source: Path, destination: Path, size: int) -> None:
    """
    Décode une image et l'enregistre réduite dans un carré size × size.

    Le ratio est conservé et l'image n'est jamais agrandie. La sortie est
    toujours encodée en JPEG.

    Arguments :
        source: Image à réduire.
        destination: Fichier de sortie (écrasé s'il existe).
        size: Dimension maximale en pixels.

    Lève :
        ThumbnailGenerationError: Si le décodage ou l'écriture échoue.
    """
    try:
        with Image.open(source) as img:
            img.thumbnail((size, size), Image.Resampling.LANCZOS)
            if img.mode != "RGB":
                img = img.convert("RGB")
            img.save(destination, format=THUMBNAIL_FORMAT, quality=THUMBNAIL_JPEG_QUALITY)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ThumbnailGenerationError(f"Failed to create thumbnail for {source}: {e}") from e


def build_frame_command(
    source: Path,
    destination: Path,
    size: int,
    seek_seconds: Optional[int] = VIDEO_FRAME_SEEK_SECONDS,
    ffmpeg: str = FFMPEG_BINARY,
) -> List[str]:
    """
    Construit la commande ffmpeg d'extraction d'une image.

    Arguments :
        source: Vidéo source.
        destination: Image de sortie.
        size: Dimension maximale, ratio conservé.
        seek_seconds: Position de l'image en secondes, None pour le début.
        ffmpeg: Exécutable ffmpeg.

    Retourne :
        Liste d'arguments pour subprocess.
    """
    command = [ffmpeg, "-hide_banner", "-nostdin", "-y"]
    if seek_seconds is not None:
        command += ["-ss", str(seek_seconds)]
    command += [
        "-i", str(source),
        "-an",
        "-vf", f"scale={size}:{size}:force_original_aspect_ratio=decrease",
        "-frames:v", "1",
        "-q:v", str(VIDEO_FRAME_QUALITY),
        str(destination),
    ]
    return command


def generate_video_thumbnail(
    source: Path,
    destination: Path,
    size: int,
    ffmpeg: str = FFMPEG_BINARY,
) -> None:
    """
    Extrait une image représentative d'une vidéo.

    Tente d'abord à 5 secondes (la première image est souvent noire), puis
    depuis le début du flux avec la même mise à l'échelle si la vidéo est
    trop courte ou si la recherche échoue.

    Arguments :
        source: Vidéo source.
        destination: Image de sortie (écrasée s'il existe).
        size: Dimension maximale en pixels.
        ffmpeg: Exécutable ffmpeg.

    Lève :
        ThumbnailGenerationError: Si ffmpeg est absent ou échoue deux fois ;
            la sortie d'erreur de ffmpeg est conservée telle quelle.
    """
    first = _run_ffmpeg(build_frame_command(source, destination, size, ffmpeg=ffmpeg))
    if _frame_written(first, destination):
        return

    logger.debug(f"Seek to {VIDEO_FRAME_SEEK_SECONDS}s failed for {source}, retrying from start")
    fallback = _run_ffmpeg(
        build_frame_command(source, destination, size, seek_seconds=None, ffmpeg=ffmpeg)
    )
    if _frame_written(fallback, destination):
        return

    stderr = fallback.stderr.decode("utf-8", "replace")
    raise ThumbnailGenerationError(
        f"ffmpeg failed (exit code {fallback.returncode}): {stderr}",
        diagnostics=stderr,
        returncode=fallback.returncode,
    )


def _run_ffmpeg(command: Sequence[str]) -> "subprocess.CompletedProcess[bytes]":
    logger.debug(f"Running: {' '.join(command)}")
    try:
        return subprocess.run(
            list(command),
            check=False,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise ThumbnailGenerationError(
            f"Failed to execute {command[0]}: {e}. Is ffmpeg installed?"
        ) from e
    except OSError as e:
        raise ThumbnailGenerationError(f"Failed to execute {command[0]}: {e}") from e


def _frame_written(process: "subprocess.CompletedProcess[bytes]", destination: Path) -> bool:
    """ffmpeg may exit 0 without writing a frame when seeking past the end."""
    if process.returncode != 0:
        return False
    try:
        return destination.stat().st_size > 0
    except OSError:
        return False
