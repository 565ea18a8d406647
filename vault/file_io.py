# --------------------------------------------------------------
# File: file_io.py
# Description: Lectura y escritura de archivos locales para cifrar y descifrar.
# --------------------------------------------------------------
"""Colaborador de E/S: leer el archivo elegido y guardar el resultado."""

from __future__ import annotations

import asyncio
import mimetypes
import os
import tempfile
from pathlib import Path
from typing import Union

from vault.errors import VaultIOError
from vault.logger import setup_logger
from vault.models import FileRecord

__all__ = ["read_file", "secure_name", "write_file"]

DEFAULT_MEDIA_TYPE = "application/octet-stream"
FALLBACK_NAME = "archivo_recuperado"

PathLike = Union[str, "os.PathLike[str]"]

logger = setup_logger(__name__)


def secure_name(name: str) -> str:
    """Normaliza el nombre de archivo para evitar rutas o caracteres problemáticos.

    Args:
        name (str): Nombre propuesto (p. ej. el recuperado de un sobre).

    Returns:
        str: Nombre limpio, sin separadores de ruta ni caracteres de control.

    """

    bad = '<>:"/\\|?*'
    cleaned = "".join("_" if ch in bad or ord(ch) < 32 else ch for ch in name)
    cleaned = cleaned.strip().replace("..", "_")
    if cleaned in ("", "."):
        return FALLBACK_NAME
    return cleaned


def _guess_media_type(path: Path) -> str:
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or DEFAULT_MEDIA_TYPE


def _read_bytes(path: Path) -> bytes:
    with open(path, "rb") as handler:
        return handler.read()


async def read_file(path: PathLike) -> FileRecord:
    """Lee un archivo completo y devuelve su nombre, tipo y contenido.

    La lectura se delega en un hilo para no bloquear el bucle de eventos;
    el cifrado solo empieza cuando los bytes están disponibles.

    Args:
        path (PathLike): Ruta del archivo elegido por el usuario.

    Returns:
        FileRecord: Archivo con `media_type` deducido de la extensión.

    Raises:
        VaultIOError: Si el archivo no existe o no se puede leer.

    """

    source = Path(path)
    try:
        content = await asyncio.to_thread(_read_bytes, source)
    except OSError as exc:
        logger.warning("No se pudo leer %s: %s", source, exc.strerror or exc)
        raise VaultIOError(f"No se pudo leer el archivo: {source}") from exc

    return FileRecord(name=source.name, media_type=_guess_media_type(source), content=content)


def _free_path(directory: Path, name: str) -> Path:
    """Busca una ruta libre añadiendo ` (n)` antes de la extensión."""

    candidate = directory / name
    stem, suffix = os.path.splitext(name)
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem} ({counter}){suffix}"
        counter += 1
    return candidate


def write_file(data: bytes, suggested_name: str, directory: PathLike) -> Path:
    """Guarda `data` en `directory` con un nombre saneado sin sobrescribir nada.

    Args:
        data (bytes): Contenido a guardar.
        suggested_name (str): Nombre propuesto para el archivo.
        directory (PathLike): Carpeta de destino (se crea si no existe).

    Returns:
        Path: Ruta final del archivo escrito.

    Raises:
        VaultIOError: Si no se puede crear la carpeta o escribir el archivo.

    """

    target_dir = Path(directory)
    tmp_path = None
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        target = _free_path(target_dir, secure_name(suggested_name))
        # Temporal con nombre único: nunca pisa un archivo del usuario.
        with tempfile.NamedTemporaryFile(
            "wb", dir=target_dir, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as handler:
            tmp_path = Path(handler.name)
            handler.write(data)
        os.replace(tmp_path, target)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        logger.warning("No se pudo escribir en %s: %s", target_dir, exc.strerror or exc)
        raise VaultIOError(f"No se pudo guardar el archivo en {target_dir}") from exc

    logger.info("Archivo guardado en %s (%d bytes)", target, len(data))
    return target
