# --------------------------------------------------------------
# File: packaging.py
# Description: Empaquetado de nombre, tipo y contenido de un archivo en bytes.
# --------------------------------------------------------------
"""Conversión entre `FileRecord` y el bloque de bytes que cifra el códec."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from vault.errors import InputValidationError, MalformedPayloadError
from vault.models import FileRecord

__all__ = ["pack", "unpack"]

PAYLOAD_VERSION = 1


class _PackedFile(BaseModel):
    """Estructura JSON del claro: `{"v", "name", "type", "data"}`."""

    model_config = ConfigDict(strict=True, extra="ignore")

    v: Literal[1]
    name: str
    type: str
    data: str


def pack(file: FileRecord) -> bytes:
    """Serializa un archivo en JSON UTF-8 con el contenido en Base64.

    Args:
        file (FileRecord): Archivo a empaquetar.

    Returns:
        bytes: Bloque listo para `encapsulate`.

    """

    if not isinstance(file, FileRecord):
        raise InputValidationError("Se esperaba un FileRecord.")

    document = {
        "v": PAYLOAD_VERSION,
        "name": file.name,
        "type": file.media_type,
        "data": base64.b64encode(file.content).decode("ascii"),
    }
    try:
        return json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InputValidationError("El nombre o el tipo no son representables en UTF-8.") from exc


def unpack(payload: bytes) -> FileRecord:
    """Reconstruye el archivo a partir del claro descifrado.

    Args:
        payload (bytes): Bloque producido por `pack`.

    Returns:
        FileRecord: Nombre, tipo y contenido originales.

    Raises:
        MalformedPayloadError: Si el bloque no es un archivo empaquetado válido.

    """

    try:
        packed = _PackedFile.model_validate_json(payload)
    except ValidationError as exc:
        raise MalformedPayloadError("El contenido descifrado no es un archivo empaquetado.") from exc

    try:
        content = base64.b64decode(packed.data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedPayloadError("El contenido del archivo no es Base64 válido.") from exc

    return FileRecord(name=packed.name, media_type=packed.type, content=content)
