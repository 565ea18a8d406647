# --------------------------------------------------------------
# File: services.py
# Description: Servicios de cifrado y descifrado de archivos para las interfaces.
# --------------------------------------------------------------
"""Composición de empaquetado y sobre, y frontera de errores hacia el usuario."""

from typing import Optional, Tuple, Union

from pydantic import ValidationError

from vault.config import VAULT_SUFFIX
from vault.envelope import EnvelopeCodec, default_codec
from vault.errors import DecryptionError, InputValidationError, VaultError
from vault.file_io import secure_name
from vault.logger import setup_logger
from vault.models import FileRecord, OperationResult
from vault.packaging import pack, unpack

__all__ = [
    "DECRYPT_FAILED",
    "decrypt_upload",
    "encrypt_upload",
    "process_decrypt",
    "process_encrypt",
    "vault_name",
]

# Mensaje único para no revelar si falló la contraseña, el formato o la integridad.
DECRYPT_FAILED = "No se pudo descifrar el archivo. Revisa la contraseña y el archivo."
ENCRYPT_FAILED = "No se pudo cifrar el archivo."
MISSING_INPUT = "Selecciona un archivo e introduce una contraseña."
INVALID_FILE_NAME = "El nombre o el tipo del archivo no son válidos."

VAULT_MEDIA_TYPE = "text/plain"

logger = setup_logger(__name__)


def vault_name(file_name: str) -> str:
    """Nombre de descarga del sobre: `<nombre-original>.vault`."""

    return f"{file_name}{VAULT_SUFFIX}"


def _require(data: Optional[bytes], password: str, *, allow_text: bool = False) -> None:
    """Valida la entrada de la interfaz antes de cualquier operación criptográfica.

    Args:
        data (Optional[bytes]): Contenido del archivo elegido.
        password (str): Contraseña introducida.
        allow_text (bool): Acepta también `str` (un sobre ya leído como texto).

    Raises:
        InputValidationError: Si falta el archivo o la contraseña.

    """

    if data is None:
        raise InputValidationError("No se ha seleccionado ningún archivo.")
    accepted = (str, bytes, bytearray, memoryview) if allow_text else (bytes, bytearray, memoryview)
    if not isinstance(data, accepted):
        raise InputValidationError("El contenido del archivo debe ser bytes.")
    if not isinstance(password, str) or not password:
        raise InputValidationError("La contraseña no puede estar vacía.")


def process_encrypt(
    file_bytes: bytes,
    file_name: str,
    media_type: str,
    password: str,
    *,
    codec: Optional[EnvelopeCodec] = None,
) -> str:
    """Empaqueta el archivo y lo cifra con la contraseña.

    Args:
        file_bytes (bytes): Contenido del archivo original.
        file_name (str): Nombre del archivo original.
        media_type (str): Tipo MIME declarado.
        password (str): Contraseña del usuario.
        codec (Optional[EnvelopeCodec]): Códec a usar; el configurado por defecto si se omite.

    Returns:
        str: Sobre serializado que se guarda como `vault_name(file_name)`.

    """

    _require(file_bytes, password)
    if not file_name:
        raise InputValidationError("El archivo no tiene nombre.")

    try:
        record = FileRecord(name=file_name, media_type=media_type or "", content=bytes(file_bytes))
    except ValidationError as exc:
        raise InputValidationError("El nombre o el tipo del archivo no son válidos.") from exc
    return (codec or default_codec()).encapsulate(pack(record), password)


def process_decrypt(
    envelope_bytes: Union[str, bytes], password: str, *, codec: Optional[EnvelopeCodec] = None
) -> FileRecord:
    """Descifra un sobre y reconstruye el archivo original.

    Args:
        envelope_bytes (Union[str, bytes]): Contenido del archivo `.vault`, como bytes o texto.
        password (str): Contraseña del usuario.
        codec (Optional[EnvelopeCodec]): Códec a usar; el configurado por defecto si se omite.

    Returns:
        FileRecord: Nombre, tipo y contenido originales.

    Raises:
        MalformedEnvelopeError: Si el sobre no se puede descomponer.
        AuthenticationError: Si la contraseña es incorrecta o el sobre fue alterado.
        MalformedPayloadError: Si el claro no es un archivo empaquetado.

    """

    _require(envelope_bytes, password, allow_text=True)
    plaintext = (codec or default_codec()).decapsulate(envelope_bytes, password)
    return unpack(plaintext)


def encrypt_upload(
    file_bytes: Optional[bytes],
    file_name: str,
    media_type: str,
    password: str,
    *,
    codec: Optional[EnvelopeCodec] = None,
) -> Tuple[bool, str, Optional[OperationResult]]:
    """Cifra un archivo subido y prepara el `.vault` para descargar.

    Returns:
        Tuple[bool, str, Optional[OperationResult]]: Indicador de éxito,
        mensaje para la interfaz y sobre listo para descargar.

    """

    try:
        _require(file_bytes, password)
    except InputValidationError as exc:
        logger.info("Cifrado rechazado: %s", exc)
        return False, MISSING_INPUT, None

    try:
        envelope = process_encrypt(file_bytes, file_name, media_type, password, codec=codec)
    except InputValidationError as exc:
        logger.info("Cifrado rechazado: %s", exc)
        return False, INVALID_FILE_NAME, None
    except VaultError as exc:
        logger.error("Cifrado fallido (%s): %s", type(exc).__name__, exc)
        return False, ENCRYPT_FAILED, None

    logger.info("Archivo cifrado: %d bytes -> %d caracteres", len(file_bytes), len(envelope))
    result = OperationResult(
        file_name=vault_name(file_name),
        media_type=VAULT_MEDIA_TYPE,
        data=envelope.encode("ascii"),
    )
    return True, "Archivo cifrado. Ya puedes descargarlo.", result


def decrypt_upload(
    envelope_bytes: Optional[Union[str, bytes]],
    password: str,
    *,
    codec: Optional[EnvelopeCodec] = None,
) -> Tuple[bool, str, Optional[OperationResult]]:
    """Descifra un `.vault` subido y prepara el archivo original para descargar.

    Todos los fallos criptográficos o de formato se resumen en `DECRYPT_FAILED`;
    el tipo exacto solo queda en el log.

    Returns:
        Tuple[bool, str, Optional[OperationResult]]: Indicador de éxito,
        mensaje para la interfaz y archivo recuperado.

    """

    try:
        record = process_decrypt(envelope_bytes, password, codec=codec)
    except InputValidationError as exc:
        logger.info("Descifrado rechazado: %s", exc)
        return False, MISSING_INPUT, None
    except DecryptionError as exc:
        logger.warning("Descifrado fallido (%s): %s", type(exc).__name__, exc)
        return False, DECRYPT_FAILED, None

    logger.info("Archivo descifrado: %s (%d bytes)", record.name, len(record.content))
    result = OperationResult(
        file_name=secure_name(record.name),
        media_type=record.media_type or "application/octet-stream",
        data=record.content,
    )
    return True, "Archivo descifrado. Ya puedes descargarlo.", result
