# --------------------------------------------------------------
# File: envelope.py
# Description: Códec de sobres cifrados con contraseña (formato .vault).
# --------------------------------------------------------------
"""Cifrado de un bloque de bytes con contraseña en un sobre autocontenido.

Formato binario (versión 1, big-endian), transportado como texto Base64:

    magic "DVLT" (4) | versión (1) | kdf_id (1) | time_cost (1) |
    parallelism (1) | memory_cost KiB (4) | salt (16) | nonce (12) |
    ciphertext (n) | tag (16)

Los 40 bytes de cabecera se autentican como datos adicionales de AES-GCM,
de modo que cualquier alteración de los parámetros registrados se detecta
igual que una contraseña incorrecta.
"""

from __future__ import annotations

import base64
import os
import struct
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from pydantic import ValidationError

from vault.config import (
    KDF_MAX_MEMORY_KIB,
    KDF_MEMORY_KIB,
    KDF_PARALLELISM,
    KDF_TIME_COST,
)
from vault.crypto_sym import NONCE_LEN, TAG_LEN, new_nonce
from vault.errors import AuthenticationError, InputValidationError, MalformedEnvelopeError
from vault.logger import setup_logger
from vault.models import Envelope, KdfParams
from vault.suite import KDF_ARGON2ID, Argon2AesGcmSuite, CryptoSuite

__all__ = [
    "EnvelopeCodec",
    "decapsulate",
    "default_codec",
    "encapsulate",
    "parse_envelope",
    "serialize_envelope",
]

MAGIC = b"DVLT"
FORMAT_VERSION = 1
SALT_LEN = 16
SUPPORTED_KDFS = frozenset({KDF_ARGON2ID})

_HEADER = struct.Struct(f">4sBBBBI{SALT_LEN}s{NONCE_LEN}s")
HEADER_LEN = _HEADER.size

EnvelopeInput = Union[str, bytes, bytearray, memoryview]

logger = setup_logger(__name__)


def _check_password(password: str) -> None:
    """Rechaza contraseñas vacías o que no sean texto antes de derivar nada."""

    if not isinstance(password, str) or not password:
        raise InputValidationError("La contraseña debe ser un texto no vacío.")


def _pack_header(version: int, kdf_id: int, params: KdfParams, salt: bytes, nonce: bytes) -> bytes:
    return _HEADER.pack(
        MAGIC,
        version,
        kdf_id,
        params.time_cost,
        params.parallelism,
        params.memory_cost,
        salt,
        nonce,
    )


def header_bytes(envelope: Envelope) -> bytes:
    """Reconstruye la cabecera binaria exacta de un sobre descompuesto."""

    return _pack_header(envelope.version, envelope.kdf_id, envelope.kdf, envelope.salt, envelope.nonce)


def serialize_envelope(envelope: Envelope) -> str:
    """Codifica un sobre en su forma transportable (texto Base64 ASCII).

    Args:
        envelope (Envelope): Sobre con todos sus campos.

    Returns:
        str: Texto Base64 sin saltos de línea.

    """

    raw = header_bytes(envelope) + envelope.ciphertext + envelope.tag
    return base64.b64encode(raw).decode("ascii")


def _as_text(data: EnvelopeInput) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedEnvelopeError("El sobre no es texto ASCII.") from exc
    raise MalformedEnvelopeError(f"Tipo de sobre no soportado: {type(data).__name__}")


def parse_envelope(data: EnvelopeInput, *, max_memory_kib: int = KDF_MAX_MEMORY_KIB) -> Envelope:
    """Descompone un sobre serializado en sus campos sin descifrarlo.

    Args:
        data (EnvelopeInput): Texto Base64 (o sus bytes ASCII) de un `.vault`.
        max_memory_kib (int): Memoria Argon2 máxima que se acepta derivar.

    Returns:
        Envelope: Campos del sobre listos para `decapsulate`.

    Raises:
        MalformedEnvelopeError: Si la codificación, la longitud, la cabecera,
            la versión o los parámetros KDF no son válidos.

    """

    text = _as_text(data).strip()
    try:
        raw = base64.b64decode(text, validate=True)
    except ValueError as exc:
        raise MalformedEnvelopeError("El sobre no es Base64 válido.") from exc

    # Solo se acepta la codificación canónica: ningún bit del texto se ignora.
    if base64.b64encode(raw).decode("ascii") != text:
        raise MalformedEnvelopeError("El sobre no usa Base64 canónico.")

    if len(raw) < HEADER_LEN + TAG_LEN:
        raise MalformedEnvelopeError("El sobre está truncado.")

    magic, version, kdf_id, time_cost, parallelism, memory_cost, salt, nonce = _HEADER.unpack_from(raw)
    if magic != MAGIC:
        raise MalformedEnvelopeError("El archivo no es un sobre DataVault.")
    if version != FORMAT_VERSION:
        raise MalformedEnvelopeError(f"Versión de sobre no soportada: {version}")
    if kdf_id not in SUPPORTED_KDFS:
        raise MalformedEnvelopeError(f"KDF no soportada: {kdf_id}")

    try:
        params = KdfParams(time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism)
    except ValidationError as exc:
        raise MalformedEnvelopeError("Parámetros KDF fuera de rango.") from exc
    if params.memory_cost > max_memory_kib:
        raise MalformedEnvelopeError(
            f"memory_cost={params.memory_cost} KiB supera el máximo de {max_memory_kib} KiB"
        )

    body = raw[HEADER_LEN:]
    return Envelope(
        version=version,
        kdf_id=kdf_id,
        kdf=params,
        salt=salt,
        nonce=nonce,
        ciphertext=body[:-TAG_LEN],
        tag=body[-TAG_LEN:],
    )


def default_kdf_params() -> KdfParams:
    """Parámetros Argon2id configurados para los sobres nuevos."""

    return KdfParams(
        time_cost=KDF_TIME_COST,
        memory_cost=KDF_MEMORY_KIB,
        parallelism=KDF_PARALLELISM,
    )


class EnvelopeCodec:
    """Cifra y descifra bloques de bytes con una contraseña.

    No guarda estado mutable entre llamadas: salt, nonce y clave son locales
    a cada operación, por lo que una instancia puede compartirse entre hilos.

    Raises:
        InputValidationError: Si la suite o los parámetros producirían sobres
            que el propio códec rechazaría al leerlos.
    """

    def __init__(
        self,
        suite: Optional[CryptoSuite] = None,
        kdf_params: Optional[KdfParams] = None,
        *,
        max_memory_kib: int = KDF_MAX_MEMORY_KIB,
    ) -> None:
        self.suite = suite or Argon2AesGcmSuite()
        self.kdf_params = kdf_params or default_kdf_params()
        self.max_memory_kib = max_memory_kib

        # Un códec solo puede escribir sobres que él mismo sea capaz de leer.
        if self.suite.kdf_id not in SUPPORTED_KDFS:
            raise InputValidationError(f"KDF no soportada por el formato: {self.suite.kdf_id}")
        if self.kdf_params.memory_cost > self.max_memory_kib:
            raise InputValidationError(
                f"memory_cost={self.kdf_params.memory_cost} KiB supera el máximo de {self.max_memory_kib} KiB"
            )

    def encapsulate(self, plaintext: bytes, password: str) -> str:
        """Cifra `plaintext` con `password` y devuelve el sobre serializado.

        Cada llamada usa salt y nonce nuevos, así que dos sobres del mismo
        contenido con la misma contraseña nunca coinciden.

        Args:
            plaintext (bytes): Datos en claro, posiblemente vacíos.
            password (str): Contraseña no vacía.

        Returns:
            str: Sobre en texto Base64.

        """

        _check_password(password)
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise InputValidationError("Los datos a cifrar deben ser bytes.")

        salt = os.urandom(SALT_LEN)
        nonce = new_nonce()
        header = _pack_header(FORMAT_VERSION, self.suite.kdf_id, self.kdf_params, salt, nonce)

        key = self.suite.derive_key(password, salt, self.kdf_params)
        ciphertext, tag = self.suite.encrypt(key, nonce, bytes(plaintext), header)

        envelope = Envelope(
            version=FORMAT_VERSION,
            kdf_id=self.suite.kdf_id,
            kdf=self.kdf_params,
            salt=salt,
            nonce=nonce,
            ciphertext=ciphertext,
            tag=tag,
        )
        logger.debug("Sobre v%d creado: %d bytes en claro", FORMAT_VERSION, len(plaintext))
        return serialize_envelope(envelope)

    def decapsulate(self, envelope: EnvelopeInput, password: str) -> bytes:
        """Verifica y descifra un sobre con la contraseña indicada.

        Args:
            envelope (EnvelopeInput): Sobre serializado.
            password (str): Contraseña no vacía.

        Returns:
            bytes: Datos originales en claro.

        Raises:
            MalformedEnvelopeError: Si el sobre no se puede descomponer.
            AuthenticationError: Si la contraseña es incorrecta o el sobre fue alterado.

        """

        _check_password(password)
        parsed = parse_envelope(envelope, max_memory_kib=self.max_memory_kib)
        if parsed.kdf_id != self.suite.kdf_id:
            raise MalformedEnvelopeError(f"KDF {parsed.kdf_id} no disponible en este códec.")

        key = self.suite.derive_key(password, parsed.salt, parsed.kdf)
        try:
            plaintext = self.suite.decrypt(
                key, parsed.nonce, parsed.ciphertext, parsed.tag, header_bytes(parsed)
            )
        except InvalidTag as exc:
            raise AuthenticationError("La etiqueta de autenticación no verifica.") from exc

        logger.debug("Sobre v%d descifrado: %d bytes en claro", parsed.version, len(plaintext))
        return plaintext


_CODEC = EnvelopeCodec()


def default_codec() -> EnvelopeCodec:
    """Códec compartido construido con la configuración del entorno."""

    return _CODEC


def encapsulate(plaintext: bytes, password: str) -> str:
    """Cifra con el códec configurado por defecto."""

    return _CODEC.encapsulate(plaintext, password)


def decapsulate(envelope: EnvelopeInput, password: str) -> bytes:
    """Descifra con el códec configurado por defecto."""

    return _CODEC.decapsulate(envelope, password)
