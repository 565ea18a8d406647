# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrado de archivos con contraseña.
# --------------------------------------------------------------
"""Errores distinguibles internamente y agrupables para la interfaz."""

__all__ = [
    "VaultError",
    "InputValidationError",
    "VaultIOError",
    "DecryptionError",
    "MalformedEnvelopeError",
    "AuthenticationError",
    "MalformedPayloadError",
]


class VaultError(Exception):
    """Base común de todos los errores de DataVault."""


class InputValidationError(VaultError, ValueError):
    """Falta el archivo o la contraseña, o los tipos de entrada no son válidos."""


class VaultIOError(VaultError, OSError):
    """No se ha podido leer el archivo de origen o escribir el resultado."""


class DecryptionError(VaultError):
    """Familia de fallos que la interfaz resume como "revisa contraseña y archivo"."""


class MalformedEnvelopeError(DecryptionError):
    """El sobre no se puede descomponer en sus campos (estructura o versión)."""


class AuthenticationError(DecryptionError):
    """El sobre es legible pero la etiqueta no verifica: contraseña errónea o datos alterados."""


class MalformedPayloadError(DecryptionError):
    """El claro recuperado no corresponde a un archivo empaquetado válido."""
