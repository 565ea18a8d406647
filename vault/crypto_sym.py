# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado simétrico seguro.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico autenticado para el contenido de los sobres."""

import os
from typing import Optional, Tuple

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_LEN = 12
TAG_LEN = 16


def new_nonce() -> bytes:
    """Genera un nonce aleatorio de 96 bits, el tamaño recomendado para GCM."""

    return os.urandom(NONCE_LEN)


def aes_gcm_encrypt_with_key(
    key: bytes, nonce: bytes, plaintext: bytes, aad: Optional[bytes] = None
) -> Tuple[bytes, bytes]:
    """Cifra datos con AES-GCM utilizando una clave y un nonce proporcionados.

    Args:
        key (bytes): Clave simétrica de 128, 192 o 256 bits.
        nonce (bytes): Nonce de 96 bits, único por cifrado.
        plaintext (bytes): Datos a cifrar.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        Tuple[bytes, bytes]: Ciphertext sin etiqueta y tag.

    """

    aes = AESGCM(key)
    ct_full = aes.encrypt(nonce, plaintext, aad)
    return ct_full[:-TAG_LEN], ct_full[-TAG_LEN:]


def aes_gcm_decrypt_with_key(
    key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Descifra datos con AES-GCM verificando la etiqueta de autenticación.

    Args:
        key (bytes): Clave simétrica que protege los datos.
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación de 128 bits.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        cryptography.exceptions.InvalidTag: Si la clave o los datos no verifican.

    """

    aes = AESGCM(key)
    return aes.decrypt(nonce, ciphertext + tag, aad)
