# --------------------------------------------------------------
# File: suite.py
# Description: Interfaz de primitivas criptográficas inyectable en el códec.
# --------------------------------------------------------------
"""Conjunto de primitivas (KDF + cifrado autenticado) que usa el códec de sobres.

El códec no importa directamente Argon2 ni AES-GCM: recibe un objeto que
cumple `CryptoSuite`, lo que permite probarlo de forma aislada o sustituir
las primitivas sin tocar la capa de empaquetado.
"""

from typing import Optional, Protocol, Tuple

from vault.crypto_kdf import KEY_LEN, derive_key
from vault.crypto_sym import aes_gcm_decrypt_with_key, aes_gcm_encrypt_with_key
from vault.models import KdfParams

# Identificadores de KDF registrados en la cabecera del sobre.
KDF_ARGON2ID = 1


class CryptoSuite(Protocol):
    """Primitivas que necesita el códec de sobres."""

    kdf_id: int

    def derive_key(self, password: str, salt: bytes, params: KdfParams) -> bytes:
        ...

    def encrypt(
        self, key: bytes, nonce: bytes, plaintext: bytes, aad: Optional[bytes] = None
    ) -> Tuple[bytes, bytes]:
        ...

    def decrypt(
        self, key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes, aad: Optional[bytes] = None
    ) -> bytes:
        ...


class Argon2AesGcmSuite:
    """Argon2id para derivar una clave de 256 bits y AES-256-GCM para cifrar."""

    kdf_id = KDF_ARGON2ID

    def derive_key(self, password: str, salt: bytes, params: KdfParams) -> bytes:
        return derive_key(password, salt, params, outlen=KEY_LEN)

    def encrypt(
        self, key: bytes, nonce: bytes, plaintext: bytes, aad: Optional[bytes] = None
    ) -> Tuple[bytes, bytes]:
        return aes_gcm_encrypt_with_key(key, nonce, plaintext, aad)

    def decrypt(
        self, key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes, aad: Optional[bytes] = None
    ) -> bytes:
        return aes_gcm_decrypt_with_key(key, nonce, ciphertext, tag, aad)
