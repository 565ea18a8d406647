# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado simétrico con AES-GCM.
# --------------------------------------------------------------

import os

import pytest
from cryptography.exceptions import InvalidTag

from vault.crypto_sym import (
    NONCE_LEN,
    TAG_LEN,
    aes_gcm_decrypt_with_key,
    aes_gcm_encrypt_with_key,
    new_nonce,
)


def test_aes_gcm_roundtrip_ok():
    """Comprueba que un cifrado con AES-GCM pueda revertirse correctamente.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    key = os.urandom(32)
    nonce = new_nonce()
    plaintext = os.urandom(128)
    ct, tag = aes_gcm_encrypt_with_key(key, nonce, plaintext)
    assert len(ct) == len(plaintext)
    assert len(tag) == TAG_LEN
    assert aes_gcm_decrypt_with_key(key, nonce, ct, tag) == plaintext


def test_aes_gcm_empty_plaintext():
    """Verifica que un claro vacío produzca solo la etiqueta y se recupere.

    Returns:
        None: Las aserciones comparan longitudes y contenido.
    """
    key = os.urandom(32)
    nonce = new_nonce()
    ct, tag = aes_gcm_encrypt_with_key(key, nonce, b"")
    assert ct == b""
    assert aes_gcm_decrypt_with_key(key, nonce, ct, tag) == b""


def test_aes_gcm_detects_tampering_ciphertext():
    """Verifica que cualquier alteración del ciphertext sea detectada.

    Returns:
        None: La expectativa es una excepción al descifrar.
    """
    key = os.urandom(32)
    nonce = new_nonce()
    ct, tag = aes_gcm_encrypt_with_key(key, nonce, b"hola mundo")
    tampered = bytes([ct[0] ^ 1]) + ct[1:]
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, nonce, tampered, tag)


def test_aes_gcm_detects_tampering_tag():
    """Garantiza que un tag modificado invalide el descifrado.

    Returns:
        None: Se espera una excepción durante la verificación.
    """
    key = os.urandom(32)
    nonce = new_nonce()
    ct, tag = aes_gcm_encrypt_with_key(key, nonce, b"msg")
    bad_tag = bytes([tag[0] ^ 1]) + tag[1:]
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, nonce, ct, bad_tag)


def test_aes_gcm_detects_tampering_aad():
    """Comprueba que los datos adicionales autenticados formen parte de la verificación.

    Returns:
        None: Se espera una excepción al descifrar con otra cabecera.
    """
    key = os.urandom(32)
    nonce = new_nonce()
    ct, tag = aes_gcm_encrypt_with_key(key, nonce, b"msg", aad=b"cabecera-v1")
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, nonce, ct, tag, aad=b"cabecera-v2")


def test_aes_gcm_wrong_key():
    """Comprueba que otra clave no descifre los datos.

    Returns:
        None: Se espera una excepción durante el descifrado.
    """
    nonce = new_nonce()
    ct, tag = aes_gcm_encrypt_with_key(os.urandom(32), nonce, b"msg")
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(os.urandom(32), nonce, ct, tag)


def test_nonce_uniqueness():
    """Evalúa que los nonces aleatorios generados no se repitan.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    nonces = set()
    for _ in range(200):
        nonce = new_nonce()
        assert len(nonce) == NONCE_LEN
        assert nonce not in nonces
        nonces.add(nonce)
