# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas seguras mediante Argon2id.
# --------------------------------------------------------------
"""Funciones de derivación de claves a partir de la contraseña del usuario."""

from argon2.low_level import Type, hash_secret_raw

from vault.models import KdfParams

KEY_LEN = 32


def derive_key(password: str, salt: bytes, params: KdfParams, *, outlen: int = KEY_LEN) -> bytes:
    """Deriva la clave de cifrado de un sobre usando Argon2id.

    Args:
        password (str): Contraseña introducida por el usuario.
        salt (bytes): Salt aleatoria asociada al sobre.
        params (KdfParams): Coste temporal, memoria (KiB) y paralelismo.
        outlen (int): Longitud en bytes de la clave resultante.

    Returns:
        bytes: Clave simétrica derivada lista para AES-GCM.

    """

    return hash_secret_raw(
        password.encode("utf-8"),
        salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost,
        parallelism=params.parallelism,
        hash_len=outlen,
        type=Type.ID,
    )
