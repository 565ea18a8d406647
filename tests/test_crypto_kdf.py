# --------------------------------------------------------------
# File: test_crypto_kdf.py
# Description: Pruebas de la derivación de claves Argon2id y de sus parámetros.
# --------------------------------------------------------------

import os

import pytest
from pydantic import ValidationError

from vault.crypto_kdf import KEY_LEN, derive_key
from vault.models import KdfParams

FAST = KdfParams(time_cost=1, memory_cost=8, parallelism=1)


def test_derive_key_is_deterministic():
    """Misma contraseña, salt y parámetros producen la misma clave.

    Returns:
        None: Las aserciones comparan ambas derivaciones.
    """
    salt = os.urandom(16)
    k1 = derive_key("correct-horse", salt, FAST)
    k2 = derive_key("correct-horse", salt, FAST)
    assert k1 == k2
    assert len(k1) == KEY_LEN


def test_derive_key_depends_on_salt_password_and_params():
    """Cambiar cualquiera de las entradas cambia la clave derivada.

    Returns:
        None: Las aserciones verifican que las claves sean distintas.
    """
    salt = os.urandom(16)
    base = derive_key("p1", salt, FAST)
    assert derive_key("p2", salt, FAST) != base
    assert derive_key("p1", os.urandom(16), FAST) != base
    assert derive_key("p1", salt, KdfParams(time_cost=2, memory_cost=8, parallelism=1)) != base


def test_derive_key_accepts_non_ascii_password():
    """Las contraseñas se codifican en UTF-8 antes de derivar.

    Returns:
        None: Las aserciones comprueban la longitud de la clave.
    """
    assert len(derive_key("contraseña-ñandú-🔐", os.urandom(16), FAST)) == KEY_LEN


@pytest.mark.parametrize(
    "kwargs",
    [
        {"time_cost": 0, "memory_cost": 8, "parallelism": 1},  # sin iteraciones
        {"time_cost": 17, "memory_cost": 8, "parallelism": 1},  # demasiadas iteraciones
        {"time_cost": 1, "memory_cost": 4, "parallelism": 1},  # memoria mínima
        {"time_cost": 1, "memory_cost": 8, "parallelism": 2},  # 8 KiB por carril
        {"time_cost": 1, "memory_cost": 64, "parallelism": 0},  # sin carriles
    ],
)
def test_kdf_params_bounds(kwargs):
    """Comprueba que los parámetros fuera de rango se rechacen.

    Args:
        kwargs (dict): Parámetros candidatos proporcionados por la parametrización.

    Returns:
        None: Se espera un error de validación.
    """
    with pytest.raises(ValidationError):
        KdfParams(**kwargs)
