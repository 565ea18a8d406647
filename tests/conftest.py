# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas con un códec de coste reducido y carpetas temporales.
# --------------------------------------------------------------

from pathlib import Path

import pytest

from vault.envelope import EnvelopeCodec
from vault.models import KdfParams

# Argon2id mínimo: 1 iteración y 8 KiB, suficiente para probar el formato.
FAST_KDF = KdfParams(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def codec() -> EnvelopeCodec:
    """Proporciona un códec con Argon2id barato y límite de memoria bajo.

    Returns:
        EnvelopeCodec: Códec que acepta como máximo 1 MiB de memoria KDF.
    """
    return EnvelopeCodec(kdf_params=FAST_KDF, max_memory_kib=1024)


@pytest.fixture
def out_dir(tmp_path) -> Path:
    """Carpeta de salida aislada para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        Path: Ruta `out` dentro de la carpeta temporal (sin crear).
    """
    return tmp_path / "out"
