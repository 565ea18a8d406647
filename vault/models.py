# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan archivos, parámetros KDF y sobres."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Cotas admitidas para los parámetros Argon2id registrados en un sobre.
MAX_TIME_COST = 16
MAX_PARALLELISM = 16
MIN_MEMORY_PER_LANE_KIB = 8


class FileRecord(BaseModel):
    """Identidad y contenido de un archivo del usuario.

    Attributes:
        name (str): Nombre original del archivo.
        media_type (str): Tipo MIME declarado (puede ser cadena vacía).
        content (bytes): Contenido binario opaco.

    """

    name: str
    media_type: str
    content: bytes


class KdfParams(BaseModel):
    """Parámetros Argon2id con los que se derivó la clave de un sobre.

    Attributes:
        time_cost (int): Iteraciones de Argon2id.
        memory_cost (int): Memoria en KiB.
        parallelism (int): Número de carriles.

    """

    model_config = ConfigDict(frozen=True)

    time_cost: int = Field(ge=1, le=MAX_TIME_COST)
    memory_cost: int = Field(ge=MIN_MEMORY_PER_LANE_KIB, le=0xFFFFFFFF)
    parallelism: int = Field(ge=1, le=MAX_PARALLELISM)

    @model_validator(mode="after")
    def _check_memory_per_lane(self) -> "KdfParams":
        # Argon2 exige al menos 8 KiB por carril.
        if self.memory_cost < MIN_MEMORY_PER_LANE_KIB * self.parallelism:
            raise ValueError("memory_cost debe ser al menos 8 KiB por carril")
        return self


class Envelope(BaseModel):
    """Forma descompuesta de un sobre `.vault`.

    Attributes:
        version (int): Versión del formato.
        kdf_id (int): Identificador del algoritmo de derivación.
        kdf (KdfParams): Parámetros de derivación registrados.
        salt (bytes): Salt aleatoria de la derivación.
        nonce (bytes): Nonce AES-GCM de 96 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación de 128 bits.

    """

    version: int
    kdf_id: int
    kdf: KdfParams
    salt: bytes
    nonce: bytes
    ciphertext: bytes
    tag: bytes


class OperationResult(BaseModel):
    """Archivo listo para ofrecer al usuario tras cifrar o descifrar."""

    file_name: str
    media_type: str
    data: bytes
