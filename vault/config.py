# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de configuración leídos del entorno (.env).
# --------------------------------------------------------------
"""Configuración de DataVault cargada desde variables de entorno."""

import os

from dotenv import load_dotenv

load_dotenv()

# Parámetros Argon2id para los sobres nuevos (se guardan en cada sobre).
KDF_TIME_COST = int(os.getenv("VAULT_KDF_TIME_COST", "3"))
KDF_MEMORY_KIB = int(os.getenv("VAULT_KDF_MEMORY_KIB", str(64 * 1024)))
KDF_PARALLELISM = int(os.getenv("VAULT_KDF_PARALLELISM", "1"))

# Límite de memoria aceptado al leer un sobre (1 GiB por defecto).
KDF_MAX_MEMORY_KIB = int(os.getenv("VAULT_KDF_MAX_MEMORY_KIB", str(1024 * 1024)))

LOG_LEVEL = os.getenv("VAULT_LOG_LEVEL", "INFO").upper()
OUTPUT_DIR = os.getenv("VAULT_OUTPUT_DIR", "./_data/out")

VAULT_SUFFIX = ".vault"
