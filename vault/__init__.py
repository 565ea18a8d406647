# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del paquete de cifrado de archivos DataVault.
# --------------------------------------------------------------
"""Inicializa el paquete `vault` y documenta sus módulos principales."""

__all__ = [
    "cli",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "envelope",
    "errors",
    "file_io",
    "logger",
    "models",
    "packaging",
    "suite",
]
