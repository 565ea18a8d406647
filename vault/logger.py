# --------------------------------------------------------------
# File: logger.py
# Description: Configuración común de logging para los módulos de DataVault.
# --------------------------------------------------------------
"""Creación de loggers con formato y nivel homogéneos."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from vault.config import LOG_LEVEL

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Devuelve un logger con salida por consola y formato común.

    Args:
        name (str): Nombre del logger, normalmente `__name__`.
        level (Optional[str]): Nivel explícito; por defecto `VAULT_LOG_LEVEL`.

    Returns:
        logging.Logger: Logger listo para usar.

    """

    logger = logging.getLogger(name)

    # Evita duplicar handlers si el módulo se recarga.
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level or LOG_LEVEL, logging.INFO))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(handler)
    return logger
