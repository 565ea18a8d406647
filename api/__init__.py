# --------------------------------------------------------------
# File: __init__.py
# Description: Servicios que conectan las interfaces con el núcleo de cifrado.
# --------------------------------------------------------------
"""Inicializa el paquete `api`."""

__all__ = ["services"]
