# --------------------------------------------------------------
# File: cli.py
# Description: Interfaz de línea de comandos para cifrar y descifrar archivos.
# --------------------------------------------------------------
"""Comandos `encrypt`, `decrypt` e `inspect` sobre archivos locales.

Usa los mismos servicios que la interfaz Streamlit, de modo que ambos
caminos producen y aceptan exactamente los mismos `.vault`.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from api.services import decrypt_upload, encrypt_upload
from vault.config import OUTPUT_DIR
from vault.envelope import parse_envelope
from vault.errors import InputValidationError, MalformedEnvelopeError, VaultIOError
from vault.file_io import read_file, write_file
from vault.logger import setup_logger

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _ask_password(args: argparse.Namespace, *, confirm: bool) -> str:
    if args.password:
        return args.password
    password = getpass.getpass("Contraseña: ")
    if confirm and password != getpass.getpass("Repite la contraseña: "):
        raise InputValidationError("Las contraseñas no coinciden.")
    return password


def _cmd_encrypt(args: argparse.Namespace) -> int:
    record = asyncio.run(read_file(args.file))
    password = _ask_password(args, confirm=True)
    ok, msg, result = encrypt_upload(record.content, record.name, record.media_type, password)
    if not ok:
        print(msg, file=sys.stderr)
        return EXIT_FAILED
    path = write_file(result.data, result.file_name, args.output)
    print(f"{msg} -> {path}")
    return EXIT_OK


def _cmd_decrypt(args: argparse.Namespace) -> int:
    record = asyncio.run(read_file(args.file))
    password = _ask_password(args, confirm=False)
    ok, msg, result = decrypt_upload(record.content, password)
    if not ok:
        print(msg, file=sys.stderr)
        return EXIT_FAILED
    path = write_file(result.data, result.file_name, args.output)
    print(f"{msg} -> {path}")
    return EXIT_OK


def _cmd_inspect(args: argparse.Namespace) -> int:
    record = asyncio.run(read_file(args.file))
    try:
        envelope = parse_envelope(record.content)
    except MalformedEnvelopeError as exc:
        print(f"No es un sobre válido: {exc}", file=sys.stderr)
        return EXIT_FAILED

    print(f"Versión:      {envelope.version}")
    print(
        f"KDF:          Argon2id t={envelope.kdf.time_cost} "
        f"m={envelope.kdf.memory_cost}KiB p={envelope.kdf.parallelism}"
    )
    print(f"Salt:         {len(envelope.salt) * 8} bits")
    print(f"Nonce:        {len(envelope.nonce) * 8} bits")
    print(f"Ciphertext:   {len(envelope.ciphertext)} bytes (+{len(envelope.tag)} de tag)")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datavault",
        description="Cifrado local de archivos con contraseña (AES-256-GCM + Argon2id).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text, handler in (
        ("encrypt", "Cifra un archivo y genera <nombre>.vault", _cmd_encrypt),
        ("decrypt", "Descifra un archivo .vault", _cmd_decrypt),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("file", help="Archivo de entrada")
        cmd.add_argument("-o", "--output", default=OUTPUT_DIR, help="Carpeta de salida")
        cmd.add_argument("-p", "--password", help="Contraseña (si se omite, se pide por consola)")
        cmd.set_defaults(handler=handler)

    inspect_cmd = sub.add_parser("inspect", help="Muestra la cabecera de un .vault sin descifrarlo")
    inspect_cmd.add_argument("file", help="Archivo .vault")
    inspect_cmd.set_defaults(handler=_cmd_inspect)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Punto de entrada del comando `datavault`."""

    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (InputValidationError, VaultIOError) as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE
