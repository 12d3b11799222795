# app/core/keys.py
from __future__ import annotations

from pathlib import Path

from cryptography.hazmat.primitives import serialization


def load_encryption_private_key(path: str) -> str | None:
    """
    Lee la clave privada PEM del verifier y comprueba que se puede cargar.

    Devuelve el PEM como texto, o None si el fichero no existe.
    """
    p = Path(path)
    if not p.is_file():
        return None
    pem = p.read_bytes()
    # lanza ValueError si el PEM no es una clave privada válida
    serialization.load_pem_private_key(pem, password=None)
    return pem.decode("utf-8")
