# --------------------------------------------------------------
# File: hashing.py
# Description: Hash adaptativo bcrypt para credenciales de inicio de sesión.
# --------------------------------------------------------------
"""Hash unidireccional de contraseñas compatible con los hashes existentes."""

from __future__ import annotations

import logging
from typing import Union

import bcrypt

logger = logging.getLogger(__name__)

# Factor de trabajo fijo de los hashes ya almacenados.
BCRYPT_ROUNDS = 10
# bcrypt solo usa los primeros 72 bytes; los hashes heredados se calcularon así.
BCRYPT_MAX_BYTES = 72

Secret = Union[str, bytes]


def _as_bytes(value: Secret) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _secret_bytes(secret: Secret) -> bytes:
    return _as_bytes(secret)[:BCRYPT_MAX_BYTES]


def hash_password(secret: Secret) -> str:
    """Calcula el hash bcrypt de una contraseña con sal aleatoria.

    Args:
        secret (Secret): Contraseña en claro. Rechazar vacíos es tarea del
            llamador.

    Returns:
        str: Hash en codificación modular `$2b$10$...`.

    """

    return bcrypt.hashpw(_secret_bytes(secret), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode(
        "ascii"
    )


def verify_password(secret: Secret, hashed: Secret) -> bool:
    """Comprueba una contraseña contra un hash bcrypt almacenado.

    Args:
        secret (Secret): Contraseña introducida.
        hashed (Secret): Hash persistido tal cual.

    Returns:
        bool: True si coinciden. Un hash corrupto se trata como no coincidente.

    """

    try:
        return bcrypt.checkpw(_secret_bytes(secret), _as_bytes(hashed))
    except ValueError:
        logger.debug("hash bcrypt con formato inválido")
        return False
