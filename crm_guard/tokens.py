# --------------------------------------------------------------
# File: tokens.py
# Description: Generación de tokens de restablecimiento, contraseñas y OTP.
# --------------------------------------------------------------
"""Generadores sin estado de tokens aleatorios y códigos de un solo uso."""

from __future__ import annotations

import random
import secrets
import string

RESET_TOKEN_BYTES = 32
DEFAULT_PASSWORD_LENGTH = 12
PASSWORD_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits + "!@#$%^&*"
OTP_MIN = 100000
OTP_MAX = 999999

_system_random = secrets.SystemRandom()


def generate_reset_token() -> str:
    """Genera un token hexadecimal de 256 bits para enlaces de restablecimiento."""

    return secrets.token_hex(RESET_TOKEN_BYTES)


def generate_random_password(length: int = DEFAULT_PASSWORD_LENGTH, *, secure: bool = False) -> str:
    """Genera una contraseña temporal muestreando el alfabeto de 70 caracteres.

    Por defecto usa el generador no criptográfico de `random`, pensado para
    contraseñas que el usuario cambia de inmediato. Con `secure=True` se usa
    la fuente del sistema operativo.

    Args:
        length (int): Número de caracteres.
        secure (bool): Fuerza el uso de un CSPRNG.

    Returns:
        str: Contraseña generada.

    """

    if length < 0:
        raise ValueError("length debe ser >= 0")
    rng = _system_random if secure else random
    return "".join(rng.choice(PASSWORD_ALPHABET) for _ in range(length))


def generate_otp(*, secure: bool = False) -> str:
    """Genera un código numérico de 6 dígitos en [100000, 999999]."""

    rng = _system_random if secure else random
    return str(rng.randint(OTP_MIN, OTP_MAX))
