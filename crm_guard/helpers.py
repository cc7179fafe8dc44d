# --------------------------------------------------------------
# File: helpers.py
# Description: Superficie de funciones planas usada por los flujos del CRM.
# --------------------------------------------------------------
"""Funciones de conveniencia con la semántica histórica de centinela `None`.

Los flujos de registro, login, restablecimiento y administración llaman a
estas funciones directamente. El cifrador por defecto se construye una sola
vez a partir del entorno.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Union

from crm_guard.config import CipherConfig
from crm_guard.crypto_sym import CredentialCipher
from crm_guard.email_policy import is_valid_email
from crm_guard.hashing import hash_password, verify_password
from crm_guard.password_policy import validate_password
from crm_guard.sanitize import sanitize_input
from crm_guard.tokens import generate_otp, generate_random_password, generate_reset_token

__all__ = [
    "compare_password",
    "decrypt_password",
    "default_cipher",
    "encrypt_password",
    "generate_otp",
    "generate_random_password",
    "generate_reset_token",
    "hash_password",
    "is_valid_email",
    "sanitize_input",
    "validate_password",
]


@lru_cache(maxsize=None)
def default_cipher() -> CredentialCipher:
    """Cifrador compartido configurado desde `ENCRYPTION_KEY`."""

    return CredentialCipher(CipherConfig.from_env())


def compare_password(password: Union[str, bytes], hashed: Union[str, bytes]) -> bool:
    """Compara una contraseña en claro con su hash bcrypt."""

    return verify_password(password, hashed)


def encrypt_password(password: Optional[str]) -> Optional[str]:
    """Cifra una credencial; devuelve `None` si no es posible."""

    return default_cipher().encrypt(password).unwrap_or(None)


def decrypt_password(encrypted: Optional[str]) -> Optional[str]:
    """Descifra una credencial; devuelve `None` ante cualquier fallo."""

    return default_cipher().decrypt(encrypted).unwrap_or(None)
