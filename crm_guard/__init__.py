# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades de protección de credenciales.
# --------------------------------------------------------------
"""Inicializa el paquete `crm_guard` y documenta sus módulos principales."""

__all__ = [
    "config",
    "crypto_sym",
    "email_policy",
    "hashing",
    "helpers",
    "kdf",
    "models",
    "password_policy",
    "sanitize",
    "services",
    "tokens",
]
