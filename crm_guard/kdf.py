# --------------------------------------------------------------
# File: kdf.py
# Description: Resolución determinista de la clave AES-256 del CRM.
# --------------------------------------------------------------
"""Normalización hexadecimal de la semilla de cifrado configurada.

La derivación no es un KDF criptográfico: reproduce byte a byte la
normalización histórica para que los valores ya cifrados sigan siendo
descifrables.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from crm_guard.config import CipherConfig

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
KEY_HEX_LENGTH = KEY_LENGTH * 2

# Solo apta para desarrollo. Conservada para leer datos cifrados con ella.
INSECURE_DEV_KEY_SEED = "solitaire-crm-default-encryption-key-32-bytes-long!!"

_HEX_KEY = re.compile(r"[0-9a-fA-F]+")


def normalize_key_string(seed: str) -> str:
    """Convierte un texto arbitrario en 64 caracteres hexadecimales.

    Args:
        seed (str): Semilla en claro.

    Returns:
        str: Hex de los bytes UTF-8, rellenado con `0` y truncado a 64.

    """

    return seed.encode("utf-8").hex().ljust(KEY_HEX_LENGTH, "0")[:KEY_HEX_LENGTH]


def is_hex_key(seed: str) -> bool:
    return len(seed) == KEY_HEX_LENGTH and _HEX_KEY.fullmatch(seed) is not None


def _insecure_default_key_hex(dev_mode: bool) -> str:
    if not dev_mode:
        logger.warning(
            "ENCRYPTION_KEY no configurada fuera de modo desarrollo; "
            "se usa la clave insegura integrada"
        )
    else:
        logger.debug("usando la clave de desarrollo integrada")
    return normalize_key_string(INSECURE_DEV_KEY_SEED)


def resolve_key(config: Optional[CipherConfig] = None) -> bytes:
    """Obtiene los 32 bytes de clave AES-256 a partir de la configuración.

    Args:
        config (Optional[CipherConfig]): Configuración explícita. Si es `None`
            se lee del entorno.

    Returns:
        bytes: Clave simétrica de 256 bits. Nunca lanza excepciones.

    """

    if config is None:
        config = CipherConfig.from_env()

    seed = config.encryption_key
    if not seed:
        key_hex = _insecure_default_key_hex(config.dev_mode)
    elif is_hex_key(seed):
        key_hex = seed
    else:
        key_hex = normalize_key_string(seed)
    return bytes.fromhex(key_hex)
