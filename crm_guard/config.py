# --------------------------------------------------------------
# File: config.py
# Description: Carga de la configuración de cifrado desde el entorno.
# --------------------------------------------------------------
"""Configuración explícita para los componentes criptográficos del CRM."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY"
DEV_MODE_ENV = "CRM_GUARD_DEV_MODE"

_TRUTHY = {"1", "true", "yes", "on"}


class CipherConfig(BaseModel):
    """Parámetros que alimentan la resolución de la clave AES-256.

    Attributes:
        encryption_key (Optional[str]): Semilla de la clave suministrada por el
            operador. Puede ser 64 caracteres hexadecimales o cualquier texto.
        dev_mode (bool): Habilita explícitamente la clave de desarrollo
            integrada cuando no hay semilla configurada.

    """

    model_config = ConfigDict(frozen=True)

    encryption_key: Optional[str] = None
    dev_mode: bool = False

    @classmethod
    def from_env(cls) -> "CipherConfig":
        """Construye la configuración leyendo las variables de entorno."""

        raw_dev = os.getenv(DEV_MODE_ENV, "")
        return cls(
            encryption_key=os.getenv(ENCRYPTION_KEY_ENV) or None,
            dev_mode=raw_dev.strip().lower() in _TRUTHY,
        )
