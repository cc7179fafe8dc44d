# --------------------------------------------------------------
# File: models.py
# Description: Modelos de resultado y tipos de error compartidos del paquete.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan resultados de validación y cifrado."""

from __future__ import annotations

import binascii
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

IV_LENGTH = 16
TAG_LENGTH = 16

_HEX_SEGMENT = re.compile(r"[0-9a-fA-F]+")


class MalformedCiphertextError(ValueError):
    """El texto cifrado no respeta el formato `iv:tag:ciphertext`."""


class CipherError(str, Enum):
    """Motivos de fallo visibles para quien llama al cifrador.

    Los fallos de formato, de clave y de etiqueta se agrupan en
    `DECRYPTION_FAILED` para no revelar la causa concreta.
    """

    EMPTY_INPUT = "empty_input"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"


class CipherOutcome(BaseModel):
    """Resultado explícito de una operación de cifrado o descifrado.

    Attributes:
        ok (bool): Indica si la operación produjo un valor.
        value (Optional[str]): Texto cifrado o claro cuando `ok` es verdadero.
        error (Optional[CipherError]): Tipo de fallo cuando `ok` es falso.

    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: Optional[str] = None
    error: Optional[CipherError] = None

    @classmethod
    def success(cls, value: str) -> "CipherOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: CipherError) -> "CipherOutcome":
        return cls(ok=False, error=error)

    def unwrap_or(self, default: Optional[str] = None) -> Optional[str]:
        """Devuelve el valor o `default` si la operación falló."""

        return self.value if self.ok else default


class EncryptedSecret(BaseModel):
    """Representación decodificada del formato persistido `iv:tag:ciphertext`.

    Attributes:
        iv (bytes): Vector de inicialización de 128 bits.
        tag (bytes): Etiqueta de autenticación GCM de 128 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.

    """

    model_config = ConfigDict(frozen=True)

    iv: bytes
    tag: bytes
    ciphertext: bytes

    @classmethod
    def parse(cls, text: str) -> "EncryptedSecret":
        """Decodifica el triplete hexadecimal validando segmentos y longitudes.

        Args:
            text (str): Valor almacenado tal cual por el llamador.

        Returns:
            EncryptedSecret: Componentes binarios del secreto cifrado.

        Raises:
            MalformedCiphertextError: Si el número de segmentos, la codificación
                hexadecimal o las longitudes no son las esperadas.

        """

        if not isinstance(text, str):
            raise MalformedCiphertextError(f"se esperaba texto, no {type(text).__name__}")
        parts = text.split(":")
        if len(parts) != 3 or not all(parts):
            raise MalformedCiphertextError(
                f"se esperaban 3 segmentos no vacíos, hay {len(parts)}"
            )
        if not all(_HEX_SEGMENT.fullmatch(part) and len(part) % 2 == 0 for part in parts):
            raise MalformedCiphertextError("segmento no hexadecimal")
        iv, tag, ciphertext = (bytes.fromhex(part) for part in parts)
        if len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH:
            raise MalformedCiphertextError(
                f"longitudes iv={len(iv)} tag={len(tag)} inválidas"
            )
        return cls(iv=iv, tag=tag, ciphertext=ciphertext)

    def serialize(self) -> str:
        """Codifica el secreto en el formato persistido `iv:tag:ciphertext`."""

        return ":".join(
            binascii.hexlify(part).decode("ascii")
            for part in (self.iv, self.tag, self.ciphertext)
        )


class ValidationResult(BaseModel):
    """Resultado de una regla de validación de entrada."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str


class PasswordRequirements(BaseModel):
    """Desglose de los cinco requisitos de robustez de una contraseña."""

    model_config = ConfigDict(frozen=True)

    min_length: bool = False
    has_uppercase: bool = False
    has_lowercase: bool = False
    has_number: bool = False
    has_special_char: bool = False

    def all_met(self) -> bool:
        return all(
            (
                self.min_length,
                self.has_uppercase,
                self.has_lowercase,
                self.has_number,
                self.has_special_char,
            )
        )


class PasswordValidationResult(ValidationResult):
    """Resultado de validación de contraseña con su lista de requisitos."""

    requirements: PasswordRequirements = Field(default_factory=PasswordRequirements)


class ValidationReport(BaseModel):
    """Resultado de validar un formulario completo.

    Attributes:
        valid (bool): Verdadero si no se acumularon errores.
        errors (List[str]): Mensajes legibles para el usuario final.
        data (Dict[str, Any]): Campos ya saneados listos para persistir.

    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: List[str] = Field(default_factory=list)
    data: Dict[str, Any] = Field(default_factory=dict)


class TradingCredentials(BaseModel):
    """Contraseñas de una cuenta de trading y sus formas cifradas."""

    model_config = ConfigDict(frozen=True)

    master_password: str
    main_password: str
    investor_password: str
    encrypted_master: Optional[str] = None
    encrypted_main: Optional[str] = None
    encrypted_investor: Optional[str] = None

    def fully_encrypted(self) -> bool:
        return None not in (
            self.encrypted_master,
            self.encrypted_main,
            self.encrypted_investor,
        )
