# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Cifrado AES-256-GCM reversible de credenciales de trading.
# --------------------------------------------------------------
"""Cifrador autenticado para secretos que deben poder recuperarse en claro."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from crm_guard.config import CipherConfig
from crm_guard.kdf import resolve_key
from crm_guard.models import (
    IV_LENGTH,
    TAG_LENGTH,
    CipherError,
    CipherOutcome,
    EncryptedSecret,
    MalformedCiphertextError,
)

logger = logging.getLogger(__name__)


def aes_gcm_encrypt_with_key(key: bytes, plaintext: bytes) -> EncryptedSecret:
    """Cifra datos con AES-GCM usando un IV aleatorio de 128 bits.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos en claro.

    Returns:
        EncryptedSecret: IV, etiqueta y ciphertext por separado.

    """

    iv = os.urandom(IV_LENGTH)
    ct_full = AESGCM(key).encrypt(iv, plaintext, None)
    return EncryptedSecret(
        iv=iv, tag=ct_full[-TAG_LENGTH:], ciphertext=ct_full[:-TAG_LENGTH]
    )


def aes_gcm_decrypt_with_key(key: bytes, secret: EncryptedSecret) -> bytes:
    """Descifra y autentica un secreto AES-GCM.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        secret (EncryptedSecret): IV, etiqueta y ciphertext decodificados.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        InvalidTag: Si la etiqueta no se verifica (manipulación o clave errónea).

    """

    return AESGCM(key).decrypt(secret.iv, secret.ciphertext + secret.tag, None)


class CredentialCipher:
    """Cifra y descifra credenciales con la clave resuelta de la configuración.

    La clave se resuelve una vez en el constructor y no cambia después, por lo
    que una instancia puede compartirse entre hilos.
    """

    def __init__(self, config: Optional[CipherConfig] = None) -> None:
        self._key = resolve_key(config)

    def encrypt(self, secret: Union[str, bytes, None]) -> CipherOutcome:
        """Cifra una credencial y la serializa como `iv:tag:ciphertext`.

        Args:
            secret (Union[str, bytes, None]): Credencial en claro.

        Returns:
            CipherOutcome: Texto cifrado o `EMPTY_INPUT` si no hay valor.

        """

        if not secret:
            logger.warning("cifrado rechazado: credencial vacía")
            return CipherOutcome.failure(CipherError.EMPTY_INPUT)

        data = secret.encode("utf-8") if isinstance(secret, str) else secret
        try:
            encrypted = aes_gcm_encrypt_with_key(self._key, data)
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning("error de cifrado: %s", type(exc).__name__)
            return CipherOutcome.failure(CipherError.ENCRYPTION_FAILED)
        return CipherOutcome.success(encrypted.serialize())

    def decrypt(self, value: Optional[str]) -> CipherOutcome:
        """Descifra un valor persistido con formato `iv:tag:ciphertext`.

        Args:
            value (Optional[str]): Texto cifrado tal como se almacenó.

        Returns:
            CipherOutcome: Credencial en claro o `DECRYPTION_FAILED` ante
            cualquier fallo de formato, clave o autenticación.

        """

        if not value:
            logger.warning("descifrado rechazado: valor vacío")
            return CipherOutcome.failure(CipherError.EMPTY_INPUT)

        try:
            secret = EncryptedSecret.parse(value)
            plaintext = aes_gcm_decrypt_with_key(self._key, secret)
            return CipherOutcome.success(plaintext.decode("utf-8"))
        except MalformedCiphertextError as exc:
            logger.warning("error de descifrado: formato inválido (%s)", exc)
        except InvalidTag:
            logger.warning("error de descifrado: etiqueta de autenticación inválida")
        except UnicodeDecodeError:
            logger.warning("error de descifrado: el texto en claro no es UTF-8")
        return CipherOutcome.failure(CipherError.DECRYPTION_FAILED)
