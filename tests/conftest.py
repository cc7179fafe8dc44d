# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar la configuración de cifrado.
# --------------------------------------------------------------

from typing import Iterator

import pytest

from crm_guard import helpers
from crm_guard.config import CipherConfig
from crm_guard.crypto_sym import CredentialCipher

TEST_KEY_HEX = "00112233445566778899aabbccddeeff" * 2


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> Iterator[None]:
    """Elimina las variables de cifrado y vacía el cifrador por defecto.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante cada test.
    """
    monkeypatch.delenv("ENCRYPTION_KEY", raising=False)
    monkeypatch.delenv("CRM_GUARD_DEV_MODE", raising=False)
    helpers.default_cipher.cache_clear()
    yield
    helpers.default_cipher.cache_clear()


@pytest.fixture
def cipher() -> CredentialCipher:
    """Cifrador con una clave hexadecimal fija e independiente del entorno."""
    return CredentialCipher(CipherConfig(encryption_key=TEST_KEY_HEX))
