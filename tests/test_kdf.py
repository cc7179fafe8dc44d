# --------------------------------------------------------------
# File: test_kdf.py
# Description: Pruebas de la resolución determinista de la clave AES-256.
# --------------------------------------------------------------

import logging

import pytest

from crm_guard.config import CipherConfig
from crm_guard.kdf import normalize_key_string, resolve_key


def test_fallback_key_matches_legacy_bytes():
    """La clave integrada son los primeros 32 bytes de la semilla histórica.

    Returns:
        None: Las aserciones comparan con el valor esperado byte a byte.
    """
    key = resolve_key(CipherConfig(dev_mode=True))
    assert key == b"solitaire-crm-default-encryption"
    assert len(key) == 32


def test_hex_key_used_verbatim():
    key_hex = "AB" * 32
    assert resolve_key(CipherConfig(encryption_key=key_hex)) == bytes.fromhex(key_hex)


def test_short_key_is_hex_normalized_and_padded():
    """Una semilla corta se codifica en hex y se rellena con ceros.

    Returns:
        None: Se comprueba la longitud y el relleno.
    """
    key = resolve_key(CipherConfig(encryption_key="abc"))
    assert key == b"abc" + b"\x00" * 29


def test_non_hex_key_of_64_chars_is_normalized():
    seed = "z" * 64
    assert resolve_key(CipherConfig(encryption_key=seed)) == b"z" * 32


def test_long_key_is_truncated():
    seed = "p" * 40 + "q"
    assert resolve_key(CipherConfig(encryption_key=seed)) == b"p" * 32


def test_normalize_key_string_handles_utf8():
    assert normalize_key_string("ñ") == "c3b1" + "0" * 60


def test_resolution_is_deterministic():
    config = CipherConfig(encryption_key="my-prod-secret")
    assert resolve_key(config) == resolve_key(config)


def test_missing_key_outside_dev_mode_warns(caplog):
    """Sin clave y sin modo desarrollo se usa la clave integrada con aviso.

    Args:
        caplog (pytest.LogCaptureFixture): Captura de registros de logging.

    Returns:
        None: Se valida la clave resultante y el aviso emitido.
    """
    with caplog.at_level(logging.WARNING, logger="crm_guard.kdf"):
        key = resolve_key(CipherConfig())
    assert key == b"solitaire-crm-default-encryption"
    assert any("insegura" in record.getMessage() for record in caplog.records)


def test_resolve_key_reads_environment(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY", "abc")
    assert resolve_key() == b"abc" + b"\x00" * 29


def test_config_from_env_dev_mode(monkeypatch):
    monkeypatch.setenv("CRM_GUARD_DEV_MODE", "True")
    config = CipherConfig.from_env()
    assert config.dev_mode is True
    assert config.encryption_key is None


@pytest.mark.parametrize("seed", ["a" * 63 + "\n", "a" * 62 + "\r\n", " " + "a" * 63])
def test_hex_like_seed_with_whitespace_is_normalized(seed):
    """Una semilla de 64 caracteres con espacios no se toma como hex literal.

    Args:
        seed (str): Semilla casi hexadecimal.

    Returns:
        None: Se obtiene la normalización hexadecimal sin excepciones.
    """
    key = resolve_key(CipherConfig(encryption_key=seed))
    assert key == seed.encode("utf-8")[:32]
