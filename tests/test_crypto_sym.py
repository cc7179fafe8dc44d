# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado de credenciales con AES-GCM.
# --------------------------------------------------------------

import pytest

from crm_guard.config import CipherConfig
from crm_guard.crypto_sym import CredentialCipher
from crm_guard.models import CipherError, EncryptedSecret, MalformedCiphertextError

# Valores escritos por versiones anteriores del CRM con IV fijo.
LEGACY_DEFAULT_KEY_VALUE = (
    "000102030405060708090a0b0c0d0e0f:9a7263faf5f737974cbd265e5194a574:13f1e849581f3191cf134c5ecde95d"
)
LEGACY_CUSTOM_KEY_VALUE = (
    "000102030405060708090a0b0c0d0e0f:9ce0135f10d6e18dceefbdfea98a2746:bd0b013588fe38"
)


def _flip_hex(char: str) -> str:
    return "1" if char == "0" else "0"


def test_roundtrip_ok(cipher):
    """Comprueba que un cifrado pueda revertirse correctamente.

    Args:
        cipher (CredentialCipher): Cifrador con clave fija de pruebas.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    outcome = cipher.encrypt("Tr4d3r!pass")
    assert outcome.ok
    decrypted = cipher.decrypt(outcome.value)
    assert decrypted.ok
    assert decrypted.value == "Tr4d3r!pass"


def test_roundtrip_unicode(cipher):
    value = cipher.encrypt("contraseña-ñ-€").value
    assert cipher.decrypt(value).value == "contraseña-ñ-€"


def test_format_is_hex_triplet(cipher):
    """Verifica el formato persistido `iv:tag:ciphertext`.

    Args:
        cipher (CredentialCipher): Cifrador con clave fija de pruebas.

    Returns:
        None: Se validan segmentos y longitudes.
    """
    value = cipher.encrypt("secret").value
    iv, tag, ct = value.split(":")
    assert len(iv) == 32 and len(tag) == 32
    assert len(ct) == len("secret") * 2
    int(iv + tag + ct, 16)


def test_encryption_is_not_deterministic(cipher):
    first = cipher.encrypt("same").value
    second = cipher.encrypt("same").value
    assert first != second
    assert cipher.decrypt(first).value == "same"
    assert cipher.decrypt(second).value == "same"


def test_iv_uniqueness(cipher):
    ivs = {cipher.encrypt("x").value.split(":")[0] for _ in range(200)}
    assert len(ivs) == 200


def test_empty_input_is_rejected(cipher):
    assert cipher.encrypt("").error is CipherError.EMPTY_INPUT
    assert cipher.encrypt(None).error is CipherError.EMPTY_INPUT
    assert cipher.decrypt("").error is CipherError.EMPTY_INPUT


@pytest.mark.parametrize("position", range(32))
def test_tag_tampering_detected(cipher, position):
    """Cualquier carácter alterado en la etiqueta invalida el descifrado.

    Args:
        cipher (CredentialCipher): Cifrador con clave fija de pruebas.
        position (int): Posición del carácter hexadecimal modificado.

    Returns:
        None: Se espera un fallo explícito sin texto en claro.
    """
    iv, tag, ct = cipher.encrypt("msg").value.split(":")
    bad_tag = tag[:position] + _flip_hex(tag[position]) + tag[position + 1:]
    outcome = cipher.decrypt(f"{iv}:{bad_tag}:{ct}")
    assert not outcome.ok
    assert outcome.value is None
    assert outcome.error is CipherError.DECRYPTION_FAILED


def test_ciphertext_and_iv_tampering_detected(cipher):
    iv, tag, ct = cipher.encrypt("hola mundo").value.split(":")
    bad_ct = _flip_hex(ct[0]) + ct[1:]
    bad_iv = _flip_hex(iv[0]) + iv[1:]
    assert not cipher.decrypt(f"{iv}:{tag}:{bad_ct}").ok
    assert not cipher.decrypt(f"{bad_iv}:{tag}:{ct}").ok


@pytest.mark.parametrize(
    "value",
    [
        "not:three:parts:too-many",
        "onlyone",
        "a:b",
        "zz:yy:xx",
        "00:00:00",
        "::",
    ],
)
def test_malformed_values_fail(cipher, value):
    outcome = cipher.decrypt(value)
    assert not outcome.ok
    assert outcome.error is CipherError.DECRYPTION_FAILED


def test_wrong_key_fails_same_as_malformed(cipher):
    value = cipher.encrypt("secret").value
    other = CredentialCipher(CipherConfig(encryption_key="another-key"))
    outcome = other.decrypt(value)
    assert outcome.error is CipherError.DECRYPTION_FAILED


def test_failure_reason_is_logged(cipher, caplog):
    caplog.set_level("WARNING", logger="crm_guard.crypto_sym")
    cipher.decrypt("onlyone")
    assert any("formato" in record.getMessage() for record in caplog.records)


def test_reads_values_written_with_legacy_default_key():
    """Los valores cifrados con la clave integrada siguen siendo legibles.

    Returns:
        None: Se descifra un valor generado por la versión anterior.
    """
    legacy = CredentialCipher(CipherConfig(dev_mode=True))
    assert legacy.decrypt(LEGACY_DEFAULT_KEY_VALUE).value == "MetaTrader#2024"


def test_reads_values_written_with_legacy_custom_key():
    legacy = CredentialCipher(CipherConfig(encryption_key="my-prod-secret"))
    assert legacy.decrypt(LEGACY_CUSTOM_KEY_VALUE).value == "Inv@900"


def test_encrypted_secret_parse_and_serialize():
    secret = EncryptedSecret.parse(LEGACY_CUSTOM_KEY_VALUE)
    assert secret.iv == bytes(range(16))
    assert len(secret.tag) == 16
    assert secret.serialize() == LEGACY_CUSTOM_KEY_VALUE


def test_encrypted_secret_parse_rejects_short_iv():
    with pytest.raises(MalformedCiphertextError):
        EncryptedSecret.parse("0001:" + "00" * 16 + ":abcd")


@pytest.mark.parametrize("value", [12345, b"00:00:00", ["a", "b", "c"], 3.5])
def test_non_string_values_fail_without_raising(cipher, value):
    """Un valor que no es texto se rechaza como fallo de descifrado.

    Args:
        cipher (CredentialCipher): Cifrador con clave fija de pruebas.
        value (Any): Valor de tipo inesperado.

    Returns:
        None: Se espera un resultado fallido, no una excepción.
    """
    outcome = cipher.decrypt(value)
    assert not outcome.ok
    assert outcome.error is CipherError.DECRYPTION_FAILED


def test_whitespace_inside_hex_segment_is_rejected(cipher):
    iv, tag, ct = cipher.encrypt("secret").value.split(":")
    spaced_iv = iv[:4] + " " + iv[4:]
    assert cipher.decrypt(f"{spaced_iv}:{tag}:{ct}").error is CipherError.DECRYPTION_FAILED
    with pytest.raises(MalformedCiphertextError):
        EncryptedSecret.parse(f"{spaced_iv}:{tag}:{ct}")
