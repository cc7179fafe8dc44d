# --------------------------------------------------------------
# File: services.py
# Description: Validación de formularios y credenciales de cuentas de trading.
# --------------------------------------------------------------
"""Funciones de la capa de servicios que combinan validación, saneado y cifrado."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from crm_guard.crypto_sym import CredentialCipher
from crm_guard.email_policy import is_valid_email
from crm_guard.models import TradingCredentials, ValidationReport
from crm_guard.password_policy import validate_password
from crm_guard.sanitize import sanitize_input
from crm_guard.tokens import DEFAULT_PASSWORD_LENGTH, generate_random_password

MAX_NAME_LENGTH = 15
MAX_EMAIL_LENGTH = 60
MAX_PHONE_LENGTH = 15
INVESTOR_PASSWORD_SUFFIX = "Inv@900"

_REGISTER_TEXT_FIELDS = (
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("phone_code", "phoneCode"),
    ("phone_number", "phoneNumber"),
    ("country", "country"),
    ("referred_by", "referredBy"),
)


def _field(payload: Mapping[str, Any], *names: str) -> Any:
    """Devuelve el primer valor presente entre varios alias de campo."""

    for name in names:
        value = payload.get(name)
        if value:
            return value
    return None


def _clean_text(value: Any) -> str:
    return sanitize_input(str(value).strip()) if value else ""


def _clean_email(value: Any) -> str:
    return sanitize_input(str(value).lower().strip()) if value else ""


def _clean_password(value: Any) -> str:
    # La contraseña no se sanea: necesita los caracteres especiales.
    return str(value) if value else ""


def _report(errors: List[str], data: Dict[str, Any]) -> ValidationReport:
    return ValidationReport(valid=not errors, errors=errors, data=data)


def _check_email(email: str, errors: List[str]) -> None:
    if not email:
        errors.append("Email is required")
        return
    result = is_valid_email(email)
    if not result.valid:
        errors.append(result.message)


def _check_password_strength(password: str, errors: List[str]) -> None:
    if not password:
        errors.append("Password is required")
        return
    result = validate_password(password)
    if not result.valid:
        errors.append(result.message)


def validate_register(payload: Mapping[str, Any]) -> ValidationReport:
    """Sanea y valida el formulario de registro.

    Los límites de longitud se comprueban primero y cortan la validación con
    un único error. Después se acumulan todos los errores de contenido.

    Args:
        payload (Mapping[str, Any]): Campos recibidos; se aceptan nombres en
            snake_case o camelCase.

    Returns:
        ValidationReport: Errores acumulados y datos saneados.

    """

    data: Dict[str, Any] = {
        "email": _clean_email(_field(payload, "email")),
        "password": _clean_password(_field(payload, "password")),
    }
    for snake, camel in _REGISTER_TEXT_FIELDS:
        data[snake] = _clean_text(_field(payload, snake, camel))

    if len(data["first_name"]) > MAX_NAME_LENGTH:
        return _report([f"First name must be {MAX_NAME_LENGTH} characters or less"], data)
    if len(data["last_name"]) > MAX_NAME_LENGTH:
        return _report([f"Last name must be {MAX_NAME_LENGTH} characters or less"], data)
    if len(data["email"]) > MAX_EMAIL_LENGTH:
        return _report([f"Email must be {MAX_EMAIL_LENGTH} characters or less"], data)
    if len(data["phone_number"]) > MAX_PHONE_LENGTH:
        return _report([f"Phone number must be {MAX_PHONE_LENGTH} characters or less"], data)

    errors: List[str] = []
    _check_email(data["email"], errors)
    _check_password_strength(data["password"], errors)
    if not data["first_name"]:
        errors.append("First name is required")
    if not data["last_name"]:
        errors.append("Last name is required")
    return _report(errors, data)


def validate_login(payload: Mapping[str, Any]) -> ValidationReport:
    """Valida email y presencia de contraseña en el formulario de login."""

    data = {
        "email": _clean_email(_field(payload, "email")),
        "password": _clean_password(_field(payload, "password")),
    }
    errors: List[str] = []
    _check_email(data["email"], errors)
    if not data["password"]:
        errors.append("Password is required")
    return _report(errors, data)


def validate_forgot_password(payload: Mapping[str, Any]) -> ValidationReport:
    email = _field(payload, "email")
    errors: List[str] = []
    _check_email(email if isinstance(email, str) else "", errors)
    return _report(errors, {"email": email})


def validate_reset_password(payload: Mapping[str, Any]) -> ValidationReport:
    """Valida el token de restablecimiento y la nueva contraseña."""

    token = _field(payload, "token")
    password = _clean_password(_field(payload, "password"))
    errors: List[str] = []
    if not token:
        errors.append("Reset token is required")
    _check_password_strength(password, errors)
    return _report(errors, {"token": token, "password": password})


def build_trading_credentials(
    portal_password: str,
    cipher: CredentialCipher,
    *,
    investor_suffix: str = INVESTOR_PASSWORD_SUFFIX,
    length: int = DEFAULT_PASSWORD_LENGTH,
) -> TradingCredentials:
    """Genera y cifra las contraseñas de una nueva cuenta de trading.

    La contraseña maestra reutiliza la del portal; la principal es aleatoria y
    la de inversor es aleatoria con un sufijo fijo.

    Args:
        portal_password (str): Contraseña del portal del cliente.
        cipher (CredentialCipher): Cifrador con la clave de la instalación.
        investor_suffix (str): Sufijo que exige la plataforma para inversores.
        length (int): Longitud de las partes aleatorias.

    Returns:
        TradingCredentials: Contraseñas en claro y cifradas. Un campo cifrado
        queda a `None` si su cifrado no fue posible.

    """

    main_password = generate_random_password(length)
    investor_password = generate_random_password(length) + investor_suffix

    return TradingCredentials(
        master_password=portal_password,
        main_password=main_password,
        investor_password=investor_password,
        encrypted_master=cipher.encrypt(portal_password).unwrap_or(None),
        encrypted_main=cipher.encrypt(main_password).unwrap_or(None),
        encrypted_investor=cipher.encrypt(investor_password).unwrap_or(None),
    )


def reveal_trading_password(cipher: CredentialCipher, encrypted: Optional[str]) -> Optional[str]:
    """Descifra una contraseña de trading para la vista de administración."""

    return cipher.decrypt(encrypted).unwrap_or(None)
