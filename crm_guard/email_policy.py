# --------------------------------------------------------------
# File: email_policy.py
# Description: Reglas de formato, spam y dominios desechables para emails.
# --------------------------------------------------------------
"""Validación de direcciones de correo en registro y recuperación de cuenta.

Las comprobaciones se aplican en orden y la primera que falla determina el
mensaje devuelto.
"""

from __future__ import annotations

import re
from typing import Any

from crm_guard.models import ValidationResult

MAX_EMAIL_LENGTH = 60
MAX_LOCAL_LENGTH = 30
MIN_DOMAIN_LENGTH = 4
MAX_DOMAIN_LENGTH = 253

EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NUMERIC_LOCAL = re.compile(r"^[0-9]+$")

COMMON_TLDS = re.compile(
    r"\.(com|net|org|edu|gov|mil|int|co|io|me|info|biz|name|pro|xyz|tech|online"
    r"|site|website|store|shop|app|dev|test|example|invalid|localhost)$",
    re.IGNORECASE,
)

SPAM_PATTERNS = (
    re.compile(r"^[0-9]+@"),  # parte local solo numérica
    re.compile(r"@[0-9]+\.[a-z]+$"),  # dominio numérico
    re.compile(r"(.)\1{4,}"),  # aaaaa, 11111
    re.compile(r"^[0-9]{8,}@"),
    re.compile(r"@(test|temp|fake|spam|trash|throwaway|disposable)"),
    re.compile(r"@[a-z]{1,2}\.[a-z]{1,2}$"),  # a.b
)

DISPOSABLE_DOMAINS = (
    "tempmail.com",
    "10minutemail.com",
    "guerrillamail.com",
    "mailinator.com",
    "throwaway.email",
    "trashmail.com",
)

MSG_REQUIRED = "Email is required"
MSG_FORMAT = "Invalid email format"
MSG_TOO_LONG = f"Email must be {MAX_EMAIL_LENGTH} characters or less"
MSG_DOMAIN = "Invalid email domain"
MSG_SPAM = "Please use a valid email address"
MSG_DISPOSABLE = "Disposable email addresses are not allowed"
MSG_VALID = "Email is valid"


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(valid=False, message=message)


def _has_valid_tld(domain: str) -> bool:
    if COMMON_TLDS.search(domain):
        return True
    tld = domain.split(".")[-1]
    return 2 <= len(tld) <= 10


def looks_like_spam(email: str) -> bool:
    """Indica si un email normalizado coincide con algún patrón heurístico."""

    return any(pattern.search(email) for pattern in SPAM_PATTERNS)


def is_disposable(email: str) -> bool:
    return any(domain in email for domain in DISPOSABLE_DOMAINS)


def is_valid_email(email: Any) -> ValidationResult:
    """Valida formato y reputación básica de una dirección de correo.

    Args:
        email (Any): Valor recibido del formulario. Se normaliza recortando
            espacios y pasando a minúsculas.

    Returns:
        ValidationResult: `valid` y el mensaje de la primera regla incumplida.

    """

    if not email or not isinstance(email, str):
        return _invalid(MSG_REQUIRED)

    normalized = email.strip().lower()

    if not EMAIL_SHAPE.match(normalized):
        return _invalid(MSG_FORMAT)

    if len(normalized) > MAX_EMAIL_LENGTH:
        return _invalid(MSG_TOO_LONG)

    local_part, domain = normalized.split("@")

    if not 1 <= len(local_part) <= MAX_LOCAL_LENGTH:
        return _invalid(MSG_FORMAT)

    if not MIN_DOMAIN_LENGTH <= len(domain) <= MAX_DOMAIN_LENGTH:
        return _invalid(MSG_DOMAIN)

    if not _has_valid_tld(domain):
        return _invalid(MSG_DOMAIN)

    if looks_like_spam(normalized):
        return _invalid(MSG_SPAM)

    if NUMERIC_LOCAL.match(local_part) or len(local_part) < 2:
        return _invalid(MSG_SPAM)

    if is_disposable(normalized):
        return _invalid(MSG_DISPOSABLE)

    return ValidationResult(valid=True, message=MSG_VALID)
