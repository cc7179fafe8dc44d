# --------------------------------------------------------------
# File: password_policy.py
# Description: Reglas de robustez de contraseñas para cuentas del portal.
# --------------------------------------------------------------
"""Utilidades para evaluar la robustez de contraseñas del CRM."""

from __future__ import annotations

import re
from typing import List, Optional

from crm_guard.models import PasswordRequirements, PasswordValidationResult

MIN_LENGTH = 8

UPPER = re.compile(r"[A-Z]")
LOWER = re.compile(r"[a-z]")
DIGIT = re.compile(r"[0-9]")
SPECIAL = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")

# Orden fijo en el que se enumeran los requisitos incumplidos.
REQUIREMENT_LABELS = (
    ("min_length", f"at least {MIN_LENGTH} characters"),
    ("has_uppercase", "one uppercase letter"),
    ("has_lowercase", "one lowercase letter"),
    ("has_number", "one number"),
    ("has_special_char", "one special character"),
)


def check_requirements(password: str) -> PasswordRequirements:
    """Evalúa por separado cada uno de los cinco requisitos."""

    return PasswordRequirements(
        min_length=len(password) >= MIN_LENGTH,
        has_uppercase=UPPER.search(password) is not None,
        has_lowercase=LOWER.search(password) is not None,
        has_number=DIGIT.search(password) is not None,
        has_special_char=SPECIAL.search(password) is not None,
    )


def missing_requirements(requirements: PasswordRequirements) -> List[str]:
    return [label for field, label in REQUIREMENT_LABELS if not getattr(requirements, field)]


def validate_password(password: Optional[str]) -> PasswordValidationResult:
    """Valida una contraseña y devuelve siempre el desglose de requisitos.

    Args:
        password (Optional[str]): Contraseña propuesta por el usuario. Un valor
            que no sea texto se trata como ausente.

    Returns:
        PasswordValidationResult: `valid`, mensaje con los requisitos que
        faltan y el detalle de los cinco requisitos para pintar una checklist.

    """

    if not password or not isinstance(password, str):
        return PasswordValidationResult(
            valid=False,
            message="Password is required",
            requirements=PasswordRequirements(),
        )

    requirements = check_requirements(password)
    if not requirements.all_met():
        missing = missing_requirements(requirements)
        return PasswordValidationResult(
            valid=False,
            message=f"Password must contain {', '.join(missing)}",
            requirements=requirements,
        )

    return PasswordValidationResult(
        valid=True, message="Password is valid", requirements=requirements
    )
