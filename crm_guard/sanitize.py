# --------------------------------------------------------------
# File: sanitize.py
# Description: Filtro de lista negra para patrones SQL y etiquetas HTML.
# --------------------------------------------------------------
"""Saneado best-effort de texto libre de formularios.

No sustituye a las consultas parametrizadas: solo elimina patrones
conocidos antes de persistir o mostrar el valor.
"""

from __future__ import annotations

import re
from typing import Any

SQL_KEYWORDS = re.compile(
    r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION|SCRIPT)\b",
    re.IGNORECASE | re.ASCII,
)
SQL_SEQUENCES = re.compile(r"'|\\'|;|--|/\*|\*/|xp_|sp_", re.IGNORECASE)
HTML_TAG = re.compile(r"<[^>]*>")


def sanitize_input(value: Any) -> Any:
    """Elimina palabras clave SQL, secuencias peligrosas y etiquetas HTML.

    Args:
        value (Any): Entrada del usuario. Lo que no sea `str` se devuelve igual.

    Returns:
        Any: Texto saneado y recortado, o la entrada original si no es texto.

    """

    if not isinstance(value, str):
        return value

    sanitized = SQL_KEYWORDS.sub("", value)
    sanitized = SQL_SEQUENCES.sub("", sanitized)
    sanitized = HTML_TAG.sub("", sanitized)
    return sanitized.strip()
