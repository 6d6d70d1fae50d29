"""Validación del identificador nacional (CNIC)."""

from __future__ import annotations

import re

from core.domain.errors import ValidationError

# [0-9] y no \d: \d acepta dígitos Unicode (p.ej. árabe-índicos).
_IDENTIFIER_RE = re.compile(r"[0-9]{13}")


def is_valid_identifier(value: object) -> bool:
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def validate_identifier(value: object) -> str:
    """Devuelve el identificador o lanza `ValidationError` si no son 13 dígitos."""

    if not is_valid_identifier(value):
        raise ValidationError(
            "Invalid CNIC format. Must be 13 digits without dashes.",
            {"value": value if isinstance(value, str) else repr(value)},
        )
    return value  # type: ignore[return-value]
