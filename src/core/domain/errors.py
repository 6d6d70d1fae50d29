"""Errores del dominio.

Taxonomía:
- `ValidationError`: identificador mal formado. Es el único que sale de `resolve`.
- `ProviderError` y subclases: fallos de un proveedor concreto. El orquestador
  los absorbe y pasa al siguiente proveedor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.domain.models import SimRecord


class ResolverError(Exception):
    """Base de todos los errores del resolver."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ResolverError):
    """El identificador no son exactamente 13 dígitos ASCII."""


class ProviderError(ResolverError):
    """Fallo atribuible a un único proveedor."""

    def __init__(self, provider: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, {"provider": provider, **(details or {})})
        self.provider = provider


class ProviderBlocked(ProviderError):
    """El proveedor devolvió una página anti-bot en vez de datos."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(provider, f"{provider}: blocked ({reason})")
        self.reason = reason


class ProviderTransportError(ProviderError):
    """Fallo de red, timeout o status HTTP no-2xx."""

    def __init__(self, provider: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(provider, f"{provider}: {detail}", {"status_code": status_code})
        self.detail = detail
        self.status_code = status_code


class ProviderParseEmpty(ProviderError):
    """Respuesta bien formada pero sin SIMs registradas."""

    def __init__(self, provider: str, record: SimRecord) -> None:
        super().__init__(provider, f"{provider}: no records")
        self.record = record
