"""Contratos de acceso a proveedores.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El orquestador se prueba con un fetcher en memoria, sin red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ProviderSpec, RawPayload


@runtime_checkable
class PayloadFetcher(Protocol):
    """Contrato mínimo para obtener el payload crudo de un proveedor.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP).
    - Nunca lanza por fallos de transporte: los codifica en `RawPayload.status`.
    """

    async def fetch(self, spec: ProviderSpec, identifier: str) -> RawPayload:
        """Consulta `spec` para `identifier` y devuelve el cuerpo + estado."""

        ...
