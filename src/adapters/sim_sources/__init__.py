"""Fuentes SIM (registro estático de proveedores).

Por qué una tupla:
- El orden de la tupla *es* la prioridad de consulta; no se reordena nunca.
- Los `ProviderSpec` son inmutables y se crean al importar el módulo.
"""

from __future__ import annotations

from typing import Iterable

from adapters.sim_sources import paksiminfo, ridha, simdatabase
from core.domain.models import ProviderSpec

DEFAULT_PROVIDERS: tuple[ProviderSpec, ...] = (
    ridha.SPEC,
    paksiminfo.SPEC,
    simdatabase.SPEC,
)


def provider_names(providers: Iterable[ProviderSpec] = DEFAULT_PROVIDERS) -> list[str]:
    return [spec.name for spec in providers]


def select_providers(
    names: Iterable[str] | None,
    providers: tuple[ProviderSpec, ...] = DEFAULT_PROVIDERS,
) -> tuple[ProviderSpec, ...]:
    """Filtra `providers` por nombre conservando el orden de prioridad.

    Lanza `ValueError` si algún nombre no existe en el registro.
    """

    if not names:
        return providers
    wanted = {name.strip().lower() for name in names if name.strip()}
    if not wanted:
        return providers
    unknown = wanted - set(provider_names(providers))
    if unknown:
        raise ValueError(
            f"Unknown provider(s): {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(provider_names(providers))}"
        )
    return tuple(spec for spec in providers if spec.name in wanted)


__all__ = [
    "DEFAULT_PROVIDERS",
    "provider_names",
    "select_providers",
]
