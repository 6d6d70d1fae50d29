"""Cliente genérico de proveedores SIM.

Construye la petición a partir del `ProviderSpec` (método, formulario o
identificador en la ruta, headers) y devuelve siempre un `RawPayload`: los
fallos de red o HTTP quedan codificados en `status`, nunca se propagan.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import ProviderSpec, RawPayload, TransportStatus
from core.extraction.blocking import detect_block

logger = logging.getLogger(__name__)

_ACCEPT = {
    "html": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "json": "application/json, text/plain;q=0.5, */*;q=0.1",
}

# Status con los que los WAF suelen servir su página de challenge.
_CHALLENGE_STATUS_CODES = frozenset({403, 429, 503})


class ProviderClient:
    """Implementa `core.interfaces.provider.PayloadFetcher` sobre httpx."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch(self, spec: ProviderSpec, identifier: str) -> RawPayload:
        url = spec.build_url(identifier)
        headers = {"Accept": _ACCEPT[spec.response_format], **spec.headers}

        try:
            async with build_async_client(
                self._settings,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                if spec.method == "POST":
                    response = await client.post(url, data=spec.build_form(identifier))
                else:
                    response = await client.get(url)
                text = response.text
        except httpx.TimeoutException:
            detail = f"timeout after {self._settings.http_timeout_seconds:g}s"
            logger.debug("%s: %s", spec.name, detail)
            return RawPayload(provider=spec.name, status=TransportStatus.NETWORK_ERROR, detail=detail)
        except httpx.HTTPError as exc:
            detail = f"{type(exc).__name__}: {exc}"
            logger.debug("%s: %s", spec.name, detail)
            return RawPayload(provider=spec.name, status=TransportStatus.NETWORK_ERROR, detail=detail)

        status_code = response.status_code
        if response.is_success:
            return RawPayload(provider=spec.name, text=text, status_code=status_code)

        if status_code in _CHALLENGE_STATUS_CODES:
            reason = detect_block(text)
            if reason:
                return RawPayload(
                    provider=spec.name,
                    text=text,
                    status=TransportStatus.BLOCKED,
                    status_code=status_code,
                    detail=reason,
                )

        return RawPayload(
            provider=spec.name,
            text=text,
            status=TransportStatus.HTTP_ERROR,
            status_code=status_code,
            detail=f"HTTP {status_code}",
        )
