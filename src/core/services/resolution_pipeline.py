"""SIM-registration resolution orchestration.

Providers are tried one at a time, in the fixed registry order. The first
provider whose normalized record has `total_numbers > 0` wins, and the rest are
never contacted. Per-provider problems (transport errors, anti-bot pages, empty
answers, unexpected exceptions) are absorbed here and turned into "try the
next provider". Only an invalid identifier escapes `resolve`, and it escapes
before any network call.

State per call: `Idle -> Querying(provider_i) -> Satisfied | NextProvider | Exhausted`.
There is no state shared between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from adapters.provider_client import ProviderClient
from adapters.sim_sources import select_providers
from core.config import AppSettings
from core.domain.errors import ProviderBlocked, ProviderParseEmpty, ProviderTransportError
from core.domain.identifier import validate_identifier
from core.domain.models import (
    AllProvidersFailed,
    AttemptStatus,
    Blocked,
    Empty,
    Found,
    Outcome,
    ProviderAttempt,
    ProviderSpec,
    SimRecord,
    TransportStatus,
)
from core.interfaces.provider import PayloadFetcher

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    provider_start: Callable[[ProviderSpec], None] | None = None
    provider_done: Callable[[ProviderAttempt], None] | None = None


async def _attempt(spec: ProviderSpec, identifier: str, fetcher: PayloadFetcher) -> SimRecord:
    """Query one provider; return a non-empty record or raise a `ProviderError`."""

    payload = await fetcher.fetch(spec, identifier)
    if payload.status is TransportStatus.BLOCKED:
        raise ProviderBlocked(spec.name, payload.detail or "challenge page")
    if not payload.ok:
        raise ProviderTransportError(
            spec.name,
            payload.detail or payload.status.value,
            payload.status_code,
        )

    result = spec.normalizer(payload.text)
    if isinstance(result, Blocked):
        raise ProviderBlocked(spec.name, result.reason)
    if result.total_numbers == 0:
        raise ProviderParseEmpty(spec.name, result)
    return result


async def resolve(
    identifier: str,
    *,
    settings: AppSettings | None = None,
    providers: Sequence[ProviderSpec] | None = None,
    fetcher: PayloadFetcher | None = None,
    hooks: PipelineHooks | None = None,
) -> Outcome:
    """Resolve `identifier` against the providers and return exactly one outcome.

    Raises `core.domain.errors.ValidationError` when the identifier is not 13
    ASCII digits; no provider is contacted in that case.
    """

    identifier = validate_identifier(identifier)
    settings = settings or AppSettings()
    hooks = hooks or PipelineHooks()
    if providers is None:
        providers = select_providers(settings.enabled_providers)
    fetcher = fetcher or ProviderClient(settings)

    attempts: list[ProviderAttempt] = []
    fallback: SimRecord | None = None
    last_index = len(providers) - 1

    def record(attempt: ProviderAttempt) -> None:
        attempts.append(attempt)
        if hooks.provider_done:
            hooks.provider_done(attempt)

    for index, spec in enumerate(providers):
        if hooks.provider_start:
            hooks.provider_start(spec)
        logger.info("Querying provider %s (%d/%d)", spec.name, index + 1, len(providers))

        try:
            result = await _attempt(spec, identifier, fetcher)
        except ProviderParseEmpty as exc:
            fallback = exc.record
            logger.info("Provider %s answered with no records", spec.name)
            record(ProviderAttempt(provider=spec.name, status=AttemptStatus.EMPTY))
        except ProviderBlocked as exc:
            logger.warning("Provider %s blocked the request: %s", spec.name, exc.reason)
            record(ProviderAttempt(provider=spec.name, status=AttemptStatus.BLOCKED, detail=exc.reason))
            if index == last_index:
                return Blocked(reason=exc.reason, provider=spec.name, attempts=attempts)
        except ProviderTransportError as exc:
            logger.warning("Provider %s failed: %s", spec.name, exc.detail)
            record(
                ProviderAttempt(
                    provider=spec.name,
                    status=AttemptStatus.TRANSPORT_ERROR,
                    detail=exc.detail,
                    status_code=exc.status_code,
                )
            )
        except Exception as exc:
            logger.exception("Unexpected failure while querying provider %s", spec.name)
            record(
                ProviderAttempt(
                    provider=spec.name,
                    status=AttemptStatus.ERROR,
                    detail=f"{type(exc).__name__}: {exc}",
                )
            )
        else:
            logger.info("Provider %s found %d SIM(s)", spec.name, result.total_numbers)
            record(ProviderAttempt(provider=spec.name, status=AttemptStatus.FOUND))
            return Found(record=result, provider=spec.name, attempts=attempts)

    if fallback is not None:
        # A record without SIMs reports no per-network usage, whatever the provider listed.
        return Empty(record=fallback.model_copy(update={"networks": []}), attempts=attempts)
    return AllProvidersFailed(attempts=attempts)
