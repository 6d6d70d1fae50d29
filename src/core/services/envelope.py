"""Respuesta JSON (envelope) para cada `Outcome`.

Lo consume la CLI (`--json`) y cualquier handler HTTP que exponga `resolve`.
Todo fallo incluye el canal de verificación manual (SMS 668 + portales PTA).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from core.domain.models import AllProvidersFailed, Blocked, Empty, Found, Outcome

OFFICIAL_LINKS: tuple[str, ...] = (
    "https://cnic.sims.pk",
    "https://dirbs.pta.gov.pk",
    "https://siminfo.pta.gov.pk",
)


def manual_check_instruction(identifier: str | None = None) -> str:
    return f"Send 'N {identifier or '<CNIC>'}' to 668 for SIM information"


def _manual_channel(identifier: str | None) -> dict[str, Any]:
    return {
        "official_links": list(OFFICIAL_LINKS),
        "manual_check": manual_check_instruction(identifier),
    }


def validation_envelope(message: str) -> tuple[int, dict[str, Any]]:
    return 400, {"status": "error", "message": message}


def build_envelope(
    identifier: str,
    outcome: Outcome,
    *,
    now: datetime | None = None,
) -> tuple[int, dict[str, Any]]:
    """Devuelve `(http_status, payload)` para el resultado de `resolve`."""

    if isinstance(outcome, Found):
        record = outcome.record
        owner = record.owner_info
        timestamp = (now or datetime.now(timezone.utc)).isoformat()
        return 200, {
            "status": "success",
            "data": {
                "owner_info": {
                    "name": owner.name,
                    "cnic": identifier,
                    "father_name": owner.father_name,
                    "address": owner.address,
                },
                "sim_details": {
                    "total_numbers": record.total_numbers,
                    "networks": [n.model_dump(mode="json", by_alias=True) for n in record.networks],
                    "numbers_list": [n.model_dump(mode="json") for n in record.numbers_list],
                },
                "summary": record.summary(),
            },
            "source": outcome.provider,
            "timestamp": timestamp,
        }

    if isinstance(outcome, Empty):
        return 200, {
            "status": "success",
            "data": {
                "cnic": identifier,
                "message": "No SIMs found or unable to fetch data due to security restrictions",
                "note": "Official PTA sources require CAPTCHA verification",
                **_manual_channel(identifier),
            },
        }

    if isinstance(outcome, Blocked):
        return 503, {
            "status": "error",
            "message": f"Provider '{outcome.provider or 'unknown'}' answered with an anti-automation challenge",
            "note": outcome.reason,
            "suggestion": "Please try official PTA websites directly",
            **_manual_channel(identifier),
        }

    if isinstance(outcome, AllProvidersFailed):
        return 503, {
            "status": "error",
            "message": "Service temporarily unavailable",
            "suggestion": "Please try official PTA websites directly",
            **_manual_channel(identifier),
        }

    raise TypeError(f"Unsupported outcome: {type(outcome).__name__}")
