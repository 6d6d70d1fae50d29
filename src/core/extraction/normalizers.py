"""Normalización de payloads crudos a `SimRecord`.

Dos familias de entrada:
- HTML de trackers legacy (tablas + etiquetas "Owner Name: ...").
- JSON de APIs con esquemas parecidos pero no idénticos.

Reglas comunes:
- Primero se detecta el bloqueo anti-bot; si lo hay, se devuelve `Blocked`
  sin extraer nada.
- Nunca se lanza por entrada malformada: se devuelve un registro vacío.
- El total se reconcilia en este orden: total explícito > suma de operadores >
  cifra suelta de respaldo.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, Sequence

from core.domain.models import Blocked, NetworkUsage, OwnerInfo, SimNumber, SimRecord
from core.extraction.blocking import detect_block
from core.extraction.patterns import (
    extract_network_rows,
    extract_numbers_list,
    extract_owner_info,
    extract_total_row,
    extract_total_sims,
    network_for_number,
    to_count,
)

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"[^0-9]")


def reconcile_total(*, explicit: int, networks: Sequence[NetworkUsage], fallback: int) -> int:
    """Total explícito si es > 0; si no, suma de totales por operador; si no, `fallback`."""

    if explicit > 0:
        return explicit
    summed = sum(n.total for n in networks)
    if summed > 0:
        return summed
    return max(fallback, 0)


def normalize_html(text: str) -> SimRecord | Blocked:
    reason = detect_block(text)
    if reason:
        return Blocked(reason=reason)

    networks = extract_network_rows(text)
    total_row = extract_total_row(text)
    total = reconcile_total(
        explicit=total_row.total if total_row else 0,
        networks=networks,
        fallback=extract_total_sims(text),
    )
    return SimRecord(
        owner_info=extract_owner_info(text),
        total_numbers=total,
        networks=networks,
        numbers_list=extract_numbers_list(text),
    )


def _first(mapping: object, *keys: str) -> Any:
    if not isinstance(mapping, dict):
        return None
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def _network_from_json(item: object) -> NetworkUsage | None:
    name = _first(item, "network", "name", "operator")
    if not isinstance(name, str) or not name.strip():
        return None
    return NetworkUsage(
        network=name.strip(),
        voice_data=to_count(_first(item, "voiceData", "voice_data", "voice")),
        data_only=to_count(_first(item, "dataOnly", "data_only", "data")),
        total=to_count(_first(item, "total", "count")),
    )


def _number_from_json(item: object) -> SimNumber | None:
    raw = _first(item, "number", "mobile", "msisdn") if isinstance(item, dict) else item
    if raw is None or isinstance(raw, (dict, list, bool)):
        return None
    digits = _NON_DIGIT_RE.sub("", str(raw))
    if not digits:
        return None
    network = _first(item, "network", "operator")
    status = _first(item, "status")
    if not isinstance(network, str) or not network.strip() or network.strip().lower() == "unknown":
        network = network_for_number(digits)
    return SimNumber(
        number=digits,
        network=network.strip(),
        status=status.strip() if isinstance(status, str) and status.strip() else "Active",
    )


def _unwrap(payload: dict[str, Any], envelope_keys: Iterable[str]) -> dict[str, Any]:
    for key in envelope_keys:
        inner = payload.get(key)
        if isinstance(inner, dict):
            return inner
    return payload


def normalize_json(
    text: str,
    *,
    envelope_keys: Sequence[str] = ("data",),
    success_key: str = "success",
) -> SimRecord | Blocked:
    """Normaliza respuestas JSON tipo `{success, data: {owner_info, sim_details}}`.

    Acepta claves snake_case y camelCase, y el bloque `sim_details` tanto
    anidado como aplanado en el cuerpo.
    """

    reason = detect_block(text)
    if reason:
        return Blocked(reason=reason)

    try:
        payload = json.loads(text) if text else None
    except ValueError:
        logger.debug("Payload is not valid JSON (%d chars)", len(text))
        return SimRecord()
    if not isinstance(payload, dict) or payload.get(success_key) is False:
        return SimRecord()

    body = _unwrap(payload, envelope_keys)
    owner_raw = _first(body, "owner_info", "ownerInfo", "owner")
    owner = OwnerInfo(
        name=_first(owner_raw, "name", "owner_name", "ownerName"),
        father_name=_first(owner_raw, "father_name", "fatherName"),
        address=_first(owner_raw, "address"),
    )

    details = _first(body, "sim_details", "simDetails")
    if not isinstance(details, dict):
        details = body

    rows = [
        usage
        for usage in (_network_from_json(item) for item in _as_list(_first(details, "networks")))
        if usage is not None
    ]
    total_row = next((row for row in rows if row.is_total_row()), None)
    networks = [row for row in rows if not row.is_total_row() and not row.is_zero()]

    numbers: list[SimNumber] = []
    seen: set[str] = set()
    for item in _as_list(_first(details, "numbers_list", "numbersList", "numbers")):
        number = _number_from_json(item)
        if number is None or number.number in seen:
            continue
        seen.add(number.number)
        numbers.append(number)

    asserted = to_count(_first(details, "total_numbers", "totalNumbers"))
    explicit = asserted or (total_row.total if total_row else 0)
    total = reconcile_total(explicit=explicit, networks=networks, fallback=len(numbers))

    return SimRecord(
        owner_info=owner,
        total_numbers=total,
        networks=networks,
        numbers_list=numbers,
    )


def _as_list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []
