"""Fuente SIM: PakSimInfo (API JSON).

GET `/api/check/<cnic>`; responde `{success, data: {...}}`.
"""

from __future__ import annotations

from core.domain.models import Blocked, ProviderSpec, SimRecord
from core.extraction.normalizers import normalize_json


def normalize(text: str) -> SimRecord | Blocked:
    return normalize_json(text, envelope_keys=("data",))


SPEC = ProviderSpec(
    name="paksiminfo",
    label="PakSimInfo API",
    endpoint="https://paksiminfo.com/api/check/{identifier}",
    method="GET",
    response_format="json",
    normalizer=normalize,
)
