"""Fuente SIM: SimDatabase.pk (API JSON).

GET `/api/sim-check/<cnic>`. El cuerpo útil puede venir bajo `result` o
`data`, o directamente en la raíz.
"""

from __future__ import annotations

from core.domain.models import Blocked, ProviderSpec, SimRecord
from core.extraction.normalizers import normalize_json


def normalize(text: str) -> SimRecord | Blocked:
    return normalize_json(text, envelope_keys=("result", "data"))


SPEC = ProviderSpec(
    name="simdatabase",
    label="SimDatabase.pk API",
    endpoint="https://simdatabase.pk/api/sim-check/{identifier}",
    method="GET",
    response_format="json",
    normalizer=normalize,
)
