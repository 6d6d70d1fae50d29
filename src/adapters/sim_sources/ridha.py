"""Fuente SIM: RIDHA SIM Tracker.

- Formulario POST (`cnic` + `submit=Check`) contra `result.php`.
- Respuesta HTML: etiquetas "Owner Name: ..." y una tabla por operador.
"""

from __future__ import annotations

from core.domain.models import Blocked, ProviderSpec, SimRecord
from core.extraction.normalizers import normalize_html

_BASE_URL = "https://ridhasimtracker.com"


def normalize(text: str) -> SimRecord | Blocked:
    return normalize_html(text)


SPEC = ProviderSpec(
    name="ridha",
    label="RIDHA SIM Tracker",
    endpoint=f"{_BASE_URL}/result.php",
    method="POST",
    identifier_field="cnic",
    form_fields={"submit": "Check"},
    headers={"Referer": f"{_BASE_URL}/", "Origin": _BASE_URL},
    response_format="html",
    normalizer=normalize,
)
