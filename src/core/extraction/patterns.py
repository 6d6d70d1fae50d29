"""Extractores por patrones sobre el texto crudo de los proveedores.

Funciones puras `(texto) -> fragmentos tipados`. Nunca lanzan: si un patrón no
aparece devuelven el centinela, 0 o una lista vacía.

Contrato numérico: cualquier captura ausente, vacía o no numérica vale 0
(`to_count`).
"""

from __future__ import annotations

import html
import math
import re
from typing import Iterator

from core.domain.models import UNAVAILABLE, NetworkUsage, OwnerInfo, SimNumber

OWNER_LABELS: dict[str, str] = {
    "name": "Owner Name",
    "father_name": "Father Name",
    "address": "Address",
}

# Prefijos móviles -> operador. Los de 4 dígitos se evalúan antes.
NETWORK_PREFIXES: dict[str, str] = {
    "0355": "SCOM",
    "030": "Jazz",
    "031": "Zong",
    "032": "Jazz",
    "033": "Ufone",
    "034": "Telenor",
}

# En texto plano (sin <tr>) solo se aceptan filas de operadores conocidos.
TEXT_ROW_NAMES: tuple[str, ...] = (
    "Jazz",
    "Mobilink",
    "Warid",
    "Zong",
    "Ufone",
    "Onic",
    "Telenor",
    "SCOM",
    "Total",
)

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_DIGIT_RE = re.compile(r"[0-9]")
_COUNT_RE = re.compile(r"[0-9][0-9,]*")

# Un contador real nunca pasa de 9 cifras; más allá es basura del proveedor.
_MAX_COUNT_DIGITS = 9
_MAX_COUNT = 10**_MAX_COUNT_DIGITS - 1

# Etiquetas en línea que pueden cerrar la etiqueta o abrir el valor.
_CLOSE_INLINE = r"</(?:b|strong|span|em|i|u|font|label)\s*>"
_OPEN_INLINE = r"<(?:b|strong|span|em|i|u|font)\b[^>]*>"
# Separador entre etiqueta y valor: ":" y/o salto de celda (</td><td>).
_CELL_BREAK = r"\s*</t[dh]>\s*<t[dh]\b[^>]*>"
_LABEL_DELIMITER = rf"(?::(?:[ \t]|{_CLOSE_INLINE})*(?:{_CELL_BREAK})?|(?:{_CLOSE_INLINE})*{_CELL_BREAK})"
# Hueco antes del valor: espacios de la misma línea y markup en línea, nunca un salto.
_INLINE_GAP = rf"(?:[ \t]|&nbsp;|&#160;|{_CLOSE_INLINE}|{_OPEN_INLINE})*"

_ROW_RE = re.compile(r"<tr\b[^>]*>(.*?)(?=<tr\b|</tr>|</table>|\Z)", re.IGNORECASE | re.DOTALL)
_CELL_SPLIT_RE = re.compile(r"<t[dh]\b[^>]*>", re.IGNORECASE)
_TEXT_ROW_RE = re.compile(
    r"^[\s|]*(?P<name>" + "|".join(TEXT_ROW_NAMES) + r")\b\s*[:|\t]\s*"
    r"(?P<voice>[^|/\t\n]*?)\s*[|/\t]\s*"
    r"(?P<data>[^|/\t\n]*?)\s*[|/\t]\s*"
    r"(?P<total>[^|/\t\n]*?)[\s|]*$",
    re.MULTILINE | re.IGNORECASE,
)
_TOTAL_SIMS_RE = re.compile(
    r"Total\s+SIMs?\b(?:[^0-9<]|<[^>]*>){0,80}?([0-9][0-9,]*)",
    re.IGNORECASE,
)
_PHONE_RE = re.compile(r"(?<![0-9])(03[0-9]{2})[- ]?([0-9]{7})(?![0-9])")
_NEXT_LABEL_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(label) for label in OWNER_LABELS.values()) + r"|CNIC)\b[^:]{0,20}?:",
    re.IGNORECASE,
)


def to_count(value: object) -> int:
    """Convierte una captura a entero >= 0; lo ausente o no numérico es 0.

    Solo se acepta un número completo ("12", "1,234"). Un texto con cifras
    sueltas ("3 SIMs", "0311-7654321") o de más de 9 cifras vale 0.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if 0 <= value <= _MAX_COUNT else 0
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and 0 <= value <= _MAX_COUNT else 0
    text = html.unescape(str(value)).strip()
    if _COUNT_RE.fullmatch(text) is None:
        return 0
    digits = text.replace(",", "")
    if len(digits) > _MAX_COUNT_DIGITS:
        return 0
    return int(digits)


def clean_text(fragment: str) -> str:
    """Quita markup y entidades y colapsa espacios."""

    text = _TAG_RE.sub(" ", fragment)
    text = html.unescape(text).replace("\xa0", " ")
    return _WS_RE.sub(" ", text).strip()


def extract_owner_field(text: str, label: str) -> str:
    """Valor tras `label` + delimitador, hasta el siguiente `<`, salto de línea u otra etiqueta."""

    if not text:
        return UNAVAILABLE
    pattern = re.compile(
        re.escape(label)
        + r"\b[^:<\n]{0,40}?"
        + _LABEL_DELIMITER
        + _INLINE_GAP
        + r"([^<\r\n]*)",
        re.IGNORECASE,
    )
    match = pattern.search(text)
    if match is None:
        return UNAVAILABLE
    value = clean_text(match.group(1))
    following = _NEXT_LABEL_RE.search(value)
    if following is not None:
        value = value[: following.start()]
    value = value.strip(" :-")
    return value or UNAVAILABLE


def extract_owner_info(text: str) -> OwnerInfo:
    return OwnerInfo(**{field: extract_owner_field(text, label) for field, label in OWNER_LABELS.items()})


def _iter_row_cells(text: str) -> Iterator[list[str]]:
    rows = _ROW_RE.findall(text)
    if rows:
        for row in rows:
            yield [clean_text(cell) for cell in _CELL_SPLIT_RE.split(row)[1:]]
        return
    for match in _TEXT_ROW_RE.finditer(text):
        yield [match.group("name"), match.group("voice"), match.group("data"), match.group("total")]


def _is_counter_cell(cell: str) -> bool:
    # Vacío o marcador ("-", "N/A") vale; cifras mezcladas con texto no.
    text = cell.strip()
    return _DIGIT_RE.search(text) is None or _COUNT_RE.fullmatch(text) is not None


def _row_to_usage(cells: list[str]) -> NetworkUsage | None:
    if len(cells) < 4:
        return None
    name = cells[0].strip().rstrip(":").strip()
    if not name or not name[0].isalpha() or len(name) > 40:
        return None
    # Filas de listados de números ("Zong | 0311-7654321 | Active | 2024") no son contadores.
    if any(_PHONE_RE.search(cell) for cell in cells):
        return None
    if not all(_is_counter_cell(cell) for cell in cells[1:4]):
        return None
    return NetworkUsage(
        network=name,
        voice_data=to_count(cells[1]),
        data_only=to_count(cells[2]),
        total=to_count(cells[3]),
    )

def _iter_usage_rows(text: str) -> Iterator[NetworkUsage]:
    if not text:
        return
    for cells in _iter_row_cells(text):
        usage = _row_to_usage(cells)
        if usage is not None:
            yield usage


def extract_network_rows(text: str) -> list[NetworkUsage]:
    """Filas `operador | voz | solo datos | total`, sin la fila 'Total'.

    Se descartan las filas con los tres valores a cero (incluye cabeceras).
    Si un operador aparece dos veces, gana la primera fila.
    """

    rows: list[NetworkUsage] = []
    seen: set[str] = set()
    for usage in _iter_usage_rows(text):
        if usage.is_total_row() or usage.is_zero():
            continue
        key = usage.network.lower()
        if key in seen:
            continue
        seen.add(key)
        rows.append(usage)
    return rows


def extract_total_row(text: str) -> NetworkUsage | None:
    """Fila explícita 'Total' con la misma forma que las filas de operador."""

    for usage in _iter_usage_rows(text):
        if usage.is_total_row():
            return usage
    return None


def extract_total_sims(text: str) -> int:
    """Cifra suelta del tipo 'Total SIMs: 4'."""

    if not text:
        return 0
    match = _TOTAL_SIMS_RE.search(text)
    return to_count(match.group(1)) if match else 0


def extract_phone_numbers(text: str) -> list[str]:
    """Números móviles (03XX + 7 dígitos), sin separador, sin duplicados y en orden."""

    if not text:
        return []
    seen: dict[str, None] = {}
    for prefix, rest in _PHONE_RE.findall(text):
        seen.setdefault(prefix + rest, None)
    return list(seen)


def network_for_number(number: str) -> str:
    for prefix in sorted(NETWORK_PREFIXES, key=len, reverse=True):
        if number.startswith(prefix):
            return NETWORK_PREFIXES[prefix]
    return "Unknown"


def extract_numbers_list(text: str) -> list[SimNumber]:
    return [
        SimNumber(number=number, network=network_for_number(number))
        for number in extract_phone_numbers(text)
    ]
