"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Cada proveedor habla su propio esquema; aquí vive el único formato canónico
  (`SimRecord`) al que todos se normalizan.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Callable, Literal, Mapping, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

UNAVAILABLE = "Not Available"


class OwnerInfo(BaseModel):
    """Titular registrado. Los campos ausentes usan el centinela `UNAVAILABLE`."""

    name: str = Field(default=UNAVAILABLE, description="Nombre del titular.")
    father_name: str = Field(default=UNAVAILABLE, description="Nombre del padre.")
    address: str = Field(default=UNAVAILABLE, description="Dirección registrada.")

    @field_validator("name", "father_name", "address", mode="before")
    @classmethod
    def _never_blank(cls, value: object) -> str:
        if value is None:
            return UNAVAILABLE
        text = str(value).strip()
        return text or UNAVAILABLE


class NetworkUsage(BaseModel):
    """Contadores de un operador móvil tal como los reporta el proveedor.

    `total` no se deriva de los otros dos campos.
    """

    model_config = ConfigDict(populate_by_name=True)

    network: str = Field(..., min_length=1, description="Operador (Jazz, Zong, ...).")
    voice_data: int = Field(default=0, ge=0, alias="voiceData")
    data_only: int = Field(default=0, ge=0, alias="dataOnly")
    total: int = Field(default=0, ge=0)

    def is_total_row(self) -> bool:
        return self.network.strip().lower() == "total"

    def is_zero(self) -> bool:
        return self.voice_data == 0 and self.data_only == 0 and self.total == 0


class SimNumber(BaseModel):
    number: str = Field(..., min_length=1)
    network: str = Field(default="Unknown")
    status: str = Field(default="Active")


class SimRecord(BaseModel):
    """Resultado canónico, independiente del proveedor."""

    owner_info: OwnerInfo = Field(default_factory=OwnerInfo)
    total_numbers: int = Field(default=0, ge=0)
    networks: list[NetworkUsage] = Field(
        default_factory=list,
        description="Uso por operador; nunca incluye la fila sintética 'Total'.",
    )
    numbers_list: list[SimNumber] = Field(default_factory=list)

    @field_validator("networks")
    @classmethod
    def _drop_total_rows(cls, value: list[NetworkUsage]) -> list[NetworkUsage]:
        return [row for row in value if not row.is_total_row()]

    def summary(self) -> dict[str, int]:
        """Totales agregados con las claves del formato de respuesta."""

        return {
            "totalVoiceData": sum(n.voice_data for n in self.networks),
            "totalDataOnly": sum(n.data_only for n in self.networks),
            "overallTotal": self.total_numbers,
        }


class TransportStatus(str, Enum):
    OK = "ok"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    BLOCKED = "blocked"


class RawPayload(BaseModel):
    """Cuerpo de respuesta de un proveedor + estado de transporte."""

    provider: str
    text: str = ""
    status: TransportStatus = TransportStatus.OK
    status_code: int | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is TransportStatus.OK


class AttemptStatus(str, Enum):
    FOUND = "found"
    EMPTY = "empty"
    BLOCKED = "blocked"
    TRANSPORT_ERROR = "transport_error"
    ERROR = "error"


class ProviderAttempt(BaseModel):
    """Traza de un intento contra un proveedor (diagnóstico)."""

    provider: str
    status: AttemptStatus
    detail: str | None = None
    status_code: int | None = None


class Found(BaseModel):
    kind: Literal["found"] = "found"
    record: SimRecord
    provider: str
    attempts: list[ProviderAttempt] = Field(default_factory=list)


class Empty(BaseModel):
    kind: Literal["empty"] = "empty"
    record: SimRecord = Field(default_factory=SimRecord)
    attempts: list[ProviderAttempt] = Field(default_factory=list)


class Blocked(BaseModel):
    """Página anti-bot detectada.

    Los normalizadores lo devuelven sin `provider`; el orquestador lo completa.
    """

    kind: Literal["blocked"] = "blocked"
    reason: str
    provider: str | None = None
    attempts: list[ProviderAttempt] = Field(default_factory=list)


class AllProvidersFailed(BaseModel):
    kind: Literal["all_providers_failed"] = "all_providers_failed"
    attempts: list[ProviderAttempt] = Field(default_factory=list)


Outcome = Annotated[
    Union[Found, Empty, Blocked, AllProvidersFailed],
    Field(discriminator="kind"),
]

Normalizer = Callable[[str], Union[SimRecord, Blocked]]


class ProviderSpec(BaseModel):
    """Descriptor inmutable de una fuente externa.

    Por qué un modelo y no una clase por proveedor:
    - El orden de prioridad es simplemente el orden de una tupla de specs.
    - El cliente HTTP es genérico: método, campos y headers salen de aquí.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, max_length=64)
    label: str = Field(..., min_length=1)
    endpoint: str = Field(
        ...,
        min_length=8,
        description="URL; puede contener `{identifier}` para proveedores GET.",
    )
    method: Literal["GET", "POST"] = "GET"
    identifier_field: str | None = Field(
        default=None,
        description="Nombre del campo de formulario que lleva el identificador (POST).",
    )
    # Se guardan como MappingProxyType de solo lectura.
    form_fields: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    response_format: Literal["html", "json"] = "html"
    normalizer: Normalizer

    @field_validator("form_fields", "headers")
    @classmethod
    def _read_only(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def build_url(self, identifier: str) -> str:
        return self.endpoint.format(identifier=identifier)

    def build_form(self, identifier: str) -> dict[str, str]:
        if self.method != "POST" or not self.identifier_field:
            return {}
        return {self.identifier_field: identifier, **self.form_fields}
