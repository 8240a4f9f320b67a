"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core al transporte del nodo (REST, mock, etc.).
- Normaliza los datos del nodo: LND REST devuelve enteros como strings y el
  modo lax de Pydantic los convierte.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Todos son valores por petición: se crean y se descartan dentro de una
  misma consulta.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

UNRESOLVED_ALIAS = "Unknown (Error retrieving)"
ALIAS_RETRIEVAL_FAILED = "alias_retrieval_failed"


class Channel(BaseModel):
    """Canal de pago tal y como lo reporta el nodo.

    `local_balance + remote_balance <= capacity` se asume (datos de confianza
    del nodo) pero no se valida aquí.
    """

    model_config = ConfigDict(extra="ignore")

    remote_pubkey: str = Field(
        ...,
        min_length=1,
        description="Clave pública del peer remoto.",
    )
    capacity: int = Field(
        default=0,
        ge=0,
        description="Capacidad total del canal (sats).",
    )
    local_balance: int = Field(
        default=0,
        ge=0,
        description="Saldo controlado por el nodo local (sats).",
    )
    remote_balance: int = Field(
        default=0,
        ge=0,
        description="Saldo controlado por el peer (sats).",
    )
    active: bool = Field(
        default=False,
        description="Si el canal está operativo en este momento.",
    )
    channel_point: str | None = Field(
        default=None,
        description="Outpoint de fondeo (txid:index) si el nodo lo reporta.",
    )
    chan_id: str | None = Field(
        default=None,
        description="Identificador numérico del canal si el nodo lo reporta.",
    )


class AliasError(BaseModel):
    """Anotación de fallo al resolver el alias de un peer."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(default=ALIAS_RETRIEVAL_FAILED)
    message: str = Field(default="")


class EnrichedChannel(Channel):
    """Canal + metadatos del peer.

    `error` solo está presente cuando falló la resolución del alias; el canal
    nunca se descarta por ello.
    """

    remote_alias: str = Field(
        default="Unknown",
        description="Alias público anunciado por el peer.",
    )
    error: AliasError | None = Field(
        default=None,
        description="Presente solo si la resolución del alias falló.",
    )

    @classmethod
    def from_channel(
        cls,
        channel: Channel,
        *,
        alias: str,
        error: AliasError | None = None,
    ) -> "EnrichedChannel":
        base = channel.model_dump(include=set(Channel.model_fields))
        return cls(**base, remote_alias=alias, error=error)

    @property
    def alias_resolved(self) -> bool:
        return self.error is None


class HealthCriteria(BaseModel):
    """Rango aceptable de ratio local (local_balance / capacity).

    Se configura una vez por `QueryHandler` y no cambia durante su vida.
    """

    model_config = ConfigDict(frozen=True)

    min_local_ratio: float = Field(default=0.1, ge=0.0, le=1.0)
    max_local_ratio: float = Field(default=0.9, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "HealthCriteria":
        if self.min_local_ratio >= self.max_local_ratio:
            raise ValueError("min_local_ratio must be lower than max_local_ratio")
        return self


class ChannelSummary(BaseModel):
    """Vista agregada del portfolio de canales (derivada, nunca persistida)."""

    total_capacity: int = 0
    total_local_balance: int = 0
    total_remote_balance: int = 0
    active_channels: int = 0
    inactive_channels: int = 0
    average_capacity: float = 0.0
    healthy_channels: int = 0
    unhealthy_channels: int = 0
    most_imbalanced_channel: EnrichedChannel | None = None

    @property
    def total_channels(self) -> int:
        return self.active_channels + self.inactive_channels


class ChannelQueryResult(BaseModel):
    """Canales enriquecidos + resumen: la entrada común de los formatters."""

    channels: list[EnrichedChannel] = Field(default_factory=list)
    summary: ChannelSummary = Field(default_factory=ChannelSummary)


class QueryError(BaseModel):
    """Error ya saneado, listo para cruzar el borde del Core."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1)
    message: str = Field(default="")


class QueryResult(BaseModel):
    """Resultado de una consulta: `Ok(data)` o `Err(error)` en un solo valor.

    Por qué un valor y no excepciones:
    - El handler siempre responde; los fallos viajan en `error` y la CLI o el
      servidor MCP deciden cómo presentarlos.
    """

    type: str = Field(..., min_length=1)
    text: str = Field(default="")
    data: ChannelQueryResult | dict[str, Any] = Field(default_factory=dict)
    error: QueryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_payload(self) -> dict[str, Any]:
        """JSON-friendly form (omits empty optional fields)."""

        return self.model_dump(mode="json", exclude_none=True)
