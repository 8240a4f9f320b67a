"""Intent types for natural-language channel queries.

Lives in the domain layer so the parser, the query handler and the outer
surfaces (CLI, MCP) share a single vocabulary without importing each other.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class IntentType(str, Enum):
    """Query categories understood by the pipeline."""

    CHANNEL_LIST = "channel_list"
    CHANNEL_HEALTH = "channel_health"
    CHANNEL_LIQUIDITY = "channel_liquidity"
    UNKNOWN = "unknown"

    @classmethod
    def known(cls) -> tuple["IntentType", ...]:
        """Types that have a dedicated response view."""

        return (cls.CHANNEL_LIST, cls.CHANNEL_HEALTH, cls.CHANNEL_LIQUIDITY)


class Intent(BaseModel):
    """A classified query.

    Immutable once produced: the parser builds one per request and nothing
    downstream edits it.
    """

    model_config = ConfigDict(frozen=True)

    type: IntentType = Field(
        ...,
        description="Categoría detectada para la consulta.",
    )
    query: str = Field(
        default="",
        description="Texto original tal y como llegó.",
    )
    parameters: dict[str, str] = Field(
        default_factory=dict,
        description="Parámetros extraídos del texto (p.ej. pubkey, channel_id).",
    )
