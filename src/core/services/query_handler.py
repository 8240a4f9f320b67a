"""Channel query orchestration.

`QueryHandler.handle_query` runs one request end to end: fetch the node's
channels, enrich them with peer aliases, summarise, and render the view the
intent asks for. Every exit path returns a `QueryResult`; errors are
sanitized and carried as values, never raised to the caller.

Each call allocates its own working set. The only state shared between
concurrent calls is the immutable `HealthCriteria` given at construction.
"""

from __future__ import annotations

import contextlib
import logging
import secrets
import time
from typing import Any, Callable

from core.domain.intent import Intent, IntentType
from core.domain.models import (
    Channel,
    ChannelQueryResult,
    HealthCriteria,
    QueryResult,
)
from core.interfaces.event_log import EventLogger, NullEventLogger
from core.interfaces.gateway import NodeDataGateway
from core.sanitize import sanitize_error
from core.services.alias_resolver import AliasResolver
from core.services.formatter import ResponseFormatter
from core.services.intent_parser import IntentParser
from core.services.summary import summarize

UNKNOWN_QUERY_TEXT = (
    "I didn't understand that query. Try asking about your channel list, health, or liquidity."
)

_COMPONENT = "channel-handler"


def new_request_id() -> str:
    return f"req-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def coerce_channels(raw: Any) -> list[Channel]:
    """Normalise whatever the gateway returned into a list of `Channel`.

    No data or a non-list shape is an empty portfolio, not an error.
    """

    if not raw or not isinstance(raw, list):
        return []
    return [item if isinstance(item, Channel) else Channel.model_validate(item) for item in raw]


class QueryHandler:
    def __init__(
        self,
        gateway: NodeDataGateway,
        criteria: HealthCriteria | None = None,
        *,
        logger: EventLogger | None = None,
        resolver: AliasResolver | None = None,
        formatter: ResponseFormatter | None = None,
        parser: IntentParser | None = None,
        request_id_factory: Callable[[], str] = new_request_id,
    ) -> None:
        self._gateway = gateway
        self._criteria = criteria or HealthCriteria()
        self._logger = logger or NullEventLogger()
        self._resolver = resolver or AliasResolver(gateway, self._logger)
        self._formatter = formatter or ResponseFormatter(self._criteria)
        self._parser = parser or IntentParser()
        self._request_id_factory = request_id_factory

    @property
    def criteria(self) -> HealthCriteria:
        return self._criteria

    async def handle_text(self, text: str) -> QueryResult:
        """Parse free text and answer it."""

        return await self.handle_query(self._parser.parse(text))

    async def handle_query(self, intent: Intent) -> QueryResult:
        request_id = self._request_id_factory()
        started = time.perf_counter()
        intent_type = intent.type.value if isinstance(intent.type, IntentType) else str(intent.type)

        try:
            self._logger.log(
                logging.INFO,
                "Processing channel query",
                {
                    "component": _COMPONENT,
                    "request_id": request_id,
                    "intent_type": intent_type,
                    "query": intent.query,
                },
            )

            data = await self._get_channel_data(request_id)
            result = self._render(intent_type, data)

            self._logger.log(
                logging.INFO,
                "Channel query completed",
                {
                    "component": _COMPONENT,
                    "request_id": request_id,
                    "intent_type": intent_type,
                    "duration_ms": int((time.perf_counter() - started) * 1000),
                    "channel_count": len(data.channels),
                },
            )
            return result
        except Exception as exc:
            error = sanitize_error(exc)
            # Un sink de logs caído no puede convertir el error en excepción.
            with contextlib.suppress(Exception):
                self._logger.log(
                    logging.ERROR,
                    "Channel query failed",
                    {
                        "component": _COMPONENT,
                        "request_id": request_id,
                        "intent_type": intent_type,
                        "duration_ms": int((time.perf_counter() - started) * 1000),
                        "error": error.message,
                    },
                )
            return QueryResult(
                type="error",
                text=f"Error processing your query: {error.message}",
                data={},
                error=error,
            )

    async def _get_channel_data(self, request_id: str) -> ChannelQueryResult:
        self._logger.log(
            logging.DEBUG,
            "Fetching channel data from node",
            {"component": _COMPONENT, "request_id": request_id},
        )
        channels = coerce_channels(await self._gateway.list_channels())

        enriched = await self._resolver.resolve(channels, request_id=request_id) if channels else []
        self._logger.log(
            logging.INFO,
            "Channel enrichment completed",
            {
                "component": _COMPONENT,
                "request_id": request_id,
                "channel_count": len(enriched),
                "unresolved_aliases": sum(1 for c in enriched if c.error is not None),
            },
        )

        summary = summarize(enriched, self._criteria)
        self._logger.log(
            logging.DEBUG,
            "Channel health calculation",
            {
                "component": _COMPONENT,
                "request_id": request_id,
                "min_local_ratio": self._criteria.min_local_ratio,
                "max_local_ratio": self._criteria.max_local_ratio,
                "total_channels": len(enriched),
                "unhealthy_channels": summary.unhealthy_channels,
            },
        )
        return ChannelQueryResult(channels=enriched, summary=summary)

    def _render(self, intent_type: str, data: ChannelQueryResult) -> QueryResult:
        views: dict[str, Callable[[ChannelQueryResult], str]] = {
            IntentType.CHANNEL_LIST.value: self._formatter.format_channel_list,
            IntentType.CHANNEL_HEALTH.value: self._formatter.format_channel_health,
            IntentType.CHANNEL_LIQUIDITY.value: self._formatter.format_channel_liquidity,
        }
        view = views.get(intent_type)
        if view is None:
            return QueryResult(type=IntentType.UNKNOWN.value, text=UNKNOWN_QUERY_TEXT, data={})
        return QueryResult(type=intent_type, text=view(data), data=data)
