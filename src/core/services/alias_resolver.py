"""Peer alias enrichment.

One lookup per distinct `remote_pubkey`, all launched together and joined
once every lookup has settled. A failed lookup only degrades the channels of
that peer; no channel is ever dropped.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Sequence

from core.domain.models import (
    ALIAS_RETRIEVAL_FAILED,
    UNRESOLVED_ALIAS,
    AliasError,
    Channel,
    EnrichedChannel,
)
from core.interfaces.event_log import EventLogger, NullEventLogger
from core.interfaces.gateway import NodeDataGateway
from core.sanitize import sanitize_error

_COMPONENT = "alias-resolver"


@dataclass(frozen=True)
class AliasLookup:
    """Settled outcome of a single alias lookup."""

    pubkey: str
    alias: str
    error: AliasError | None = None


def distinct_pubkeys(channels: Sequence[Channel]) -> list[str]:
    """Distinct peer keys in first-seen order."""

    seen: set[str] = set()
    out: list[str] = []
    for channel in channels:
        if channel.remote_pubkey in seen:
            continue
        seen.add(channel.remote_pubkey)
        out.append(channel.remote_pubkey)
    return out


def mark_unresolved(channels: Sequence[Channel], error: AliasError) -> list[EnrichedChannel]:
    return [
        EnrichedChannel.from_channel(channel, alias=UNRESOLVED_ALIAS, error=error)
        for channel in channels
    ]


class AliasResolver:
    def __init__(
        self,
        gateway: NodeDataGateway,
        logger: EventLogger | None = None,
    ) -> None:
        self._gateway = gateway
        self._logger = logger or NullEventLogger()

    async def _lookup(self, pubkey: str, request_id: str | None) -> AliasLookup:
        try:
            alias = await self._gateway.get_peer_alias(pubkey)
        except Exception as exc:
            sanitized = sanitize_error(exc)
            self._logger.log(
                logging.DEBUG,
                f"Could not fetch alias for node {pubkey[:8]}...",
                {"component": _COMPONENT, "request_id": request_id, "error": sanitized.message},
            )
            return AliasLookup(
                pubkey=pubkey,
                alias=UNRESOLVED_ALIAS,
                error=AliasError(kind=ALIAS_RETRIEVAL_FAILED, message=sanitized.message),
            )
        if not isinstance(alias, str) or not alias.strip():
            alias = "Unknown"
        return AliasLookup(pubkey=pubkey, alias=alias)

    async def resolve(
        self,
        channels: Sequence[Channel],
        *,
        request_id: str | None = None,
    ) -> list[EnrichedChannel]:
        if not channels:
            return []

        started = time.perf_counter()
        try:
            pubkeys = distinct_pubkeys(channels)
            self._logger.log(
                logging.DEBUG,
                "Fetching node aliases",
                {
                    "component": _COMPONENT,
                    "request_id": request_id,
                    "unique_node_count": len(pubkeys),
                    "total_channels": len(channels),
                },
            )

            # Sin límite de concurrencia: una tarea por peer distinto.
            lookups = await asyncio.gather(*(self._lookup(pk, request_id) for pk in pubkeys))
            by_pubkey = {lookup.pubkey: lookup for lookup in lookups}

            enriched = [
                EnrichedChannel.from_channel(
                    channel,
                    alias=by_pubkey[channel.remote_pubkey].alias,
                    error=by_pubkey[channel.remote_pubkey].error,
                )
                for channel in channels
            ]
        except Exception as exc:
            sanitized = sanitize_error(exc)
            self._logger.log(
                logging.ERROR,
                f"Error adding node aliases: {sanitized.message}",
                {
                    "component": _COMPONENT,
                    "request_id": request_id,
                    "duration_ms": int((time.perf_counter() - started) * 1000),
                    "error": sanitized.message,
                },
            )
            return mark_unresolved(
                channels,
                AliasError(kind=ALIAS_RETRIEVAL_FAILED, message=sanitized.message),
            )

        failed = sum(1 for lookup in lookups if lookup.error is not None)
        self._logger.log(
            logging.INFO,
            "Node alias retrieval completed",
            {
                "component": _COMPONENT,
                "request_id": request_id,
                "duration_ms": int((time.perf_counter() - started) * 1000),
                "unique_node_count": len(pubkeys),
                "failed_lookups": failed,
                "total_channels": len(channels),
            },
        )
        return enriched
