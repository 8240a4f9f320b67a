"""Derived portfolio statistics.

Pure functions over enriched channels: totals, activity split, health split
and the most imbalanced channel. Recomputed on every query.
"""

from __future__ import annotations

from typing import Sequence

from core.domain.models import Channel, ChannelSummary, EnrichedChannel, HealthCriteria


def local_ratio(channel: Channel) -> float | None:
    """`local_balance / capacity`, or None when capacity is zero."""

    if channel.capacity <= 0:
        return None
    return channel.local_balance / channel.capacity


def imbalance_ratio(channel: Channel) -> float | None:
    """Distance of the local share from the 0.5 midpoint."""

    ratio = local_ratio(channel)
    if ratio is None:
        return None
    return abs(0.5 - ratio)


def unhealthy_reason(channel: Channel, criteria: HealthCriteria) -> str | None:
    """Why a channel is unhealthy, or None when it is healthy."""

    if not channel.active:
        return "inactive"
    ratio = local_ratio(channel)
    if ratio is None:
        # Capacidad cero: saldo local positivo cuenta como ratio infinito.
        return "high_local_balance" if channel.local_balance > 0 else None
    if ratio < criteria.min_local_ratio:
        return "low_local_balance"
    if ratio > criteria.max_local_ratio:
        return "high_local_balance"
    return None


def is_channel_healthy(channel: Channel, criteria: HealthCriteria) -> bool:
    return unhealthy_reason(channel, criteria) is None


def find_most_imbalanced(channels: Sequence[EnrichedChannel]) -> EnrichedChannel | None:
    # Empate: se queda el primero; un canal perfectamente equilibrado (0.0) nunca gana.
    best: EnrichedChannel | None = None
    highest = 0.0
    for channel in channels:
        ratio = imbalance_ratio(channel)
        if ratio is None:
            continue
        if ratio > highest:
            highest = ratio
            best = channel
    return best


def summarize(
    channels: Sequence[EnrichedChannel],
    criteria: HealthCriteria | None = None,
) -> ChannelSummary:
    criteria = criteria or HealthCriteria()
    if not channels:
        return ChannelSummary()

    active = sum(1 for c in channels if c.active)
    total_capacity = sum(c.capacity for c in channels)
    unhealthy = sum(1 for c in channels if not is_channel_healthy(c, criteria))

    return ChannelSummary(
        total_capacity=total_capacity,
        total_local_balance=sum(c.local_balance for c in channels),
        total_remote_balance=sum(c.remote_balance for c in channels),
        active_channels=active,
        inactive_channels=len(channels) - active,
        average_capacity=total_capacity / len(channels),
        healthy_channels=len(channels) - unhealthy,
        unhealthy_channels=unhealthy,
        most_imbalanced_channel=find_most_imbalanced(channels),
    )
