"""Text views over a `ChannelQueryResult`.

One renderer per known intent type. Renderers are deterministic and never
mutate their input; unknown intents never reach this module.
"""

from __future__ import annotations

from core.domain.models import ChannelQueryResult, EnrichedChannel, HealthCriteria
from core.services.summary import local_ratio, unhealthy_reason

NO_CHANNELS_TEXT = "Your node has no channels."

_REASON_LABELS = {
    "inactive": "inactive",
    "low_local_balance": "local balance below {min:.0%} of capacity",
    "high_local_balance": "local balance above {max:.0%} of capacity",
}


def format_sats(amount: int | float) -> str:
    return f"{int(round(amount)):,} sats"


def format_ratio(ratio: float | None) -> str:
    if ratio is None:
        return "n/a"
    return f"{ratio:.0%}"


def channel_label(channel: EnrichedChannel) -> str:
    label = f"{channel.remote_alias} ({channel.remote_pubkey[:10]}...)"
    if channel.error is not None:
        label += " [alias unavailable]"
    return label


class ResponseFormatter:
    def __init__(self, criteria: HealthCriteria | None = None) -> None:
        self._criteria = criteria or HealthCriteria()

    @property
    def criteria(self) -> HealthCriteria:
        return self._criteria

    def format_channel_list(self, result: ChannelQueryResult) -> str:
        channels = result.channels
        summary = result.summary
        if not channels:
            return NO_CHANNELS_TEXT

        lines = [
            f"You have {len(channels)} channel{'s' if len(channels) != 1 else ''} "
            f"({summary.active_channels} active, {summary.inactive_channels} inactive) "
            f"with a total capacity of {format_sats(summary.total_capacity)}.",
            "",
        ]
        for index, channel in enumerate(channels, start=1):
            status = "active" if channel.active else "inactive"
            lines.append(
                f"{index}. {channel_label(channel)}: {format_sats(channel.capacity)} capacity, "
                f"{format_sats(channel.local_balance)} local, "
                f"{format_sats(channel.remote_balance)} remote, {status}"
            )
        return "\n".join(lines)

    def format_channel_health(self, result: ChannelQueryResult) -> str:
        channels = result.channels
        summary = result.summary
        if not channels:
            return NO_CHANNELS_TEXT

        lines = [
            "Channel health summary:",
            f"- {summary.active_channels} active, {summary.inactive_channels} inactive",
            f"- {summary.healthy_channels} healthy, {summary.unhealthy_channels} unhealthy "
            f"(healthy local balance range: {format_ratio(self._criteria.min_local_ratio)}"
            f" to {format_ratio(self._criteria.max_local_ratio)})",
        ]

        flagged: list[tuple[EnrichedChannel, str]] = []
        for channel in channels:
            reason = unhealthy_reason(channel, self._criteria)
            if reason is not None:
                flagged.append((channel, reason))
        if not flagged:
            lines.append("")
            lines.append("All channels are healthy.")
            return "\n".join(lines)

        lines.append("")
        lines.append("Channels needing attention:")
        for channel, reason in flagged:
            label = _REASON_LABELS[reason].format(
                min=self._criteria.min_local_ratio,
                max=self._criteria.max_local_ratio,
            )
            lines.append(
                f"- {channel_label(channel)}: {label} "
                f"(local share {format_ratio(local_ratio(channel))})"
            )
        return "\n".join(lines)

    def format_channel_liquidity(self, result: ChannelQueryResult) -> str:
        channels = result.channels
        summary = result.summary
        if not channels:
            return NO_CHANNELS_TEXT

        local_share = (
            summary.total_local_balance / summary.total_capacity
            if summary.total_capacity > 0
            else None
        )
        lines = [
            "Channel liquidity summary:",
            f"- Total capacity: {format_sats(summary.total_capacity)}",
            f"- Outbound (local) liquidity: {format_sats(summary.total_local_balance)}"
            f" ({format_ratio(local_share)})",
            f"- Inbound (remote) liquidity: {format_sats(summary.total_remote_balance)}",
            f"- Average channel capacity: {format_sats(summary.average_capacity)}",
        ]

        most = summary.most_imbalanced_channel
        if most is None:
            lines.append("")
            lines.append("All channels are evenly balanced.")
        else:
            lines.append("")
            lines.append(
                f"Most imbalanced channel: {channel_label(most)} with "
                f"{format_sats(most.local_balance)} local of {format_sats(most.capacity)} "
                f"(local share {format_ratio(local_ratio(most))})."
            )
        return "\n".join(lines)
