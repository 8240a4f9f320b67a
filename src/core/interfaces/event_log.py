"""Structured event logging contract.

The core emits events as `(level, message, fields)`; formatting and
transport belong to the adapter that implements this protocol.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class EventLogger(Protocol):
    def log(self, level: int, message: str, fields: Mapping[str, Any]) -> None:
        ...


class NullEventLogger:
    """Discards every event."""

    def log(self, level: int, message: str, fields: Mapping[str, Any]) -> None:
        return None
