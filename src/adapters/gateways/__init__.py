"""Gateways hacia el nodo Lightning.

Por qué un paquete:
- Agrupa un módulo por transporte (LND REST, mock).
- Cada módulo implementa `core.interfaces.gateway.NodeDataGateway`.
"""

from __future__ import annotations

from adapters.gateways.lnd_rest import LndRestGateway
from adapters.gateways.mock import MockGateway
from core.config import AppSettings


def build_gateway(settings: AppSettings) -> LndRestGateway | MockGateway:
    """Elige el gateway según `connection_type`."""

    if settings.connection_type == "mock":
        return MockGateway()
    return LndRestGateway.from_settings(settings)


__all__ = [
    "LndRestGateway",
    "MockGateway",
    "build_gateway",
]
