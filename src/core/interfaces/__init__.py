"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.event_log import EventLogger, NullEventLogger
from core.interfaces.gateway import NodeDataGateway

__all__ = [
    "EventLogger",
    "NodeDataGateway",
    "NullEventLogger",
]
