"""Contrato del gateway de datos del nodo.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el transporte (LND REST, mock, fakes de test) sea
  intercambiable sin acoplar el Core a una implementación concreta.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import Channel


@runtime_checkable
class NodeDataGateway(Protocol):
    """Acceso de solo lectura a un nodo Lightning.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque hacen I/O.
    - Cada llamada puede fallar por separado; el Core sanea el error.
    - `list_channels` puede devolver `Channel` o dicts con la misma forma.
    """

    async def list_channels(self) -> list[Channel] | list[dict[str, Any]] | None:
        """Devuelve los canales del nodo."""

        ...

    async def get_peer_alias(self, pubkey: str) -> str:
        """Resuelve el alias público de un peer por su clave pública."""

        ...
