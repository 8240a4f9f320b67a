"""Gateway: nodo simulado en memoria.

Se usa con `LN_QUERY_CONNECTION_TYPE=mock` para probar la CLI o el servidor
MCP sin un nodo real. Los datos son fijos y deterministas.
"""

from __future__ import annotations

from core.domain.models import Channel
from core.errors import AliasLookupError

MOCK_CHANNELS: tuple[dict[str, object], ...] = (
    {
        "remote_pubkey": "02" + "a1" * 32,
        "capacity": 2_000_000,
        "local_balance": 1_000_000,
        "remote_balance": 990_000,
        "active": True,
        "chan_id": "800000000000000001",
    },
    {
        "remote_pubkey": "03" + "b2" * 32,
        "capacity": 5_000_000,
        "local_balance": 4_700_000,
        "remote_balance": 290_000,
        "active": True,
        "chan_id": "800000000000000002",
    },
    {
        "remote_pubkey": "02" + "c3" * 32,
        "capacity": 1_000_000,
        "local_balance": 150_000,
        "remote_balance": 840_000,
        "active": False,
        "chan_id": "800000000000000003",
    },
)

MOCK_ALIASES: dict[str, str] = {
    "02" + "a1" * 32: "ACINQ-mock",
    "03" + "b2" * 32: "WalletOfSatoshi-mock",
    "02" + "c3" * 32: "bfx-lnd0-mock",
}


class MockGateway:
    def __init__(
        self,
        channels: list[dict[str, object]] | None = None,
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._channels = [dict(c) for c in (channels if channels is not None else MOCK_CHANNELS)]
        self._aliases = dict(aliases if aliases is not None else MOCK_ALIASES)

    async def list_channels(self) -> list[Channel]:
        return [Channel.model_validate(c) for c in self._channels]

    async def get_peer_alias(self, pubkey: str) -> str:
        alias = self._aliases.get(pubkey)
        if alias is None:
            raise AliasLookupError("node not found in graph")
        return alias

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "MockGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
