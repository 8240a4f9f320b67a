"""Gateway: LND REST API.

- `GET /v1/channels` para el listado de canales.
- `GET /v1/graph/node/{pubkey}` para el alias del peer.

Autenticación con macaroon (header `Grpc-Metadata-macaroon`) y confianza TLS
en el `tls.cert` del nodo. Los errores de httpx se traducen a `GatewayError`
para que el Core los sanee.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import build_async_client, build_ssl_context, read_macaroon_hex
from core.config import AppSettings
from core.domain.models import Channel
from core.errors import (
    AliasLookupError,
    ChannelRetrievalError,
    GatewayError,
    NodeConfigurationError,
)


def lnd_error_message(response: httpx.Response) -> str:
    """Mensaje de error legible a partir de una respuesta de LND."""

    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase


def parse_channels(payload: Any) -> list[Channel]:
    if not isinstance(payload, dict):
        return []
    raw = payload.get("channels")
    if not isinstance(raw, list):
        return []
    return [Channel.model_validate(item) for item in raw if isinstance(item, dict)]


class LndRestGateway:
    """Acceso de solo lectura a LND vía REST."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "LndRestGateway":
        if settings.lnd_tls_cert_path is None or settings.lnd_macaroon_path is None:
            raise NodeConfigurationError(
                "Missing required LND configuration (tls cert path or macaroon path)"
            )
        context = build_ssl_context(settings.lnd_tls_cert_path)
        macaroon = read_macaroon_hex(settings.lnd_macaroon_path)
        client = build_async_client(
            settings,
            base_url=settings.lnd_rest_url,
            extra_headers={"Grpc-Metadata-macaroon": macaroon},
            verify=context,
        )
        return cls(client)

    async def _get(self, path: str, error_cls: type[GatewayError]) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise error_cls(
                f"HTTP {exc.response.status_code}: {lnd_error_message(exc.response)}"
            ) from exc
        except httpx.RequestError as exc:
            raise error_cls(f"Could not reach LND node: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise error_cls("LND returned a non-JSON response") from exc

    async def list_channels(self) -> list[Channel]:
        payload = await self._get("/v1/channels", ChannelRetrievalError)
        return parse_channels(payload)

    async def get_peer_alias(self, pubkey: str) -> str:
        payload = await self._get(f"/v1/graph/node/{pubkey}", AliasLookupError)
        node = payload.get("node") if isinstance(payload, dict) else None
        alias = node.get("alias") if isinstance(node, dict) else None
        return alias if isinstance(alias, str) else ""

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LndRestGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
