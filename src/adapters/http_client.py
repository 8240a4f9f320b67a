"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y confianza TLS para hablar con el nodo.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import ssl
from pathlib import Path

import httpx

from core.config import AppSettings
from core.errors import NodeConfigurationError


def build_ssl_context(cert_path: Path) -> ssl.SSLContext:
    """Contexto TLS que confía en el certificado autofirmado del nodo.

    LND genera su propio `tls.cert`; no hay CA pública detrás.
    """

    if not cert_path.exists():
        raise NodeConfigurationError(f"TLS certificate file not found at: {cert_path}")
    context = ssl.create_default_context(cafile=str(cert_path))
    # El cert de LND suele emitirse para localhost/IPs internas.
    context.check_hostname = False
    return context


def read_macaroon_hex(macaroon_path: Path) -> str:
    if not macaroon_path.exists():
        raise NodeConfigurationError(f"Macaroon file not found at: {macaroon_path}")
    return macaroon_path.read_bytes().hex()


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str = "",
    extra_headers: dict[str, str] | None = None,
    verify: ssl.SSLContext | bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `http_timeout_seconds=None` desactiva el timeout (sin límite de espera).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        verify=verify,
        transport=transport,
    )
