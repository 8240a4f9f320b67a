"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (gateway REST, servidor MCP) lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import HealthCriteria


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ln-channel-query"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ln-channel-query"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ln-channel-query"
    return Path.home() / ".config" / "ln-channel-query"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ln-channel-query user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="LN_QUERY_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    connection_type: Literal["lnd-rest", "mock"] = Field(
        default="lnd-rest",
        description="Transporte hacia el nodo: LND REST o un nodo simulado.",
    )
    lnd_host: str = Field(
        default="localhost",
        min_length=1,
        description="Host del REST de LND.",
    )
    lnd_rest_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Puerto del REST de LND.",
    )
    lnd_tls_cert_path: Path | None = Field(
        default=None,
        description="Ruta al tls.cert del nodo.",
    )
    lnd_macaroon_path: Path | None = Field(
        default=None,
        description="Ruta al macaroon (readonly basta).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default="ln-channel-query/0.1",
        min_length=1,
        description="User-Agent para peticiones al nodo.",
    )

    min_local_ratio: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Ratio local mínimo para considerar un canal sano.",
    )
    max_local_ratio: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Ratio local máximo para considerar un canal sano.",
    )

    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )

    @model_validator(mode="after")
    def _check_ratios(self) -> "AppSettings":
        if self.min_local_ratio >= self.max_local_ratio:
            raise ValueError("min_local_ratio must be lower than max_local_ratio")
        return self

    @property
    def lnd_rest_url(self) -> str:
        return f"https://{self.lnd_host}:{self.lnd_rest_port}"

    def health_criteria(self) -> HealthCriteria:
        return HealthCriteria(
            min_local_ratio=self.min_local_ratio,
            max_local_ratio=self.max_local_ratio,
        )
