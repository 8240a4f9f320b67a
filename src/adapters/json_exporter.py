"""Exportación JSON de un resultado de consulta.

Por qué JSON:
- Interoperabilidad con otras herramientas y agentes.
- Permite guardar el estado de los canales sin depender del texto renderizado.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import QueryResult


def dump_query_result(result: QueryResult) -> str:
    """Serializa `QueryResult` con formato estable."""

    payload: dict[str, Any] = result.to_payload()
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_query_result_json(*, result: QueryResult, output_path: Path) -> Path:
    """Exporta `QueryResult` a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_query_result(result) + "\n", encoding="utf-8")
    return output_path
