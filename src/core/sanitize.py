"""Error sanitization boundary.

Every error caught by the core goes through `sanitize_error` before it is
logged or returned. Messages coming from the transport can carry file paths
(TLS cert, macaroon), node URLs, macaroon hex and peer keys; none of those
should reach an agent or a terminal verbatim.
"""

from __future__ import annotations

import re
from typing import Any

from core.domain.models import QueryError

_REDACTED = "[REDACTED]"

# Orden importa: URLs antes que host:port y rutas.
_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"(?i)\b(macaroon|password|passwd|secret|token|api[_-]?key|pairing[_-]?phrase|rune)\b\s*[=:]\s*\S+"),
        r"\1=" + _REDACTED,
    ),
    (re.compile(r"(?i)\b[a-z][a-z0-9+.-]*://[^\s'\"<>]+"), "[URL]"),
    (re.compile(r"\b[0-9a-fA-F]{64,}\b"), "[HEX]"),
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}(?::\d{1,5})?\b"), "[HOST]"),
    (re.compile(r"(?i)\blocalhost:\d{1,5}\b"), "[HOST]"),
    (re.compile(r"[A-Za-z]:\\(?:[^\\\s'\"]+\\)*[^\\\s'\"]*"), "[PATH]"),
    (re.compile(r"(?<![\w.])(?:~|\.{1,2})?(?:/[^\s/'\":]+){2,}/?"), "[PATH]"),
)


def sanitize_message(message: str) -> str:
    """Strip paths, URLs, hosts, long hex identifiers and secrets from text."""

    if not message:
        return ""
    cleaned = message
    for pattern, replacement in _PATTERNS:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned.strip()


def _error_kind(error: BaseException) -> str:
    kind = getattr(error, "kind", None)
    if isinstance(kind, str) and kind:
        return kind
    return error.__class__.__name__


def sanitize_error(error: BaseException | str) -> QueryError:
    """Convert any caught error into a `QueryError` safe for callers."""

    if isinstance(error, str):
        return QueryError(kind="error", message=sanitize_message(error))

    message = sanitize_message(str(error))
    if not message:
        message = error.__class__.__name__
    return QueryError(kind=_error_kind(error), message=message)


_SECRET_FIELD_PARTS = ("macaroon", "password", "secret", "token", "key", "cert")


def sanitize_settings(values: dict[str, Any]) -> dict[str, Any]:
    """Mask secret-looking config values before logging them."""

    out: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            out[key] = None
        elif any(part in key.lower() for part in _SECRET_FIELD_PARTS):
            out[key] = _REDACTED
        else:
            out[key] = value
    return out
