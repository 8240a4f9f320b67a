"""Excepciones del Core y de los gateways.

Por qué una jerarquía propia:
- Los adaptadores traducen errores de transporte (httpx, ssl, ficheros) a
  tipos del dominio; el Core solo los captura en sus bordes documentados.
- `kind` da un identificador estable para el `QueryError` saneado.
"""

from __future__ import annotations


class ChannelQueryError(Exception):
    """Base de todos los errores del pipeline de consultas."""

    kind = "channel_query_error"


class NodeConfigurationError(ChannelQueryError):
    """Falta o es inválida la configuración de conexión al nodo."""

    kind = "node_configuration_error"


class GatewayError(ChannelQueryError):
    """Fallo de transporte o respuesta no válida del nodo."""

    kind = "gateway_error"


class ChannelRetrievalError(GatewayError):
    """No se pudo obtener el listado de canales."""

    kind = "channel_retrieval_failed"


class AliasLookupError(GatewayError):
    """No se pudo resolver el alias de un peer."""

    kind = "alias_retrieval_failed"
