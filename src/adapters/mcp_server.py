"""MCP server exposing the channel query pipeline to an agent.

Single tool, `query_channels`: free text in, rendered text plus the
structured `QueryResult` out. Runs over stdio; logs must stay on stderr.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from adapters.gateways import build_gateway
from adapters.logging_sink import StdlibEventLogger
from core.config import AppSettings
from core.sanitize import sanitize_error
from core.services.query_handler import QueryHandler

SERVER_NAME = "ln-channel-query"
QUERY_TOOL = "query_channels"

logger = logging.getLogger("ln_channel_query.mcp")

QUERY_TOOL_SPEC = Tool(
    name=QUERY_TOOL,
    description=(
        "Answer a natural-language question about the node's payment channels: "
        "list channels, check channel health, or summarise liquidity. Read-only."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Question, e.g. 'show my channel liquidity'.",
            }
        },
        "required": ["query"],
    },
)


async def dispatch_tool(handler: QueryHandler, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """Run one tool call and return a JSON-serialisable payload."""

    if name != QUERY_TOOL:
        return {"type": "error", "text": f"Unknown tool: {name}"}

    query = (arguments or {}).get("query")
    if not isinstance(query, str) or not query.strip():
        return {"type": "error", "text": "The 'query' argument is required."}

    result = await handler.handle_text(query)
    return result.to_payload()


def build_server(handler: QueryHandler) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [QUERY_TOOL_SPEC]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        try:
            payload = await dispatch_tool(handler, name, arguments)
        except Exception as exc:
            error = sanitize_error(exc)
            logger.error("Error in tool %s: %s", name, error.message)
            payload = {"type": "error", "text": error.message}
        return [TextContent(type="text", text=json.dumps(payload, indent=2))]

    return server


async def serve(settings: AppSettings) -> None:
    """Run the MCP server over stdio until the client disconnects."""

    async with build_gateway(settings) as gateway:
        handler = QueryHandler(
            gateway,
            settings.health_criteria(),
            logger=StdlibEventLogger(),
        )
        server = build_server(handler)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
