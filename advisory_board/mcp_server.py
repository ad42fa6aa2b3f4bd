"""MCP server over stdio, backed by the tool dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from advisory_board.config import ServerConfig
from advisory_board.dispatcher import ToolDispatcher
from advisory_board.registry import default_registry

logger = logging.getLogger(__name__)


class ToolCallError(RuntimeError):
    """Raised inside the SDK handler so the result is flagged isError."""


def list_tool_definitions(dispatcher: ToolDispatcher) -> list[Tool]:
    return [
        Tool(
            name=descriptor.name,
            description=descriptor.description,
            inputSchema=descriptor.input_schema(),
        )
        for descriptor in dispatcher.catalog()
    ]


def call_tool_content(
    dispatcher: ToolDispatcher, name: str, arguments: dict[str, Any] | None
) -> list[TextContent]:
    """Run one tool call and wrap the artifact as a single text block.

    Unknown advisors come back as ordinary text; validation failures raise.
    UnknownToolError propagates and the SDK reports it as an error result.
    """
    response = dispatcher.invoke(name, arguments or {})
    if response.error is not None and response.error.kind == "validation":
        raise ToolCallError(response.text)
    return [TextContent(type="text", text=response.text)]


def create_server(dispatcher: ToolDispatcher, config: ServerConfig | None = None) -> Server:
    config = config or ServerConfig()
    server = Server(config.name, version=config.version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return list_tool_definitions(dispatcher)

    # validate_arguments is the only validator: it normalizes advisor ids and resolves aliases.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        logger.info("tools/call %s", name)
        return call_tool_content(dispatcher, name, arguments)

    return server


async def serve_stdio(
    dispatcher: ToolDispatcher | None = None, config: ServerConfig | None = None
) -> None:
    server = create_server(dispatcher or ToolDispatcher(default_registry()), config)
    logger.info("Starting advisory board MCP server on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(dispatcher: ToolDispatcher | None = None, config: ServerConfig | None = None) -> None:
    asyncio.run(serve_stdio(dispatcher, config))
