"""Stateful MCP JSON-RPC session over the tool dispatcher."""

from __future__ import annotations

import logging
from typing import Any

from advisory_board.config import SUPPORTED_PROTOCOL_VERSIONS, ServerConfig
from advisory_board.dispatcher import ToolDispatcher
from advisory_board.tools import UnknownToolError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def server_capabilities() -> dict[str, Any]:
    return {"tools": {}, "resources": {}, "prompts": {}}


def initialize_result(config: ServerConfig, protocol_version: str | None = None) -> dict[str, Any]:
    return {
        "protocolVersion": protocol_version or config.protocol_version,
        "capabilities": server_capabilities(),
        "serverInfo": {"name": config.name, "version": config.version},
    }


def handshake_message(config: ServerConfig) -> dict[str, Any]:
    """The static initialize payload pushed when an event stream opens."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": "initialize",
        "params": initialize_result(config),
    }


def _result(message_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": message_id, "result": result}


def _error(message_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": message_id,
        "error": {"code": code, "message": message},
    }


class AdvisoryBoardAgent:
    """One MCP connection: handshake state plus request routing.

    Holds no conversation history; every tool call is answered from its own
    arguments alone.
    """

    def __init__(self, dispatcher: ToolDispatcher, config: ServerConfig | None = None):
        self.dispatcher = dispatcher
        self.config = config or ServerConfig()
        self.initialized = False
        self.client_info: dict[str, Any] | None = None
        self.protocol_version: str | None = None

    def handle(self, message: Any) -> dict[str, Any] | None:
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            message_id = message.get("id") if isinstance(message, dict) else None
            return _error(message_id, INVALID_REQUEST, "Invalid JSON-RPC request")

        method = message["method"]
        is_notification = "id" not in message
        message_id = message.get("id")
        params = message.get("params") or {}

        if is_notification:
            self._handle_notification(method)
            return None

        if not isinstance(params, dict):
            return _error(message_id, INVALID_PARAMS, "params must be an object")

        if method == "initialize":
            return _result(message_id, self._initialize(params))
        if method == "ping":
            return _result(message_id, {})
        if method == "tools/list":
            return _result(
                message_id,
                {"tools": [descriptor.to_dict() for descriptor in self.dispatcher.catalog()]},
            )
        if method == "tools/call":
            return self._call_tool(message_id, params)
        if method == "resources/list":
            return _result(message_id, {"resources": []})
        if method == "prompts/list":
            return _result(message_id, {"prompts": []})

        logger.info("Unsupported JSON-RPC method: %s", method)
        return _error(message_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _handle_notification(self, method: str) -> None:
        if method == "notifications/initialized":
            self.initialized = True
            logger.info("Session initialized for client %s", self.client_info)
        else:
            logger.debug("Ignoring notification %s", method)

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        requested = params.get("protocolVersion")
        if requested in SUPPORTED_PROTOCOL_VERSIONS:
            self.protocol_version = requested
        else:
            self.protocol_version = self.config.protocol_version
        client_info = params.get("clientInfo")
        self.client_info = client_info if isinstance(client_info, dict) else None
        return initialize_result(self.config, self.protocol_version)

    def _call_tool(self, message_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            return _error(message_id, INVALID_PARAMS, "tools/call requires a tool name")
        arguments = params.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            return _error(message_id, INVALID_PARAMS, "arguments must be an object")
        if not self.initialized:
            logger.debug("tools/call before notifications/initialized")

        try:
            response = self.dispatcher.invoke(name, arguments)
        except UnknownToolError as exc:
            return _error(message_id, INVALID_PARAMS, str(exc))

        return _result(
            message_id,
            {
                "content": [{"type": "text", "text": response.text}],
                "isError": response.is_error,
            },
        )
