"""FastAPI transport: REST tool endpoints plus MCP JSON-RPC over HTTP and SSE."""

from __future__ import annotations

import json
import logging
import uuid
from collections import OrderedDict
from typing import Any, Iterator

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from pydantic import BaseModel, Field

from advisory_board.agent import AdvisoryBoardAgent, handshake_message
from advisory_board.config import ServerConfig, load_config
from advisory_board.dispatcher import ToolDispatcher
from advisory_board.registry import default_registry
from advisory_board.tools import UnknownToolError

logger = logging.getLogger(__name__)

SESSION_HEADER = "Mcp-Session-Id"
PARSE_ERROR = -32700
SSE_HEADERS = {"Cache-Control": "no-cache", "Connection": "keep-alive"}


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Server name")
    version: str = Field(..., description="Server version")


class ToolCallResult(BaseModel):
    ok: bool = Field(..., description="False when the board could not answer as asked")
    tool: str = Field(..., description="Tool that handled the call")
    text: str = Field(..., description="Rendered markdown artifact")
    error: dict[str, Any] | None = Field(None, description="Structured error, if any")


def _sse_event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def _read_jsonrpc(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": PARSE_ERROR, "message": "Parse error"},
            },
        ) from exc


def create_app(
    dispatcher: ToolDispatcher | None = None, config: ServerConfig | None = None
) -> FastAPI:
    dispatcher = dispatcher or ToolDispatcher(default_registry())
    config = config or load_config()

    app = FastAPI(title="Advisory Board", version=config.version)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", SESSION_HEADER],
        expose_headers=[SESSION_HEADER],
    )
    sessions: OrderedDict[str, AdvisoryBoardAgent] = OrderedDict()
    app.state.dispatcher = dispatcher
    app.state.sessions = sessions

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "MCP Advisory Board Server Running"

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", service=config.name, version=config.version)

    @app.get("/api/tools")
    def list_tools() -> dict[str, Any]:
        return {"tools": [descriptor.to_dict() for descriptor in dispatcher.catalog()]}

    @app.post("/api/tools/{name}", response_model=ToolCallResult, response_model_exclude_none=True)
    def call_tool(name: str, arguments: dict[str, Any] = Body(default={})) -> ToolCallResult:
        try:
            response = dispatcher.invoke(name, arguments)
        except UnknownToolError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

        if response.error is not None and response.error.kind == "validation":
            raise HTTPException(status_code=400, detail=response.error.to_dict())

        return ToolCallResult(
            ok=not response.is_error,
            tool=response.tool,
            text=response.text,
            error=response.error.to_dict() if response.error is not None else None,
        )

    @app.get("/sse")
    def sse_handshake() -> StreamingResponse:
        def stream() -> Iterator[str]:
            yield _sse_event(handshake_message(config))

        return StreamingResponse(stream(), media_type="text/event-stream", headers=SSE_HEADERS)

    @app.post("/sse")
    async def sse_message(request: Request) -> StreamingResponse:
        message = await _read_jsonrpc(request)
        reply = AdvisoryBoardAgent(dispatcher, config).handle(message)

        def stream() -> Iterator[str]:
            yield _sse_event(handshake_message(config))
            if reply is not None:
                yield _sse_event(reply)

        return StreamingResponse(stream(), media_type="text/event-stream", headers=SSE_HEADERS)

    @app.post("/mcp")
    async def mcp_message(request: Request) -> Response:
        message = await _read_jsonrpc(request)
        session_id = request.headers.get(SESSION_HEADER)

        agent = sessions.get(session_id) if session_id else None
        if session_id and agent is None:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")

        headers: dict[str, str] = {}
        if agent is None:
            agent = AdvisoryBoardAgent(dispatcher, config)
            if isinstance(message, dict) and message.get("method") == "initialize":
                session_id = uuid.uuid4().hex
                sessions[session_id] = agent
                headers[SESSION_HEADER] = session_id
                logger.info("Opened MCP session %s", session_id)
                while len(sessions) > config.max_sessions:
                    evicted, _ = sessions.popitem(last=False)
                    logger.info("Evicted MCP session %s", evicted)

        reply = agent.handle(message)
        if reply is None:
            return Response(status_code=202, headers=headers)
        return JSONResponse(reply, headers=headers)

    @app.delete("/mcp", status_code=204)
    def end_mcp_session(request: Request) -> Response:
        session_id = request.headers.get(SESSION_HEADER)
        if not session_id:
            raise HTTPException(status_code=400, detail=f"Missing {SESSION_HEADER} header")
        if sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
        logger.info("Closed MCP session %s", session_id)
        return Response(status_code=204)

    return app
