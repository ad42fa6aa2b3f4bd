import asyncio
from typing import Any

import pytest
from mcp.server import Server
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import CallToolResult

from advisory_board.config import ServerConfig
from advisory_board.dispatcher import ToolDispatcher
from advisory_board.mcp_server import (
    ToolCallError,
    call_tool_content,
    create_server,
    list_tool_definitions,
)
from advisory_board.registry import default_registry
from advisory_board.tools import UnknownToolError


@pytest.fixture
def dispatcher() -> ToolDispatcher:
    return ToolDispatcher(default_registry())


def test_tool_definitions_mirror_catalog(dispatcher: ToolDispatcher) -> None:
    tools = list_tool_definitions(dispatcher)
    assert [tool.name for tool in tools] == [d.name for d in dispatcher.catalog()]
    meeting = tools[0]
    assert meeting.inputSchema["required"] == ["topic", "background", "advisors"]


def test_call_returns_single_text_block(dispatcher: ToolDispatcher) -> None:
    content = call_tool_content(dispatcher, "list_advisors", None)
    assert len(content) == 1
    assert content[0].type == "text"
    assert "Charlie Munger" in content[0].text


def test_unknown_advisor_is_plain_text(dispatcher: ToolDispatcher) -> None:
    content = call_tool_content(dispatcher, "get_advisor_info", {"advisor": "nobody"})
    assert 'Advisor "NOBODY" is not on your board.' in content[0].text


def test_validation_error_raises(dispatcher: ToolDispatcher) -> None:
    with pytest.raises(ToolCallError, match="crisis_description"):
        call_tool_content(dispatcher, "crisis_response", {"immediate_concerns": "x"})


def test_unknown_tool_raises(dispatcher: ToolDispatcher) -> None:
    with pytest.raises(UnknownToolError):
        call_tool_content(dispatcher, "nope", {})


def test_create_server(dispatcher: ToolDispatcher) -> None:
    server = create_server(dispatcher, ServerConfig(name="board-test"))
    assert isinstance(server, Server)
    assert server.name == "board-test"


def _call_through_session(
    dispatcher: ToolDispatcher, name: str, arguments: dict[str, Any]
) -> CallToolResult:
    async def run() -> CallToolResult:
        server = create_server(dispatcher)
        async with create_connected_server_and_client_session(server) as session:
            return await session.call_tool(name, arguments)

    return asyncio.run(run())


def test_session_accepts_display_name_advisors(dispatcher: ToolDispatcher) -> None:
    result = _call_through_session(
        dispatcher,
        "hold_board_meeting",
        {"topic": "t", "background": "b", "advisors": ["Tim Cook", "warren-buffett"]},
    )
    assert result.isError is False
    text = result.content[0].text
    assert text.index("### Tim Cook") < text.index("### Warren Buffett")


def test_session_accepts_context_alias(dispatcher: ToolDispatcher) -> None:
    result = _call_through_session(
        dispatcher,
        "hold_board_meeting",
        {"topic": "t", "context": "from context", "advisors": ["tim_cook"]},
    )
    assert result.isError is False
    assert "**Background:** from context" in result.content[0].text


def test_session_reports_validation_errors_from_dispatcher(dispatcher: ToolDispatcher) -> None:
    result = _call_through_session(
        dispatcher, "hold_board_meeting", {"background": "b", "advisors": ["tim_cook"]}
    )
    assert result.isError is True
    assert result.content[0].text.startswith("Invalid arguments for hold_board_meeting:")
    assert "topic" in result.content[0].text
