from advisory_board.agent import AdvisoryBoardAgent, handshake_message
from advisory_board.config import ServerConfig
from advisory_board.dispatcher import ToolDispatcher
from advisory_board.registry import default_registry


def _agent() -> AdvisoryBoardAgent:
    return AdvisoryBoardAgent(ToolDispatcher(default_registry()), ServerConfig())


def test_handshake_message_is_static() -> None:
    message = handshake_message(ServerConfig())
    assert message == {
        "jsonrpc": "2.0",
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": {"name": "advisory-board", "version": "1.0.0"},
        },
    }


def test_initialize_then_initialized_notification() -> None:
    agent = _agent()
    reply = agent.handle(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {"protocolVersion": "2025-03-26", "clientInfo": {"name": "tester"}},
        }
    )
    assert reply["id"] == 1
    assert reply["result"]["protocolVersion"] == "2025-03-26"
    assert reply["result"]["serverInfo"]["name"] == "advisory-board"
    assert agent.client_info == {"name": "tester"}
    assert not agent.initialized

    assert agent.handle({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None
    assert agent.initialized


def test_initialize_with_unsupported_version_uses_default() -> None:
    reply = _agent().handle(
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "1999-01-01"}}
    )
    assert reply["result"]["protocolVersion"] == "2024-11-05"


def test_tools_list() -> None:
    reply = _agent().handle({"jsonrpc": "2.0", "id": "a", "method": "tools/list"})
    tools = reply["result"]["tools"]
    assert [tool["name"] for tool in tools][0] == "hold_board_meeting"
    assert all("inputSchema" in tool for tool in tools)


def test_tools_call_success() -> None:
    reply = _agent().handle(
        {
            "jsonrpc": "2.0",
            "id": 7,
            "method": "tools/call",
            "params": {"name": "get_advisor_info", "arguments": {"advisor": "tim_cook"}},
        }
    )
    result = reply["result"]
    assert result["isError"] is False
    assert len(result["content"]) == 1
    assert result["content"][0]["type"] == "text"
    assert result["content"][0]["text"].startswith("**Tim Cook**")


def test_tools_call_validation_error_is_flagged() -> None:
    reply = _agent().handle(
        {
            "jsonrpc": "2.0",
            "id": 8,
            "method": "tools/call",
            "params": {"name": "hold_board_meeting", "arguments": {"background": "b", "advisors": ["tim_cook"]}},
        }
    )
    assert reply["result"]["isError"] is True
    assert "topic" in reply["result"]["content"][0]["text"]


def test_tools_call_unknown_tool_is_invalid_params() -> None:
    reply = _agent().handle(
        {"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": {"name": "nope"}}
    )
    assert reply["error"]["code"] == -32602
    assert "nope" in reply["error"]["message"]


def test_unknown_method() -> None:
    reply = _agent().handle({"jsonrpc": "2.0", "id": 2, "method": "sampling/createMessage"})
    assert reply["error"]["code"] == -32601


def test_invalid_request() -> None:
    assert _agent().handle(["not", "an", "object"])["error"]["code"] == -32600
    assert _agent().handle({"jsonrpc": "2.0", "id": 3})["error"]["code"] == -32600


def test_ping_resources_and_prompts() -> None:
    agent = _agent()
    assert agent.handle({"jsonrpc": "2.0", "id": 1, "method": "ping"})["result"] == {}
    assert agent.handle({"jsonrpc": "2.0", "id": 2, "method": "resources/list"})["result"] == {"resources": []}
    assert agent.handle({"jsonrpc": "2.0", "id": 3, "method": "prompts/list"})["result"] == {"prompts": []}


def test_notifications_never_reply() -> None:
    assert _agent().handle({"jsonrpc": "2.0", "method": "tools/list"}) is None
