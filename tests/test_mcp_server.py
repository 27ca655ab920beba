import asyncio

import pytest
from fastmcp.exceptions import ToolError

from core.catalog import get_operation, list_operations
from core.dispatcher import Dispatcher
from tools.mcp_server import OperationTool, build_server


def test_tool_advertises_descriptor_schema(client):
    descriptor = get_operation("get_prompt")

    tool = OperationTool.from_descriptor(descriptor, Dispatcher(client))

    assert tool.name == "get_prompt"
    assert tool.description == descriptor.description
    assert tool.parameters == descriptor.input_schema()


def test_tool_returns_dispatcher_text(client, backend):
    backend.respond("DELETE", "/v1/prompts/p1", status=204)
    tool = OperationTool.from_descriptor(get_operation("delete_prompt"), Dispatcher(client))

    result = asyncio.run(tool.run({"promptId": "p1"}))

    assert [block.text for block in result.content] == ["✓ Deleted prompt p1"]


def test_tool_raises_tool_error_on_failure(client, backend):
    backend.respond("GET", "/v1/prompts/p1", {}, status=404)
    tool = OperationTool.from_descriptor(get_operation("get_prompt"), Dispatcher(client))

    with pytest.raises(ToolError) as exc_info:
        asyncio.run(tool.run({"promptId": "p1"}))

    assert str(exc_info.value) == "Error: Resource not found. Check that the ID is correct."


def test_server_registers_every_operation(settings, backend):
    server = build_server(settings, transport=backend.transport())

    tools = asyncio.run(server.get_tools())

    assert set(tools) == {op.name for op in list_operations()}
    assert backend.requests == []
