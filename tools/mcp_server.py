# =============================================================================
# tools/mcp_server.py  —  FastMCP Server (the message-channel binding)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the core/ adapter over MCP.  Nothing here knows about HTTP
#   status codes or response shapes; it only wires:
#
#     tools/list      → core.catalog.list_operations()
#     tools/call      → core.dispatcher.Dispatcher.invoke()
#     resources/list  → core.resources.ResourceProvider.list_resources()
#     resources/read  → core.resources.ResourceProvider.read_resource()
#
# HOW TOOLS ARE REGISTERED:
#   The catalog is data (OperationDescriptor), not decorated functions, so
#   each entry becomes an OperationTool: a FastMCP Tool whose `parameters`
#   is the descriptor's JSON Schema and whose run() hands the raw arguments
#   to the dispatcher.
#
#   An error ToolResult is raised as ToolError so the client receives
#   isError=true with the same "Error: <message>" text.
#
# LOGGING:
#   Everything goes to STDERR.  STDOUT is the MCP transport; a stray print
#   there corrupts the JSON-RPC stream.
# =============================================================================

import logging
import sys
from typing import Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent as MCPTextContent
from pydantic import Field

from core.api_client import ApiClient
from core.catalog import list_operations
from core.config import SERVER_NAME, Settings
from core.dispatcher import Dispatcher
from core.models import OperationDescriptor
from core.resources import ResourceProvider

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Route all log records to stderr with a short timestamp."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )
    # httpx logs every request at INFO; core/api_client.py already does.
    logging.getLogger("httpx").setLevel(logging.WARNING)


# =============================================================================
# OperationTool — one catalog entry as a FastMCP Tool
# =============================================================================
class OperationTool(Tool):
    """FastMCP tool backed by the shared Dispatcher."""

    dispatcher: Any = Field(default=None, exclude=True)

    @classmethod
    def from_descriptor(cls, descriptor: OperationDescriptor, dispatcher: Dispatcher) -> "OperationTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema(),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        result = await self.dispatcher.invoke(self.name, arguments)
        if result.is_error:
            raise ToolError(result.first_text)
        return MCPToolResult(
            content=[MCPTextContent(type="text", text=block.text) for block in result.content]
        )


def _resource_reader(provider: ResourceProvider, uri: str):
    async def read() -> str:
        contents = await provider.read_resource(uri)
        return contents.text

    return read


# =============================================================================
# Server factory
# =============================================================================
def build_server(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Create the FastMCP server with every catalog tool and resource.

    Args:
        settings: Loaded configuration (credential already validated).
        transport: Optional httpx transport for the API client; tests use
            httpx.MockTransport so no real network call is made.
    """
    client = ApiClient(settings, transport=transport)
    dispatcher = Dispatcher(client)
    provider = ResourceProvider(client)

    mcp = FastMCP(SERVER_NAME)

    for descriptor in list_operations():
        mcp.add_tool(OperationTool.from_descriptor(descriptor, dispatcher))

    for resource in provider.list_resources():
        mcp.resource(
            resource.uri,
            name=resource.name,
            description=resource.description,
            mime_type=resource.mime_type,
        )(_resource_reader(provider, resource.uri))

    return mcp
