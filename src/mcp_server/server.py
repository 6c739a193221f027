"""MCP server implementation for Spruthub."""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent

from config import SpruthubConfig
from hub.connection import HubConnection
from mcp_server.handlers import (
    AccessoryHandlers,
    ControlHandlers,
    MethodHandlers,
    RoomHandlers,
    handle_discover_tools,
)
from mcp_server.tools import get_all_tools
from shaping import ResponseEnvelope, SizeGuard
from shaping.size_guard import measure
from utils.errors import (
    DEFAULT_HANDLER_TIMEOUT,
    ErrorCategory,
    ToolError,
    classify_exception,
    generate_request_id,
    get_recovery_suggestion,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "spruthub-mcp-server"

# Timeout for tool handler execution
TOOL_TIMEOUT = DEFAULT_HANDLER_TIMEOUT

ToolResult = list[TextContent] | tuple[list[TextContent], dict[str, Any]]


def _error_content(error: ToolError) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(error.to_dict(), indent=2, ensure_ascii=False))]


class SpruthubMcpServer:
    """MCP server exposing the Sprut.hub inventory and controls."""

    def __init__(self, config: SpruthubConfig, connection: HubConnection | None = None):
        self.config = config
        self.connection = connection or HubConnection(config.hub)
        self.size_guard = SizeGuard(config.limits)

        # Initialize handlers
        self.accessories = AccessoryHandlers(self.connection, config.limits)
        self.rooms = RoomHandlers(self.connection, config.limits)
        self.control = ControlHandlers(self.connection)
        self.methods = MethodHandlers(self.connection)

        # Set up MCP server
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list:
            return get_all_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Run one tool call, converting every failure into a structured error."""
        request_id = generate_request_id()
        args = arguments or {}
        logger.info(f"[{request_id}] Tool call: {name}")
        logger.debug(f"[{request_id}] Arguments: {args}")

        try:
            async with asyncio.timeout(TOOL_TIMEOUT):
                envelope = await self._handle_tool(name, args)

            content = self.size_guard.process_response(envelope.content)
            meta = self.size_guard.bound_meta(envelope.meta, measure(content))
            meta = {**meta, "request_id": request_id}

            logger.info(f"[{request_id}] Tool {name} completed successfully")
            return [TextContent(type="text", text=block["text"]) for block in content], meta

        except asyncio.TimeoutError:
            logger.error(f"[{request_id}] Tool {name} timed out after {TOOL_TIMEOUT}s")
            error = ToolError(
                category=ErrorCategory.TIMEOUT,
                message=f"Operation timed out after {TOOL_TIMEOUT} seconds",
                request_id=request_id,
                recovery=get_recovery_suggestion(ErrorCategory.TIMEOUT),
            )
            return _error_content(error)

        except Exception as e:
            logger.exception(f"[{request_id}] Error handling tool {name}: {e}")
            error = classify_exception(e)
            error.request_id = request_id
            return _error_content(error)

    async def _handle_tool(self, name: str, args: dict[str, Any]) -> ResponseEnvelope:
        """Route tool calls to appropriate handlers."""
        if name == "spruthub_discover_tools":
            return await handle_discover_tools(args)

        # Inventory tools
        elif name == "spruthub_list_accessories":
            return await self.accessories.list_accessories(args)
        elif name == "spruthub_count_accessories":
            return await self.accessories.count_accessories(args)
        elif name == "spruthub_get_accessory":
            return await self.accessories.get_accessory(args)
        elif name == "spruthub_list_rooms":
            return await self.rooms.list_rooms(args)
        elif name == "spruthub_list_hubs":
            return await self.rooms.list_hubs(args)

        # Control tools
        elif name == "spruthub_execute":
            return await self.control.execute(args)
        elif name == "spruthub_version":
            return await self.control.version(args)

        # Raw API tools
        elif name == "spruthub_list_methods":
            return await self.methods.list_methods(args)
        elif name == "spruthub_get_method_schema":
            return await self.methods.get_method_schema(args)
        elif name == "spruthub_call_method":
            return await self.methods.call_method(args)

        raise ValueError(f"Unknown tool: {name}")

    async def run(self) -> None:
        """Run the MCP server over stdio."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Spruthub MCP server started")
            await self.server.run(
                read_stream, write_stream, self.server.create_initialization_options()
            )

    async def shutdown(self) -> None:
        """Close the hub connection."""
        await self.connection.close()


def create_server(config: SpruthubConfig, connection: HubConnection | None = None) -> SpruthubMcpServer:
    """Create a new Spruthub MCP server instance."""
    return SpruthubMcpServer(config, connection)
