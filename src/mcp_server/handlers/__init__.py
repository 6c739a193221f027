"""MCP tool handlers for Spruthub."""

from mcp_server.handlers.accessories import AccessoryHandlers
from mcp_server.handlers.control import ControlHandlers
from mcp_server.handlers.discovery import handle_discover_tools
from mcp_server.handlers.methods import MethodHandlers
from mcp_server.handlers.rooms import RoomHandlers

__all__ = [
    "AccessoryHandlers",
    "ControlHandlers",
    "MethodHandlers",
    "RoomHandlers",
    "handle_discover_tools",
]
