"""MCP tool definitions for Spruthub.

Tools are organized by category: discovery, inventory, control, api.
Listing tools carry the filter and display parameters shared by the
response-shaping pipeline.
"""

from mcp.types import Tool


# Tool category metadata used by spruthub_discover_tools
TOOL_CATEGORIES = {
    "discovery": {
        "name": "Discovery & Help",
        "description": "Tools for discovering available capabilities",
        "tools": ["spruthub_discover_tools"],
    },
    "inventory": {
        "name": "Inventory",
        "description": "Tools for listing and counting accessories, rooms and hubs",
        "tools": ["spruthub_list_accessories", "spruthub_count_accessories",
                  "spruthub_get_accessory", "spruthub_list_rooms", "spruthub_list_hubs"],
    },
    "control": {
        "name": "Control",
        "description": "Tools for changing accessory state and checking the server",
        "tools": ["spruthub_execute", "spruthub_version"],
    },
    "api": {
        "name": "Raw API",
        "description": "Tools for browsing and calling any Sprut.hub JSON-RPC method",
        "tools": ["spruthub_list_methods", "spruthub_get_method_schema", "spruthub_call_method"],
    },
}


FILTER_PROPERTIES = {
    "roomId": {
        "type": "number",
        "description": "Only accessories in this room",
    },
    "controllableOnly": {
        "type": "boolean",
        "description": "Only accessories with at least one writable characteristic",
        "default": False,
    },
    "nameFilter": {
        "type": "string",
        "description": "Case-insensitive substring of the accessory name",
    },
    "deviceTypeFilter": {
        "type": "string",
        "description": (
            "Device type: air_quality, temperature, humidity, co2, pm25, pm10, voc, "
            "light, switch, motion, contact, or any service/characteristic type substring"
        ),
    },
    "manufacturerFilter": {
        "type": "string",
        "description": "Case-insensitive substring of the manufacturer",
    },
    "modelFilter": {
        "type": "string",
        "description": "Case-insensitive substring of the model",
    },
    "onlineOnly": {
        "type": "boolean",
        "description": "Only online accessories (wins over offlineOnly)",
        "default": False,
    },
    "offlineOnly": {
        "type": "boolean",
        "description": "Only offline accessories",
        "default": False,
    },
}

DISPLAY_PROPERTIES = {
    "summary": {
        "type": "boolean",
        "description": "Compact per-accessory shape without services (set automatically for large results)",
        "default": True,
    },
    "page": {
        "type": "number",
        "description": "1-based page number",
        "default": 1,
    },
    "limit": {
        "type": "number",
        "description": "Accessories per page (capped by the server maximum)",
        "default": 20,
    },
    "metaOnly": {
        "type": "boolean",
        "description": "Only counts and pagination, no accessory data (set automatically for very large results)",
        "default": False,
    },
}


PAGE_PROPERTIES = {
    "page": {
        "type": "number",
        "description": "1-based page number",
        "default": 1,
    },
    "limit": {
        "type": "number",
        "description": "Items per page (capped by the server maximum)",
        "default": 20,
    },
}


def _add_examples(schema: dict, examples: list[dict]) -> dict:
    """Add input examples to a tool schema."""
    schema["examples"] = examples
    return schema


def get_discovery_tools() -> list[Tool]:
    """Get discovery tool definitions."""
    return [
        Tool(
            name="spruthub_discover_tools",
            description=(
                "List all available Spruthub tools organized by category. "
                "Use this first to understand what actions are possible."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "enum": list(TOOL_CATEGORIES.keys()),
                        "description": "Filter to a specific category (optional)",
                    },
                },
            },
        ),
    ]


def get_inventory_tools() -> list[Tool]:
    """Get inventory tool definitions with input examples."""
    return [
        Tool(
            name="spruthub_list_accessories",
            description=(
                "List accessories with filtering and pagination. Large results switch to "
                "summary mode, smaller pages or metadata only automatically; pass explicit "
                "summary/limit/metaOnly to override."
            ),
            inputSchema=_add_examples(
                {
                    "type": "object",
                    "properties": {**FILTER_PROPERTIES, **DISPLAY_PROPERTIES},
                },
                [
                    {},
                    {"roomId": 3, "controllableOnly": True},
                    {"deviceTypeFilter": "temperature", "summary": False},
                    {"page": 2, "limit": 10},
                ],
            ),
        ),
        Tool(
            name="spruthub_count_accessories",
            description="Count accessories matching the filters without returning them.",
            inputSchema=_add_examples(
                {
                    "type": "object",
                    "properties": dict(FILTER_PROPERTIES),
                },
                [
                    {},
                    {"onlineOnly": True},
                    {"deviceTypeFilter": "motion"},
                ],
            ),
        ),
        Tool(
            name="spruthub_get_accessory",
            description="Get one accessory with all services and characteristics.",
            inputSchema={
                "type": "object",
                "properties": {
                    "accessoryId": {
                        "type": "number",
                        "description": "Accessory id",
                    },
                },
                "required": ["accessoryId"],
            },
        ),
        Tool(
            name="spruthub_list_rooms",
            description="List rooms in the Spruthub system, one page at a time.",
            inputSchema={"type": "object", "properties": dict(PAGE_PROPERTIES)},
        ),
        Tool(
            name="spruthub_list_hubs",
            description="List hubs in the Spruthub system, one page at a time.",
            inputSchema={"type": "object", "properties": dict(PAGE_PROPERTIES)},
        ),
    ]


def get_control_tools() -> list[Tool]:
    """Get control tool definitions."""
    return [
        Tool(
            name="spruthub_execute",
            description="Set a characteristic value on an accessory.",
            inputSchema=_add_examples(
                {
                    "type": "object",
                    "properties": {
                        "command": {
                            "type": "string",
                            "enum": ["update"],
                            "description": "Command to run",
                        },
                        "accessoryId": {"type": "number", "description": "Accessory id"},
                        "serviceId": {"type": "number", "description": "Service id"},
                        "characteristicId": {"type": "number", "description": "Characteristic id"},
                        "value": {"type": "boolean", "description": "New value"},
                    },
                    "required": ["command", "accessoryId", "serviceId", "characteristicId", "value"],
                },
                [
                    {
                        "command": "update",
                        "accessoryId": 12,
                        "serviceId": 13,
                        "characteristicId": 15,
                        "value": True,
                    },
                ],
            ),
        ),
        Tool(
            name="spruthub_version",
            description="Get the Spruthub server version.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


def get_api_tools() -> list[Tool]:
    """Get raw API tool definitions."""
    return [
        Tool(
            name="spruthub_list_methods",
            description=(
                "List all available Sprut.hub JSON-RPC API methods with their "
                "categories and descriptions"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": "Filter methods by category (hub, accessory, scenario, room, system)",
                    },
                },
            },
        ),
        Tool(
            name="spruthub_get_method_schema",
            description=(
                "Get detailed schema for a specific Sprut.hub API method including "
                "parameters, return type and examples"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "methodName": {
                        "type": "string",
                        "description": 'The method name (e.g., "hub.list", "characteristic.update")',
                    },
                },
                "required": ["methodName"],
            },
        ),
        Tool(
            name="spruthub_call_method",
            description=(
                "Execute any Sprut.hub JSON-RPC API method. Use spruthub_get_method_schema "
                "first to see the required parameters"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "methodName": {
                        "type": "string",
                        "description": 'The method name to call (e.g., "hub.list")',
                    },
                    "parameters": {
                        "type": "object",
                        "description": "Method parameters as defined in the method schema",
                    },
                },
                "required": ["methodName"],
            },
        ),
    ]


def get_all_tools() -> list[Tool]:
    """Get all tool definitions."""
    return [
        *get_discovery_tools(),
        *get_inventory_tools(),
        *get_control_tools(),
        *get_api_tools(),
    ]
