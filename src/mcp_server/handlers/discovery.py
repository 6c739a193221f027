"""Tool discovery handler."""

from typing import Any

from mcp_server.tools import TOOL_CATEGORIES, get_all_tools
from shaping import ResponseEnvelope, text_block
from shaping.assembler import to_json


async def handle_discover_tools(args: dict[str, Any]) -> ResponseEnvelope:
    """Handle the spruthub_discover_tools tool.

    Returns organized information about all available tools.
    """
    category_filter = args.get("category")
    tool_lookup = {tool.name: tool for tool in get_all_tools()}

    categories = []
    for cat_id, cat_info in TOOL_CATEGORIES.items():
        if category_filter and cat_id != category_filter:
            continue

        cat_tools = []
        for tool_name in cat_info["tools"]:
            tool = tool_lookup.get(tool_name)
            if tool is None:
                continue
            schema = tool.inputSchema
            required = schema.get("required", [])

            params = []
            for prop_name, prop_info in schema.get("properties", {}).items():
                param: dict[str, Any] = {
                    "name": prop_name,
                    "type": prop_info.get("type", "any"),
                    "required": prop_name in required,
                }
                if "enum" in prop_info:
                    param["options"] = prop_info["enum"]
                if "default" in prop_info:
                    param["default"] = prop_info["default"]
                params.append(param)

            cat_tools.append({
                "name": tool.name,
                "description": tool.description,
                "parameters": params,
            })

        categories.append({
            "id": cat_id,
            "name": cat_info["name"],
            "description": cat_info["description"],
            "tools": cat_tools,
        })

    hints = [
        "Use 'spruthub_count_accessories' before listing to gauge result size",
        "Narrow listings with roomId, deviceTypeFilter or nameFilter",
        "Use 'spruthub_get_accessory' for full details of a single accessory",
    ]

    tool_count = sum(len(c["tools"]) for c in categories)
    return ResponseEnvelope(
        content=[
            text_block(f"Found {tool_count} tools in {len(categories)} categories"),
            text_block(to_json({"categories": categories, "hints": hints})),
        ],
        meta={"categories": categories, "hints": hints},
    )
