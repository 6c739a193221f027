"""API method catalog handlers: list, describe and call hub methods."""

import logging
from typing import Any

from hub import schema
from hub.connection import HubConnection
from mcp_server.handlers.common import call_upstream
from shaping import ResponseEnvelope, text_block
from shaping.assembler import to_json
from utils.errors import BadInput

logger = logging.getLogger(__name__)

# Method names shown in "not found" errors
SUGGESTION_COUNT = 10


def _unknown_method(method_name: str) -> BadInput:
    available = schema.get_available_methods()
    listed = ", ".join(available[:SUGGESTION_COUNT])
    if len(available) > SUGGESTION_COUNT:
        listed += "..."
    return BadInput(f'Method "{method_name}" not found. Available methods: {listed}')


class MethodHandlers:
    """Handlers for the generic JSON-RPC method tools."""

    def __init__(self, connection: HubConnection):
        self.connection = connection

    async def list_methods(self, args: dict[str, Any]) -> ResponseEnvelope:
        """List catalog methods, optionally for one category."""
        category = args.get("category")

        if category:
            categories = schema.get_categories()
            if category not in categories:
                raise BadInput(
                    f"Unknown category: {category}. "
                    f"Available categories: {', '.join(categories)}"
                )
            methods = schema.get_methods_by_category(category)
        else:
            methods = {name: schema.get_method_schema(name) for name in schema.get_available_methods()}

        summaries = [
            {
                "name": name,
                "category": method["category"],
                "description": method["description"],
                "hasRest": "rest" in method,
                "restMapping": (
                    f"{method['rest']['method']} {method['rest']['path']}" if "rest" in method else None
                ),
            }
            for name, method in methods.items()
        ]

        if category:
            heading = f'Found {len(summaries)} methods in category "{category}":'
        else:
            heading = f"Found {len(summaries)} available API methods:"

        return ResponseEnvelope(
            content=[text_block(heading), text_block(to_json(summaries))],
            meta={
                "methods": summaries,
                "totalCount": len(summaries),
                "category": category or "all",
                "availableCategories": schema.get_categories(),
            },
        )

    async def get_method_schema(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Describe one method's parameters, result and examples."""
        method_name = args.get("methodName")
        if not method_name:
            raise BadInput("methodName parameter is required")

        method = schema.get_method_schema(method_name)
        if method is None:
            raise _unknown_method(method_name)

        return ResponseEnvelope(
            content=[text_block(f'Schema for "{method_name}":'), text_block(to_json(method))],
            meta={
                "methodName": method_name,
                "schema": method,
                "category": method["category"],
                "hasRest": "rest" in method,
                "hasExamples": bool(method.get("examples")),
            },
        )

    async def call_method(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Call any catalog method on the hub."""
        method_name = args.get("methodName")
        if not method_name:
            raise BadInput("methodName parameter is required")
        parameters = args.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise BadInput("parameters must be an object")

        method = schema.get_method_schema(method_name)
        if method is None:
            logger.error(f"Schema lookup failed for method: {method_name!r}")
            raise _unknown_method(method_name)

        client = await self.connection.ensure_connected()
        logger.debug(f"Calling {method_name} with {parameters}")
        result = await call_upstream("call method", client.call_method(method_name, parameters))

        return ResponseEnvelope(
            content=[
                text_block(f"Called {method_name} successfully"),
                text_block(f"Result: {to_json(result)}"),
            ],
            meta={"methodName": method_name, "parameters": parameters, "result": result},
        )
