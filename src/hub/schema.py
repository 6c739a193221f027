"""Static catalog of Sprut.hub JSON-RPC methods.

Read-only lookup data used by the method discovery tools and to validate
generic method calls before they reach the hub.
"""

from typing import Any

METHOD_CATALOG: dict[str, dict[str, Any]] = {
    "hub.list": {
        "category": "hub",
        "description": "List all hubs with their status and firmware information",
        "params": {},
        "result": {"hubs": "array of hub objects"},
        "rest": {"method": "GET", "path": "/hubs"},
        "examples": [{"params": {}}],
    },
    "server.version": {
        "category": "system",
        "description": "Get the server version and build information",
        "params": {},
        "result": {"version": "string", "build": "string"},
        "rest": {"method": "GET", "path": "/version"},
        "examples": [{"params": {}}],
    },
    "accessory.list": {
        "category": "accessory",
        "description": "List accessories, optionally expanding services and characteristics",
        "params": {
            "expand": {
                "type": "string",
                "required": False,
                "description": "Comma-separated nested data to include: services, characteristics",
            },
        },
        "result": {"accessories": "array of accessory objects"},
        "rest": {"method": "GET", "path": "/accessories"},
        "examples": [{"params": {"expand": "services,characteristics"}}],
    },
    "accessory.get": {
        "category": "accessory",
        "description": "Get one accessory with its services and characteristics",
        "params": {
            "id": {"type": "integer", "required": True, "description": "Accessory id"},
        },
        "result": {"accessory": "accessory object"},
        "rest": {"method": "GET", "path": "/accessories/{id}"},
        "examples": [{"params": {"id": 12}}],
    },
    "characteristic.update": {
        "category": "accessory",
        "description": "Set the value of a writable characteristic",
        "params": {
            "accessoryId": {"type": "integer", "required": True, "description": "Accessory id"},
            "serviceId": {"type": "integer", "required": True, "description": "Service id"},
            "characteristicId": {
                "type": "integer",
                "required": True,
                "description": "Characteristic id",
            },
            "control": {
                "type": "object",
                "required": True,
                "description": "New value, e.g. {\"value\": true}",
            },
        },
        "result": {"success": "boolean"},
        "rest": {"method": "PATCH", "path": "/characteristics"},
        "examples": [
            {
                "params": {
                    "accessoryId": 12,
                    "serviceId": 13,
                    "characteristicId": 15,
                    "control": {"value": True},
                }
            }
        ],
    },
    "room.list": {
        "category": "room",
        "description": "List all rooms",
        "params": {},
        "result": {"rooms": "array of room objects"},
        "rest": {"method": "GET", "path": "/rooms"},
        "examples": [{"params": {}}],
    },
    "room.get": {
        "category": "room",
        "description": "Get one room by id",
        "params": {
            "id": {"type": "integer", "required": True, "description": "Room id"},
        },
        "result": {"room": "room object"},
        "examples": [{"params": {"id": 3}}],
    },
    "scenario.list": {
        "category": "scenario",
        "description": "List automation scenarios",
        "params": {},
        "result": {"scenarios": "array of scenario objects"},
        "rest": {"method": "GET", "path": "/scenarios"},
        "examples": [{"params": {}}],
    },
    "scenario.get": {
        "category": "scenario",
        "description": "Get one scenario including its code",
        "params": {
            "index": {"type": "string", "required": True, "description": "Scenario index"},
        },
        "result": {"scenario": "scenario object"},
        "examples": [{"params": {"index": "1"}}],
    },
    "scenario.run": {
        "category": "scenario",
        "description": "Run a scenario immediately",
        "params": {
            "index": {"type": "string", "required": True, "description": "Scenario index"},
        },
        "result": {"success": "boolean"},
        "examples": [{"params": {"index": "1"}}],
    },
    "system.info": {
        "category": "system",
        "description": "Get system information (uptime, memory, storage)",
        "params": {},
        "result": {"info": "system information object"},
        "examples": [{"params": {}}],
    },
}


def get_available_methods() -> list[str]:
    """All method names in catalog order."""
    return list(METHOD_CATALOG)


def get_method_schema(method_name: str) -> dict[str, Any] | None:
    """Schema for one method, or None if unknown."""
    return METHOD_CATALOG.get(method_name)


def get_methods_by_category(category: str) -> dict[str, dict[str, Any]]:
    """Methods belonging to one category."""
    return {name: schema for name, schema in METHOD_CATALOG.items() if schema["category"] == category}


def get_categories() -> list[str]:
    """Distinct categories in first-seen order."""
    categories: list[str] = []
    for schema in METHOD_CATALOG.values():
        if schema["category"] not in categories:
            categories.append(schema["category"])
    return categories
