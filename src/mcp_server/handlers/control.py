"""Characteristic control and server version handlers."""

import logging
from typing import Any

from hub.connection import HubConnection
from mcp_server.handlers.common import call_upstream
from shaping import ResponseEnvelope, text_block
from shaping.assembler import to_json
from utils.errors import BadInput

logger = logging.getLogger(__name__)

SUPPORTED_COMMANDS = ("update",)
EXECUTE_REQUIRED = ("command", "accessoryId", "serviceId", "characteristicId", "value")


class ControlHandlers:
    """Handlers for commands sent to the hub."""

    def __init__(self, connection: HubConnection):
        self.connection = connection

    async def execute(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Set a characteristic value on an accessory."""
        missing = [key for key in EXECUTE_REQUIRED if args.get(key) is None]
        if missing:
            raise BadInput(f"Missing required parameters: {', '.join(missing)}")

        command = args["command"]
        if command not in SUPPORTED_COMMANDS:
            raise BadInput(
                f"Unsupported command: {command}. Supported: {', '.join(SUPPORTED_COMMANDS)}"
            )

        params = {
            "accessoryId": args["accessoryId"],
            "serviceId": args["serviceId"],
            "characteristicId": args["characteristicId"],
            "control": {"value": args["value"]},
        }

        client = await self.connection.ensure_connected()
        logger.info(
            f"Executing {command} on accessory {params['accessoryId']} "
            f"characteristic {params['characteristicId']}"
        )
        result = await call_upstream("execute command", client.execute(command, params))

        return ResponseEnvelope(
            content=[text_block(f"Command executed successfully: {to_json(result)}")],
            meta={"command": command, "params": params, "result": result},
        )

    async def version(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Get the hub server version."""
        client = await self.connection.ensure_connected()
        result = await call_upstream("get version", client.version())
        return ResponseEnvelope(
            content=[text_block(f"Server version: {to_json(result)}")],
            meta={"version": result},
        )
