"""Sprut.hub JSON-RPC client over WebSocket.

Requests nest the dotted method name into ``params``: calling ``room.list``
sends ``{"params": {"room": {"list": {...}}}}`` and the hub answers with the
same nesting under ``result``.
"""

import asyncio
import json
import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, AsyncIterator

import aiohttp

from utils.errors import DEFAULT_CONNECT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, UpstreamFailure
from utils.retry import retry_async

logger = logging.getLogger(__name__)


@dataclass
class HubResult:
    """Outcome of an inventory request."""

    success: bool
    data: Any = None
    error: str | None = None


def encode_method(method: str, params: dict[str, Any] | None) -> dict[str, Any]:
    """Nest ``params`` under each part of a dotted method name."""
    nested: dict[str, Any] = params or {}
    for part in reversed(method.split(".")):
        nested = {part: nested}
    return nested


def decode_result(method: str, result: Any) -> Any:
    """Unwrap the method nesting from a result, where present."""
    for part in method.split("."):
        if not isinstance(result, dict) or part not in result:
            return result
        result = result[part]
    return result


def _extract_list(data: Any, key: str) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        items = data.get(key)
        if isinstance(items, list):
            return items
    return []


class SprutClient:
    """Authenticated JSON-RPC session with one Sprut.hub server."""

    def __init__(
        self,
        ws_url: str,
        email: str,
        password: str,
        serial: str,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.ws_url = ws_url
        self.email = email
        self.password = password
        self.serial = serial
        self.request_timeout = request_timeout

        self._session = session
        self._owns_session = session is None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._token: str | None = None
        self._next_id = 0
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and not self._ws.closed and self._token is not None

    async def connect(self, max_attempts: int = 3) -> None:
        """Open the websocket and log in, retrying transient network errors."""
        await retry_async(
            self._open,
            max_attempts=max_attempts,
            initial_delay=1.0,
            retryable_exceptions=(aiohttp.ClientError, OSError, asyncio.TimeoutError),
            description="Spruthub connect",
        )
        await self._login()
        logger.info(f"Connected to Spruthub at {self.ws_url} (serial {self.serial})")

    async def _open(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        self._ws = await self._session.ws_connect(
            self.ws_url,
            timeout=aiohttp.ClientTimeout(total=DEFAULT_CONNECT_TIMEOUT),
            heartbeat=30.0,
        )

    async def _login(self) -> None:
        result = await self.call_method(
            "account.login", {"email": self.email, "password": self.password}
        )
        token = result.get("token") if isinstance(result, dict) else None
        if not token:
            raise UpstreamFailure("log in", "no session token in response")
        self._token = token

    async def close(self) -> None:
        """Close the websocket and any session this client created."""
        if self._ws is not None:
            try:
                await self._ws.close()
            except (aiohttp.ClientError, RuntimeError) as e:
                logger.warning(f"Error closing Spruthub websocket: {e}")
            self._ws = None
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
        self._token = None

    async def _payloads(self, ws: aiohttp.ClientWebSocketResponse) -> AsyncIterator[dict[str, Any]]:
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                try:
                    data = json.loads(msg.data)
                except ValueError:
                    logger.debug(f"Ignoring non-JSON frame: {msg.data[:120]}")
                    continue
                if isinstance(data, dict):
                    yield data
            elif msg.type == aiohttp.WSMsgType.ERROR:
                raise ConnectionError(f"Spruthub websocket error: {ws.exception()}")
            elif msg.type in {aiohttp.WSMsgType.CLOSE, aiohttp.WSMsgType.CLOSED}:
                break

    async def call_method(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Call a JSON-RPC method and return its unwrapped result.

        Raises:
            UpstreamFailure: If the hub answers with an error
            ConnectionError: If the websocket is not open or closes mid-call
        """
        ws = self._ws
        if ws is None or ws.closed:
            raise ConnectionError("Spruthub websocket is not connected")

        async with self._lock:
            self._next_id += 1
            request_id = self._next_id
            payload: dict[str, Any] = {
                "jsonrpc": "2.0",
                "id": request_id,
                "params": encode_method(method, params),
                "serial": self.serial,
            }
            if self._token:
                payload["token"] = self._token

            logger.debug(f"Spruthub request {request_id}: {method}")
            await ws.send_json(payload)

            async with (
                asyncio.timeout(self.request_timeout),
                aclosing(self._payloads(ws)) as payloads,
            ):
                async for data in payloads:
                    if data.get("id") != request_id:
                        # Unsolicited events share the socket
                        continue
                    error = data.get("error")
                    if error:
                        message = error.get("message", error) if isinstance(error, dict) else error
                        raise UpstreamFailure(f"call {method}", message)
                    return decode_result(method, data.get("result"))

        raise ConnectionError(f"Spruthub websocket closed while waiting for {method}")

    async def _fetch_list(self, method: str, key: str, params: dict[str, Any] | None = None) -> HubResult:
        try:
            data = await self.call_method(method, params)
        except UpstreamFailure as e:
            return HubResult(success=False, error=str(e.cause))
        return HubResult(success=True, data=_extract_list(data, key))

    async def list_accessories(self) -> HubResult:
        return await self._fetch_list(
            "accessory.list", "accessories", {"expand": "services,characteristics"}
        )

    async def list_rooms(self) -> HubResult:
        return await self._fetch_list("room.list", "rooms")

    async def list_hubs(self) -> HubResult:
        return await self._fetch_list("hub.list", "hubs")

    async def execute(self, command: str, params: dict[str, Any]) -> Any:
        """Run a control command. Only ``update`` (set a characteristic) exists."""
        if command != "update":
            raise ValueError(f"Unsupported command: {command}")
        return await self.call_method("characteristic.update", params)

    async def version(self) -> Any:
        return await self.call_method("server.version")

    def get_devices_by_room(self, accessories: list[dict[str, Any]], room_id: Any) -> list[dict[str, Any]]:
        """Accessories assigned to a room.

        Room ids arrive as numbers from some hub versions and strings from
        others, so they are compared as strings.
        """
        wanted = str(room_id)
        return [a for a in accessories if a.get("roomId") is not None and str(a["roomId"]) == wanted]
