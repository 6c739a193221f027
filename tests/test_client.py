"""Tests for the Sprut.hub client and connection."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from config import HubConnectionConfig
from hub.client import HubResult, SprutClient, decode_result, encode_method
from hub.connection import HubConnection
from utils.errors import MissingConnectionParameters, UpstreamFailure


class FakeWebSocket:
    """Websocket double that replays queued frames."""

    def __init__(self, frames):
        self.closed = False
        self.sent = []
        self._frames = [
            SimpleNamespace(type=aiohttp.WSMsgType.TEXT, data=json.dumps(f)) for f in frames
        ]

    async def send_json(self, payload):
        self.sent.append(payload)

    async def close(self):
        self.closed = True

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for frame in self._frames:
            yield frame


def make_client() -> SprutClient:
    return SprutClient(
        ws_url="ws://hub.local/spruthub",
        email="user@example.com",
        password="secret",
        serial="ABC123",
    )


class TestMethodEncoding:
    """Tests for dotted method nesting."""

    def test_encode(self):
        assert encode_method("room.list", {}) == {"room": {"list": {}}}
        assert encode_method("accessory.list", {"expand": "services"}) == {
            "accessory": {"list": {"expand": "services"}}
        }

    def test_decode(self):
        assert decode_result("room.list", {"room": {"list": {"rooms": [1]}}}) == {"rooms": [1]}

    def test_decode_unnested(self):
        assert decode_result("server.version", {"version": "1.0"}) == {"version": "1.0"}


class TestCallMethod:
    """Tests for the JSON-RPC round trip."""

    @pytest.mark.asyncio
    async def test_not_connected(self):
        with pytest.raises(ConnectionError):
            await make_client().call_method("room.list")

    @pytest.mark.asyncio
    async def test_round_trip(self):
        """Test request framing, unsolicited event skipping and result unwrapping."""
        client = make_client()
        client._token = "tok"
        client._ws = FakeWebSocket([
            {"event": {"characteristic": {"value": 1}}},
            {"id": 1, "result": {"room": {"list": {"rooms": [{"id": 1}]}}}},
        ])

        result = await client.call_method("room.list")

        assert result == {"rooms": [{"id": 1}]}
        sent = client._ws.sent[0]
        assert sent["params"] == {"room": {"list": {}}}
        assert sent["serial"] == "ABC123"
        assert sent["token"] == "tok"
        assert sent["jsonrpc"] == "2.0"

    @pytest.mark.asyncio
    async def test_error_response(self):
        client = make_client()
        client._ws = FakeWebSocket([{"id": 1, "error": {"message": "Access denied"}}])

        with pytest.raises(UpstreamFailure, match="Access denied"):
            await client.call_method("hub.list")

    @pytest.mark.asyncio
    async def test_frame_iterator_closed_after_reply(self):
        """Test the frame iterator is finalized as soon as the reply arrives."""
        client = make_client()
        client._ws = FakeWebSocket([
            {"id": 1, "result": {"version": "1.0"}},
            {"event": {"late": True}},
        ])
        finalized = []
        read_frames = client._payloads

        async def tracked(ws):
            try:
                async for data in read_frames(ws):
                    yield data
            finally:
                finalized.append(True)

        client._payloads = tracked

        assert await client.call_method("server.version") == {"version": "1.0"}
        assert finalized == [True]

    @pytest.mark.asyncio
    async def test_socket_closes_before_reply(self):
        client = make_client()
        client._ws = FakeWebSocket([])

        with pytest.raises(ConnectionError):
            await client.call_method("hub.list")


class TestInventory:
    """Tests for list helpers and room lookup."""

    @pytest.mark.asyncio
    async def test_list_rooms(self):
        client = make_client()
        client.call_method = AsyncMock(return_value={"rooms": [{"id": 1, "name": "Hall"}]})

        result = await client.list_rooms()

        assert result == HubResult(success=True, data=[{"id": 1, "name": "Hall"}])
        client.call_method.assert_awaited_once_with("room.list", None)

    @pytest.mark.asyncio
    async def test_list_accessories_expands(self):
        client = make_client()
        client.call_method = AsyncMock(return_value=[{"id": 1}])

        result = await client.list_accessories()

        assert result.data == [{"id": 1}]
        client.call_method.assert_awaited_once_with(
            "accessory.list", {"expand": "services,characteristics"}
        )

    @pytest.mark.asyncio
    async def test_hub_error_becomes_result(self):
        client = make_client()
        client.call_method = AsyncMock(side_effect=UpstreamFailure("call hub.list", "denied"))

        result = await client.list_hubs()

        assert result.success is False
        assert result.error == "denied"

    @pytest.mark.asyncio
    async def test_execute_rejects_unknown_command(self):
        with pytest.raises(ValueError, match="Unsupported command"):
            await make_client().execute("delete", {})

    @pytest.mark.asyncio
    async def test_execute_update(self):
        client = make_client()
        client.call_method = AsyncMock(return_value={"success": True})
        params = {"accessoryId": 1, "serviceId": 2, "characteristicId": 3, "control": {"value": 1}}

        await client.execute("update", params)

        client.call_method.assert_awaited_once_with("characteristic.update", params)

    def test_devices_by_room_compares_as_strings(self, accessories):
        rooms = make_client().get_devices_by_room(accessories, "1")
        assert [a["id"] for a in rooms] == [1, 3]


class TestConnect:
    """Tests for connect and login."""

    @pytest.mark.asyncio
    async def test_login_stores_token(self):
        client = make_client()
        client._open = AsyncMock()
        client.call_method = AsyncMock(return_value={"token": "session-token"})

        await client.connect()

        assert client._token == "session-token"
        client.call_method.assert_awaited_once_with(
            "account.login", {"email": "user@example.com", "password": "secret"}
        )

    @pytest.mark.asyncio
    async def test_login_without_token(self):
        client = make_client()
        client._open = AsyncMock()
        client.call_method = AsyncMock(return_value={})

        with pytest.raises(UpstreamFailure, match="Failed to log in"):
            await client.connect()


class TestHubConnection:
    """Tests for the lazily connected shared client."""

    @pytest.mark.asyncio
    async def test_missing_parameters(self):
        factory = MagicMock()
        connection = HubConnection(HubConnectionConfig(ws_url="ws://hub"), client_factory=factory)

        with pytest.raises(MissingConnectionParameters) as exc_info:
            await connection.ensure_connected()
        assert "SPRUTHUB_WS_URL" not in exc_info.value.missing
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_connects_once(self, sample_config):
        client = MagicMock()
        client.connect = AsyncMock()
        factory = MagicMock(return_value=client)
        connection = HubConnection(sample_config.hub, client_factory=factory)

        assert await connection.ensure_connected() is client
        assert await connection.ensure_connected() is client
        factory.assert_called_once_with(sample_config.hub)
        client.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reconnects_after_drop(self, sample_config):
        """Test a client whose socket dropped is replaced on the next call."""
        first, second = MagicMock(), MagicMock()
        for client in (first, second):
            client.connect = AsyncMock()
            client.close = AsyncMock()
            client.is_connected = True
        factory = MagicMock(side_effect=[first, second])
        connection = HubConnection(sample_config.hub, client_factory=factory)

        assert await connection.ensure_connected() is first
        first.is_connected = False

        assert await connection.ensure_connected() is second
        assert factory.call_count == 2
        first.close.assert_awaited_once()
        assert connection.client is second

    @pytest.mark.asyncio
    async def test_connect_failure(self, sample_config):
        client = MagicMock()
        client.connect = AsyncMock(side_effect=OSError("Connection refused"))
        client.close = AsyncMock()
        connection = HubConnection(sample_config.hub, client_factory=lambda _: client)

        with pytest.raises(UpstreamFailure, match="Failed to connect: Connection refused"):
            await connection.ensure_connected()
        client.close.assert_awaited_once()
        assert connection.client is None

    @pytest.mark.asyncio
    async def test_close(self, sample_config):
        client = MagicMock()
        client.connect = AsyncMock()
        client.close = AsyncMock()
        connection = HubConnection(sample_config.hub, client_factory=lambda _: client)
        await connection.ensure_connected()

        await connection.close()

        client.close.assert_awaited_once()
        assert connection.client is None
