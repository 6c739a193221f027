"""Pytest configuration and fixtures for Spruthub MCP tests."""

import copy
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import HubConnectionConfig, ResponseLimits, SpruthubConfig
from hub.client import HubResult, SprutClient
from hub.connection import HubConnection

SAMPLE_ACCESSORIES: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Living Room Light",
        "manufacturer": "Philips",
        "model": "Hue White",
        "online": True,
        "roomId": 1,
        "services": [
            {
                "type": "Lightbulb",
                "characteristics": [
                    {"type": "On", "value": True, "control": {"write": True}},
                    {"type": "Brightness", "value": 80, "control": {"write": True}},
                ],
            }
        ],
    },
    {
        "id": 2,
        "name": "Kitchen Switch",
        "manufacturer": "Lutron",
        "model": "Caseta",
        "online": False,
        "roomId": 2,
        "services": [
            {
                "type": "Switch",
                "characteristics": [
                    {"type": "On", "value": False, "control": {"write": True}},
                ],
            }
        ],
    },
    {
        "id": 3,
        "name": "Air Quality Sensor",
        "manufacturer": "Xiaomi",
        "model": "MiAir",
        "online": True,
        "roomId": 1,
        "services": [
            {
                "type": "AirQualitySensor",
                "characteristics": [
                    {"type": "AirQuality", "value": 1, "control": {"write": False}},
                ],
            }
        ],
    },
    {
        "id": 4,
        "name": "Temperature Sensor",
        "manufacturer": "Aqara",
        "model": "TH01",
        "online": True,
        "roomId": 2,
        "services": [
            {
                "type": "TemperatureSensor",
                "characteristics": [
                    {"type": "CurrentTemperature", "value": 22.5},
                ],
            }
        ],
    },
    {
        "id": 5,
        "manufacturer": "Generic",
        "model": "Bridge",
        "online": True,
        "roomId": 3,
        "services": [],
    },
]


def make_accessories(count: int) -> list[dict[str, Any]]:
    """Generate a uniform inventory of ``count`` sensors."""
    return [
        {
            "id": i,
            "name": f"Sensor {i}",
            "manufacturer": "Aqara",
            "model": "TH01",
            "online": i % 2 == 0,
            "roomId": i % 4,
            "services": [
                {
                    "type": "TemperatureSensor",
                    "characteristics": [{"type": "CurrentTemperature", "value": 20 + i % 5}],
                }
            ],
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def accessories() -> list[dict[str, Any]]:
    """A fresh copy of the sample inventory."""
    return copy.deepcopy(SAMPLE_ACCESSORIES)


@pytest.fixture
def limits() -> ResponseLimits:
    """Default response limits."""
    return ResponseLimits()


@pytest.fixture
def hub_client(accessories) -> SprutClient:
    """A SprutClient whose network calls are replaced with mocks."""
    client = SprutClient(
        ws_url="ws://hub.local/spruthub",
        email="user@example.com",
        password="secret",
        serial="ABC123",
    )
    client.list_accessories = AsyncMock(return_value=HubResult(success=True, data=accessories))
    client.list_rooms = AsyncMock(
        return_value=HubResult(success=True, data=[{"id": 1, "name": "Living Room", "visible": True}])
    )
    client.list_hubs = AsyncMock(
        return_value=HubResult(success=True, data=[{"serial": "ABC123", "name": "Sprut.hub"}])
    )
    client.execute = AsyncMock(return_value={"success": True})
    client.version = AsyncMock(return_value={"version": "1.2.3", "build": "456"})
    client.call_method = AsyncMock(return_value={"hubs": []})
    client.close = AsyncMock()
    return client


@pytest.fixture
def connection(hub_client) -> MagicMock:
    """A HubConnection stand-in that hands out the mocked client."""
    conn = MagicMock(spec=HubConnection)
    conn.ensure_connected = AsyncMock(return_value=hub_client)
    conn.close = AsyncMock()
    return conn


@pytest.fixture
def sample_config(limits) -> SpruthubConfig:
    """Configuration with complete hub credentials."""
    return SpruthubConfig(
        limits=limits,
        hub=HubConnectionConfig(
            ws_url="ws://hub.local/spruthub",
            email="user@example.com",
            password="secret",
            serial="ABC123",
        ),
    )
