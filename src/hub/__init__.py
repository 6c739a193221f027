"""Sprut.hub transport and API method catalog."""

from hub.client import HubResult, SprutClient
from hub.connection import HubConnection

__all__ = [
    "HubConnection",
    "HubResult",
    "SprutClient",
]
