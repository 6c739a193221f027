"""Lazily established, shared connection to the hub."""

import asyncio
import logging
from typing import Callable

from config import HubConnectionConfig
from hub.client import SprutClient
from utils.errors import MissingConnectionParameters, UpstreamFailure

logger = logging.getLogger(__name__)

ClientFactory = Callable[[HubConnectionConfig], SprutClient]


def default_client_factory(config: HubConnectionConfig) -> SprutClient:
    return SprutClient(
        ws_url=config.ws_url or "",
        email=config.email or "",
        password=config.password or "",
        serial=config.serial or "",
    )


class HubConnection:
    """Owns the single ``SprutClient`` used by all tool handlers.

    The client is created on first use so the server can start (and list its
    tools) before credentials are configured.
    """

    def __init__(
        self,
        config: HubConnectionConfig,
        client_factory: ClientFactory = default_client_factory,
    ):
        self.config = config
        self._client_factory = client_factory
        self._client: SprutClient | None = None
        self._connect_lock = asyncio.Lock()

    @property
    def client(self) -> SprutClient | None:
        return self._client

    async def ensure_connected(self) -> SprutClient:
        """Return a connected client, connecting on first use or after a drop.

        Raises:
            MissingConnectionParameters: If required settings are absent
            UpstreamFailure: If the connection or login fails
        """
        async with self._connect_lock:
            if self._client is not None:
                if self._client.is_connected:
                    return self._client
                logger.warning("Spruthub connection lost, reconnecting...")
                await self.close()

            missing = self.config.missing_parameters()
            if missing:
                raise MissingConnectionParameters(missing)

            logger.info("Auto-connecting to Spruthub server...")
            client = self._client_factory(self.config)
            try:
                await client.connect()
            except Exception as e:
                logger.error(f"Failed to connect to Spruthub: {e}")
                await client.close()
                raise UpstreamFailure("connect", e) from e

            self._client = client
            return client

    async def close(self) -> None:
        """Disconnect from the hub if connected."""
        if self._client is None:
            return
        try:
            await self._client.close()
            logger.info("Disconnected from Spruthub server")
        except Exception as e:
            logger.error(f"Failed to disconnect gracefully: {e}")
        finally:
            self._client = None
