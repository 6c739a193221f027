"""Main entry point for Spruthub MCP server."""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from config import load_config
from mcp_server.server import create_server

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Log to stderr; stdout carries the MCP protocol."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


async def main(config_dir: Path | None = None) -> None:
    """Main entry point."""
    logger.info("Starting Spruthub MCP server...")

    # Load configuration
    try:
        config = load_config(config_dir)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    limits = config.limits
    logger.info(
        f"Response limits: max {limits.max_response_size} chars, "
        f"warn at {limits.warn_threshold}, {limits.max_devices_per_page} accessories per page"
    )
    missing = config.hub.missing_parameters()
    if missing:
        logger.warning(f"Hub connection not configured, missing: {', '.join(missing)}")

    server = create_server(config)

    # SIGTERM cancels the server task so the finally block still runs
    run_task = asyncio.create_task(server.run())
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGTERM, run_task.cancel)
    except NotImplementedError:
        logger.debug("Signal handlers not supported on this platform")

    try:
        logger.info("MCP server running...")
        await run_task
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutting down...")
    finally:
        await server.shutdown()
        logger.info("Shutdown complete")


def run() -> None:
    """Synchronous entry point."""
    setup_logging()
    asyncio.run(main())


if __name__ == "__main__":
    run()
