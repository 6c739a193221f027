"""CLI entry point for Spruthub MCP."""

import argparse
import asyncio
import sys
from pathlib import Path


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="spruthub-mcp",
        description="Spruthub MCP - Sprut.hub smart home inventory for MCP clients",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the MCP server")
    serve_parser.add_argument(
        "--config-dir",
        type=str,
        help="Path to config directory",
    )

    # show-config command
    show_parser = subparsers.add_parser(
        "show-config", help="Print resolved response limits and connection status"
    )
    show_parser.add_argument(
        "--config-dir",
        type=str,
        help="Path to config directory",
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config_dir = Path(args.config_dir) if args.config_dir else None

    if args.command == "serve":
        from main import main as serve_main, setup_logging
        setup_logging()
        asyncio.run(serve_main(config_dir))

    elif args.command == "show-config":
        show_config(config_dir)


def show_config(config_dir: Path | None) -> None:
    """Print the resolved configuration without secrets."""
    from config import load_config

    config = load_config(config_dir)

    print("Response limits:")
    for name, value in config.limits.model_dump().items():
        print(f"  {name}: {value}")

    print("Hub connection:")
    print(f"  ws_url: {config.hub.ws_url or '(not set)'}")
    print(f"  serial: {config.hub.serial or '(not set)'}")
    missing = config.hub.missing_parameters()
    if missing:
        print(f"  missing: {', '.join(missing)}")
    else:
        print("  all connection parameters set")


if __name__ == "__main__":
    main()
