"""Entry point for the OPNsense MCP server (stdio transport)."""

import argparse
import asyncio
import sys
from pathlib import Path

from opnmcp.core.config import settings
from opnmcp.core.errors import BuildConfigError
from opnmcp.core.logger import logger, set_console_level
from opnmcp.server import OPNsenseMcpServer, create_context


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="OPNsense MCP Server",
        epilog="Connection options fall back to OPNSENSE_* environment variables.",
    )
    parser.add_argument("--host", help="OPNsense URL (e.g., https://192.168.1.1)")
    parser.add_argument("--api-key", help="OPNsense API key")
    parser.add_argument("--api-secret", help="OPNsense API secret")
    parser.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    parser.add_argument(
        "--plugins",
        action="store_true",
        help="Enable plugin tools (WireGuard, Nginx, HAProxy, ...)",
    )
    parser.add_argument(
        "--build-config",
        type=Path,
        help="Path to the build configuration JSON",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Override console log level",
    )
    return parser


def main(argv: list[str] | None = None):
    """Parse CLI flags over the environment settings and run the server."""
    args = build_parser().parse_args(argv)

    # Apply CLI overrides
    overrides = {
        "host": args.host,
        "api_key": args.api_key,
        "api_secret": args.api_secret,
        "build_config_path": args.build_config,
        "log_level": args.log_level,
    }
    if args.no_verify_ssl:
        overrides["verify_ssl"] = False
    if args.plugins:
        overrides["plugins"] = True
    effective = settings.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )

    if args.log_level:
        set_console_level(args.log_level)

    try:
        context = create_context(effective)
    except BuildConfigError as e:
        logger.error(e.message)
        sys.exit(1)

    if effective.connection() is None:
        logger.warning(
            "No OPNsense connection configured; use the configure_opnsense_connection tool"
        )

    server = OPNsenseMcpServer(context)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
