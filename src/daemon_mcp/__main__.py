"""
Command-line entry point: ``python -m daemon_mcp`` or ``daemon-mcp``.

Loads the layered configuration, sets up logging, and serves the ASGI app
with uvicorn.
"""

from __future__ import annotations

import sys

import uvicorn
from pydantic import ValidationError

from daemon_mcp import __version__
from daemon_mcp.app import create_app
from daemon_mcp.config import load_config
from daemon_mcp.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    """Run the Daemon MCP Server until interrupted."""
    try:
        config = load_config(cli_args=argv)
    except (FileNotFoundError, ValidationError) as e:
        print(f"daemon-mcp: invalid configuration: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(config.logging)
    logger.info(
        "Starting daemon MCP server",
        extra={
            "version": __version__,
            "listen": config.server.listen,
            "document_url": config.upstream.document_url,
        },
    )

    app = create_app(config)
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level=config.server.log_level,
        )
    )
    server.run()

    logger.info("Daemon MCP server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
