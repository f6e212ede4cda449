"""
HTTP transport for the Daemon MCP Server.

A Starlette application that accepts JSON-RPC requests via POST on any path,
answers CORS preflight requests, and rejects every other method with 405.
JSON-RPC errors are carried in the response body with status 200.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.endpoints import HTTPEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from daemon_mcp.config import AppConfig
from daemon_mcp.fetcher import DocumentFetcher
from daemon_mcp.logging import get_logger
from daemon_mcp.routing import ToolRegistry, get_default_registry
from daemon_mcp.server import process_request

if TYPE_CHECKING:
    from daemon_mcp.server import DocumentSource

logger = get_logger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class JSONRPCEndpoint(HTTPEndpoint):
    """Endpoint serving JSON-RPC over POST."""

    async def options(self, request: Request) -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    async def post(self, request: Request) -> Response:
        body = await request.body()
        response = await process_request(
            body,
            request.app.state.source,
            request.app.state.registry,
        )
        return Response(
            content=response.to_json(),
            status_code=200,
            media_type="application/json",
            headers=CORS_HEADERS,
        )

    async def method_not_allowed(self, request: Request) -> Response:
        logger.info(
            "Method not allowed",
            extra={"method": request.method, "path": request.url.path},
        )
        return PlainTextResponse(
            "Method not allowed",
            status_code=405,
            headers=CORS_HEADERS,
        )


def create_app(
    config: AppConfig | None = None,
    *,
    source: DocumentSource | None = None,
    registry: ToolRegistry | None = None,
) -> Starlette:
    """
    Create the ASGI application.

    Args:
        config: Application configuration (used for the upstream URL when
            no source is given).
        source: Optional document source; defaults to a DocumentFetcher for
            the configured URL.
        registry: Optional tool registry; defaults to the global registry.

    Returns:
        Configured Starlette application.

    Example:
        >>> app = create_app(load_config(cli_args=[]))
        >>> uvicorn.run(app, host="127.0.0.1", port=8000)
    """
    if source is None:
        config = config if config is not None else AppConfig()
        source = DocumentFetcher.from_config(config.upstream)

    app = Starlette(
        debug=False,
        routes=[Route("/{path:path}", JSONRPCEndpoint)],
    )
    app.state.source = source
    app.state.registry = registry if registry is not None else get_default_registry()
    return app
