"""
HTTP Transport

Serves the MCP server over streamable HTTP with an optional API key check
and an unauthenticated health endpoint. HTTPS is enabled when a domain is
configured; certificates are read from disk, issuance and renewal are left
to an external ACME client.
"""

import contextlib
import logging
from collections.abc import AsyncIterator

import uvicorn
from mcp.server import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from .config import McpServerConfig

logger = logging.getLogger("blink-wallet-mcp.http")

API_KEY_HEADER = "x-api-key"

UNAUTHORIZED_RESPONSE = {
    "jsonrpc": "2.0",
    "error": {"code": -32001, "message": "Unauthorized: Invalid API key"},
    "id": None,
}


class McpEndpoint:
    """ASGI endpoint that checks the API key and hands off to the MCP session manager."""

    def __init__(
        self,
        session_manager: StreamableHTTPSessionManager,
        api_key: str | None = None,
    ) -> None:
        self.session_manager = session_manager
        self.api_key = api_key

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self.api_key is not None:
            provided_key = Headers(scope=scope).get(API_KEY_HEADER)
            if provided_key != self.api_key:
                logger.warning("Rejected MCP request with invalid API key")
                response = JSONResponse(UNAUTHORIZED_RESPONSE, status_code=401)
                await response(scope, receive, send)
                return

        await self.session_manager.handle_request(scope, receive, send)


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(server: Server, api_key: str | None = None) -> Starlette:
    """
    Build the Starlette application for the MCP server.

    Args:
        server: Low-level MCP server with the tool handlers registered
        api_key: Key required in the X-API-KEY header, or None to accept all requests

    Returns:
        Starlette app exposing /mcp and /health
    """
    session_manager = StreamableHTTPSessionManager(app=server, stateless=True)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    return Starlette(
        routes=[
            Route(
                "/mcp",
                endpoint=McpEndpoint(session_manager, api_key),
                methods=["GET", "POST", "DELETE"],
            ),
            Route("/health", endpoint=health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )


async def serve_http(server: Server, config: McpServerConfig) -> None:
    """Run the HTTP (or HTTPS) listener until shutdown."""
    app = create_app(server, config.api_key)

    if config.api_key:
        logger.info("API key authentication enabled")
    else:
        logger.warning("No MCP_API_KEY configured - running without authentication")

    if config.https:
        https = config.https
        logger.info(
            f"HTTPS mode for {https.domain} "
            f"({'staging' if https.staging else 'production'} certificates from {https.cert_dir})"
        )
        uvicorn_config = uvicorn.Config(
            app,
            host="0.0.0.0",
            port=https.https_port,
            ssl_certfile=https.certfile,
            ssl_keyfile=https.keyfile,
            log_level="info",
        )
        logger.info(f"MCP server listening on https://{https.domain}:{https.https_port}/mcp")
    else:
        logger.info("No MCP_DOMAIN configured - running in HTTP mode")
        uvicorn_config = uvicorn.Config(
            app,
            host="0.0.0.0",
            port=config.port,
            log_level="info",
        )
        logger.info(f"MCP server listening on http://0.0.0.0:{config.port}/mcp")

    await uvicorn.Server(uvicorn_config).serve()
