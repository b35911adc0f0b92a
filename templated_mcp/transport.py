"""HTTP surface of the server: scope derivation, auxiliary routes and path handling.

In HTTP mode each request carries its own credentials and filters. They are
read from the request FastMCP exposes for the current call, so concurrent
callers never share a scope.
"""

from __future__ import annotations

from fastmcp import FastMCP
from fastmcp.server.dependencies import get_http_request
from loguru import logger
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Send
from starlette.types import Scope as ASGIScope

from .schema import Scope
from .settings import Settings, get_settings
from .shard import constants as C
from .shard.enums import TransportMode

_KNOWN_PATHS = frozenset(
    {
        C.MCP_PATH,
        f"{C.MCP_PATH}/",
        C.HEALTH_PATH,
        C.OAUTH_METADATA_PATH,
        C.OPENAI_CHALLENGE_PATH,
    }
)


def request_scope(settings: Settings | None = None) -> Scope:
    """Scope of the tool call being served.

    Over HTTP it comes from the request's query parameters and bearer header,
    falling back to the environment; over stdio it is the environment scope.
    """
    settings = settings or get_settings()
    fallback = settings.default_scope()
    try:
        request = get_http_request()
    except RuntimeError:
        return fallback
    return Scope.from_request(request.query_params, request.headers, fallback=fallback)


def register_http_routes(app: FastMCP) -> None:
    """Attach the health, OAuth discovery and domain-verification routes."""

    @app.custom_route(C.HEALTH_PATH, methods=["GET"])
    async def health(_request: Request) -> Response:
        return JSONResponse({"status": "ok", "mode": TransportMode.STREAMABLE_HTTP.value})

    @app.custom_route(C.OAUTH_METADATA_PATH, methods=["GET"])
    async def oauth_metadata(_request: Request) -> Response:
        return JSONResponse(C.OAUTH_METADATA)

    @app.custom_route(C.OPENAI_CHALLENGE_PATH, methods=["GET"])
    async def openai_challenge(_request: Request) -> Response:
        token = get_settings().openai_verification_token
        if not token:
            return JSONResponse({"error": "Not configured"}, status_code=404)
        return PlainTextResponse(token)


class McpPathMiddleware:
    """ASGI middleware shaping the HTTP surface around the MCP endpoint.

    - ``/sse`` and ``/`` are served by the MCP endpoint;
    - ``OPTIONS`` is answered with an empty 200;
    - unknown paths get a JSON 404;
    - a fault inside the MCP handler becomes a JSON 500 if nothing was sent yet;
    - every response carries the Content-Security-Policy header.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: ASGIScope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        send = _with_security_headers(send)
        path = scope["path"]

        if scope["method"] == "OPTIONS":
            await Response(status_code=200)(scope, receive, send)
            return

        if path in C.MCP_PATH_ALIASES:
            scope = {**scope, "path": C.MCP_PATH, "raw_path": C.MCP_PATH.encode()}
        elif path not in _KNOWN_PATHS:
            await JSONResponse({"error": "Not found"}, status_code=404)(scope, receive, send)
            return

        if scope["path"].rstrip("/") != C.MCP_PATH:
            await self.app(scope, receive, send)
            return

        started = False

        async def tracking_send(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception:
            logger.exception("Error handling MCP request")
            if not started:
                await JSONResponse({"error": "Internal server error"}, status_code=500)(scope, receive, send)


def _with_security_headers(send: Send) -> Send:
    async def wrapped(message: Message) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            headers.append((b"content-security-policy", C.CONTENT_SECURITY_POLICY.encode()))
            message = {**message, "headers": headers}
        await send(message)

    return wrapped


def build_http_app(app: FastMCP) -> ASGIApp:
    """Stateless streamable-HTTP app with permissive CORS for browser-based clients."""
    return app.http_app(
        path=C.MCP_PATH,
        stateless_http=True,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=C.CORS_ALLOW_METHODS,
                allow_headers=C.CORS_ALLOW_HEADERS,
                expose_headers=C.CORS_EXPOSE_HEADERS,
            ),
            Middleware(McpPathMiddleware),
        ],
    )


__all__ = ["McpPathMiddleware", "build_http_app", "register_http_routes", "request_scope"]
