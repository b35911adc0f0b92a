from __future__ import annotations

import argparse
import os
import sys
from typing import Any

import uvicorn
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import Tool, ToolResult
from loguru import logger
from mcp.types import TextContent, ToolAnnotations

from .client import TemplatedClient
from .dispatcher import ToolDispatcher
from .schema import ToolDefinition
from .settings import Settings, get_settings
from .shard import constants as C
from .shard.enums import TransportMode
from .shard.instructions import SERVER_INSTRUCTIONS
from .transport import build_http_app, register_http_routes, request_scope
from .utils.logging import configure_logging

app = FastMCP("templated-mcp", instructions=SERVER_INSTRUCTIONS)
dispatcher = ToolDispatcher(TemplatedClient.from_settings(get_settings()))


class TemplatedTool(Tool):
    """FastMCP tool backed by a registry entry.

    Arguments are passed through untouched; the dispatcher validates them
    against the declared schema and runs the handler under the request scope.
    """

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        outcome = await dispatcher.call(self.name, arguments, request_scope())
        if outcome.isError:
            # FastMCP reports ToolError as an isError result carrying this text.
            raise ToolError(outcome.text)
        return ToolResult(content=[TextContent(type="text", text=outcome.text)])

    @classmethod
    def from_definition(cls, definition: ToolDefinition) -> TemplatedTool:
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            annotations=ToolAnnotations(**definition.annotations),
        )


class ScopedToolListing(Middleware):
    """Filters and relabels the advertised tools for the caller's scope."""

    async def on_list_tools(self, context: MiddlewareContext, call_next: Any) -> Any:
        tools = await call_next(context)
        visible = {definition.name: definition for definition in dispatcher.list_tools(request_scope())}
        return [tool.model_copy(update={"description": visible[tool.name].description}) for tool in tools if tool.name in visible]


for _definition in dispatcher.registry.values():
    app.add_tool(TemplatedTool.from_definition(_definition))

app.add_middleware(ScopedToolListing())
register_http_routes(app)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of the environment."""
    overrides = {
        "PORT": args.port,
        "HOST": args.host,
        "TEMPLATED_FOLDER_ID": args.folder_id,
        "TEMPLATED_EXTERNAL_ID": args.external_id,
        "LOG_LEVEL": args.log_level,
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[key] = str(value)
    get_settings.cache_clear()
    return get_settings()


def run(settings: Settings) -> None:
    if settings.use_http:
        logger.info(f"Starting Templated MCP server on http://{settings.host}:{settings.port} with {TransportMode.STREAMABLE_HTTP} transport")
        logger.info(f"MCP endpoint: http://{settings.host}:{settings.port}{C.MCP_PATH}?apiKey=YOUR_API_KEY")
        uvicorn.run(build_http_app(app), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    else:
        logger.info(f"Starting Templated MCP server with {TransportMode.STDIO} transport")
        app.run()


def main() -> None:
    parser = argparse.ArgumentParser(description="Templated MCP Server")
    parser.add_argument("--port", type=int, help="Port to listen on; serves streamable HTTP when set. Default: stdio")
    parser.add_argument("--host", help="Host to bind to in HTTP mode")
    parser.add_argument("--folder-id", help="Restrict template operations to this folder")
    parser.add_argument("--external-id", help="Restrict template operations to this external ID")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    settings = _settings_from_args(args)
    configure_logging(settings.log_level)

    try:
        run(settings)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
