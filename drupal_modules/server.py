"""MCP server exposing the ``get_module_info`` tool over stdio.

Tools
-----
    get_module_info    {"module_name": "views"}  → module record as JSON text

Errors
------
Failures are raised as :class:`~mcp.shared.exceptions.McpError`:

    INVALID_PARAMS     module_name missing or empty (no request is made)
    METHOD_NOT_FOUND   any other tool name
    INTERNAL_ERROR     drupal.org could not be fetched

Anything else propagates unchanged.  The session sends McpError as a JSON-RPC
error carrying its code.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from drupal_modules import __version__
from drupal_modules.log import get_logger, setup_logging
from drupal_modules.pipeline import fetch_module_info, render_record
from drupal_modules.scraper.fetcher import ModuleFetchError

logger = get_logger(__name__)

SERVER_NAME = "drupal-modules-mcp"
TOOL_NAME = "get_module_info"

MODULE_INFO_TOOL = types.Tool(
    name=TOOL_NAME,
    description="Get information about a Drupal module from drupal.org",
    inputSchema={
        "type": "object",
        "properties": {
            "module_name": {
                "type": "string",
                "description": "Machine name of the Drupal module",
            },
        },
        "required": ["module_name"],
    },
)


def _error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

async def list_tools() -> list[types.Tool]:
    return [MODULE_INFO_TOOL]


async def call_tool(
    name: str, arguments: Optional[dict[str, Any]]
) -> list[types.TextContent]:
    """Dispatch a tool call to the lookup pipeline.

    Returns a single text block holding the record as indented JSON.
    """
    if name != TOOL_NAME:
        raise _error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")

    module_name = (arguments or {}).get("module_name")
    if not module_name:
        raise _error(types.INVALID_PARAMS, "Module name is required")

    try:
        record = await fetch_module_info(module_name)
    except ModuleFetchError as exc:
        logger.error("get_module_info(%r) failed: %s", module_name, exc)
        raise _error(
            types.INTERNAL_ERROR, f"Failed to fetch module info: {exc}"
        ) from exc

    return [types.TextContent(type="text", text=render_record(record))]


# ---------------------------------------------------------------------------
# Server factory & entry-point
# ---------------------------------------------------------------------------

async def _handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
    # Registered without the SDK decorator, which would fold McpError into an
    # isError result and drop its code.
    content = await call_tool(req.params.name, req.params.arguments)
    return types.ServerResult(types.CallToolResult(content=content, isError=False))


def create_server() -> Server:
    """Return an MCP server with the module lookup tool registered."""
    server: Server = Server(SERVER_NAME, version=__version__)
    server.list_tools()(list_tools)
    server.request_handlers[types.CallToolRequest] = _handle_call_tool
    return server


async def serve() -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    server = create_server()
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Drupal Modules MCP server running on stdio")
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def main(log_level: Optional[str] = None) -> None:
    """Console-script entry-point.  SIGINT closes the transport and exits 0."""
    setup_logging(log_level)
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
