from __future__ import annotations

import asyncio
import logging
import sys
from typing import List

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from . import __version__
from .dispatcher import BridgeContext, RequestDispatcher
from .errors import ErrorKind, ToolCallError
from .runtime.executor import ProcessExecutor
from .schemas.tool import ToolCall
from .settings import Settings, load_settings
from .tools import default_registry

log = logging.getLogger(__name__)

SERVER_NAME = "julia-runner"

_ERROR_CODES = {
    ErrorKind.INVALID_PARAMS: types.INVALID_PARAMS,
    ErrorKind.METHOD_NOT_FOUND: types.METHOD_NOT_FOUND,
}


def build_context(settings: Settings) -> BridgeContext:
    executor = ProcessExecutor(
        binary=settings.julia_bin,
        timeout_s=settings.timeout_s,
        max_concurrency=settings.max_concurrency,
    )
    return BridgeContext(registry=default_registry(), executor=executor, project_dir=settings.project_dir)


def build_server(dispatcher: RequestDispatcher) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=d.name, description=d.description, inputSchema=d.input_schema)
            for d in dispatcher.list_tools()
        ]

    # Registered directly so that McpError reaches the client as a JSON-RPC
    # error; the call_tool() decorator would fold it into an isError result.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        call = ToolCall(name=req.params.name, arguments=req.params.arguments or {})
        try:
            resp = await dispatcher.handle(call)
        except ToolCallError as e:
            raise McpError(types.ErrorData(code=_ERROR_CODES[e.kind], message=e.message)) from e
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=c.text) for c in resp.content],
                isError=resp.is_error,
            )
        )

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(settings: Settings) -> None:
    server = build_server(RequestDispatcher(build_context(settings)))
    async with stdio_server() as (read_stream, write_stream):
        log.info("Julia Runner MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    settings = load_settings()
    # stdout carries the protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    log.debug("Project dir: %s, binary: %s", settings.project_dir, settings.julia_bin)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
