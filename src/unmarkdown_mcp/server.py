"""FastMCP server for the Unmarkdown document API.

This module adapts every record of the tool registry to a FastMCP tool and
runs the server over the stdio transport. Argument validation, the API
call and result translation all happen in :func:`invoke_tool`; this layer
only bridges it to the MCP protocol (text content plus the error flag).

Functions
---------
- create_server: Build a FastMCP server bound to one API client
- main: Server entry point (for CLI)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import asyncio
import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import ConfigDict, Field

from unmarkdown_mcp.client import UnmarkdownClient
from unmarkdown_mcp.config import ServerConfig, load_config
from unmarkdown_mcp.constants import SERVER_INSTRUCTIONS, SERVER_NAME, SERVER_VERSION
from unmarkdown_mcp.logging_utils import configure_logging
from unmarkdown_mcp.registry import TOOL_DEFINITIONS, ToolDefinition, invoke_tool

logger = logging.getLogger(__name__)


class RegistryTool(Tool):
    """FastMCP tool backed by one :class:`ToolDefinition`.

    The raw argument mapping is handed to the registry untouched, which
    keeps an explicit ``null`` distinguishable from an omitted argument.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: UnmarkdownClient = Field(exclude=True)

    @classmethod
    def from_definition(cls, definition: ToolDefinition, client: UnmarkdownClient) -> "RegistryTool":
        """Build the FastMCP tool for a registry record."""
        hints = definition.hints
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            annotations=ToolAnnotations(
                title=definition.title,
                readOnlyHint=hints.read_only,
                destructiveHint=hints.destructive,
                idempotentHint=hints.idempotent,
                openWorldHint=hints.open_world,
            ),
            client=client,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        # The HTTP call blocks, so keep it off the event loop
        result = await asyncio.to_thread(invoke_tool, self.name, arguments, self.client)
        if not result.ok:
            raise ToolError(result.rendered_as)
        return ToolResult(content=[TextContent(type="text", text=result.rendered_as)])


def create_server(config: ServerConfig, client: UnmarkdownClient) -> FastMCP:
    """Create and configure the FastMCP server with all registry tools.

    Parameters
    ----------
    config : ServerConfig
        Server configuration
    client : UnmarkdownClient
        API client shared by every tool invocation

    Returns
    -------
    FastMCP
        Configured MCP server instance

    """
    mcp: FastMCP = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=SERVER_VERSION)

    for definition in TOOL_DEFINITIONS:
        mcp.add_tool(RegistryTool.from_definition(definition, client))
        logger.debug(f"Registered tool: {definition.name}")

    logger.info(f"Registered {len(TOOL_DEFINITIONS)} tools against {config.base_url}")
    return mcp


def main(argv: list[str] | None = None) -> int:
    """Run the unmarkdown-mcp server."""
    try:
        # Configure logging with default level first (will be reconfigured if needed)
        configure_logging("INFO")

        try:
            config = load_config(argv)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if config.log_level != "INFO" or config.log_file:
            configure_logging(config.log_level, config.log_file)

        logger.info("Starting unmarkdown MCP server")
        logger.info(f"API base URL: {config.base_url} (timeout {config.timeout:g}s)")

        with UnmarkdownClient(config.api_key or "", config.base_url, timeout=config.timeout) as client:
            mcp = create_server(config, client)
            logger.info("Server ready, listening on stdio")
            mcp.run()  # Run with default stdio transport

    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Fatal error: {e!r}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
