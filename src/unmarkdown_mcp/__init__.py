"""MCP server for the Unmarkdown document API.

This package provides a Model Context Protocol (MCP) server that exposes
the Unmarkdown REST API (markdown conversion, document storage and
publishing) to LLMs as tools.

The server runs over stdio transport and provides seven tools:
- convert_markdown: Convert markdown for a destination app
- create_document, list_documents, get_document, update_document: Manage documents
- publish_document: Publish a document to a shareable web page
- get_usage: Check the API quota

Usage
-----
Run the server from command line:
    $ export UNMARKDOWN_API_KEY="um_..."
    $ unmarkdown-mcp

With configuration:
    $ unmarkdown-mcp --api-url https://api.unmarkdown.com --timeout 60

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from unmarkdown_mcp.client import UnmarkdownClient
from unmarkdown_mcp.config import ServerConfig
from unmarkdown_mcp.exceptions import ApiError, TransportError, UnmarkdownMCPError, ValidationError
from unmarkdown_mcp.registry import TOOL_REGISTRY, invoke_tool
from unmarkdown_mcp.schemas import InvocationResult
from unmarkdown_mcp.server import main

__all__ = [
    "main",
    "ServerConfig",
    "UnmarkdownClient",
    "InvocationResult",
    "TOOL_REGISTRY",
    "invoke_tool",
    "UnmarkdownMCPError",
    "ValidationError",
    "ApiError",
    "TransportError",
]

