"""Static catalog of the tools exposed by the unmarkdown MCP server.

Every tool is a :class:`ToolDefinition` record holding its name,
description, pydantic input model, behavior hints and the handler that
performs the API call. :func:`invoke_tool` is the single entry point used
by the server: it validates the raw arguments, runs the handler and
translates the outcome into an :class:`InvocationResult`. It never raises.

Functions
---------
- get_tool_definition: Look up a tool record by name
- validate_arguments: Check raw arguments against a tool's input model
- invoke_tool: Validate, execute and wrap one tool invocation

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from unmarkdown_mcp.client import UnmarkdownClient
from unmarkdown_mcp.exceptions import ApiError, UnmarkdownMCPError, ValidationError
from unmarkdown_mcp.schemas import (
    ConvertMarkdownInput,
    CreateDocumentInput,
    GetDocumentInput,
    GetUsageInput,
    InvocationResult,
    ListDocumentsInput,
    PublishDocumentInput,
    ToolInput,
    UpdateDocumentInput,
)
from unmarkdown_mcp.tools import (
    convert_markdown_impl,
    create_document_impl,
    get_document_impl,
    get_usage_impl,
    list_documents_impl,
    publish_document_impl,
    update_document_impl,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolHints:
    """Behavior hints advertised to MCP clients. Not enforced."""

    read_only: bool
    destructive: bool
    idempotent: bool
    open_world: bool = True


@dataclass(frozen=True)
class ToolDefinition:
    """One entry of the tool catalog."""

    name: str
    title: str
    description: str
    hints: ToolHints
    input_type: type[ToolInput]
    handler: Callable[[Any, UnmarkdownClient], Any]

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema object describing the tool's arguments."""
        return self.input_type.model_json_schema()


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="convert_markdown",
        title="Convert Markdown",
        description=(
            "Convert markdown to destination-specific HTML and plain text. Returns JSON with 'html' and "
            "'plain_text' fields. For Slack, present the plain_text to the user. For Google Docs/Word/OneNote, "
            "direct users to unmarkdown.com to use the copy button (raw HTML cannot be pasted into these apps). "
            "Does not render Chart.js, Mermaid, Graphviz, or KaTeX; use publish_document for documents with "
            "diagrams or math."
        ),
        hints=ToolHints(read_only=True, destructive=False, idempotent=True),
        input_type=ConvertMarkdownInput,
        handler=convert_markdown_impl,
    ),
    ToolDefinition(
        name="create_document",
        title="Create Document",
        description="Create a new markdown document in Unmarkdown",
        hints=ToolHints(read_only=False, destructive=False, idempotent=False),
        input_type=CreateDocumentInput,
        handler=create_document_impl,
    ),
    ToolDefinition(
        name="list_documents",
        title="List Documents",
        description="List your saved documents with pagination. Optionally filter by folder name or ID.",
        hints=ToolHints(read_only=True, destructive=False, idempotent=True),
        input_type=ListDocumentsInput,
        handler=list_documents_impl,
    ),
    ToolDefinition(
        name="get_document",
        title="Get Document",
        description="Get a document by ID, including its full markdown content",
        hints=ToolHints(read_only=True, destructive=False, idempotent=True),
        input_type=GetDocumentInput,
        handler=get_document_impl,
    ),
    ToolDefinition(
        name="update_document",
        title="Update Document",
        description="Update a document's content or metadata",
        hints=ToolHints(read_only=False, destructive=False, idempotent=True),
        input_type=UpdateDocumentInput,
        handler=update_document_impl,
    ),
    ToolDefinition(
        name="publish_document",
        title="Publish Document",
        description=(
            "Publish a document to a shareable web page. Default visibility is 'link' (unlisted). Published "
            "pages render all content including Chart.js charts, Mermaid diagrams, Graphviz graphs, and KaTeX "
            "math. Email-based sharing is not available here; direct users to unmarkdown.com for that."
        ),
        hints=ToolHints(read_only=False, destructive=False, idempotent=True),
        input_type=PublishDocumentInput,
        handler=publish_document_impl,
    ),
    ToolDefinition(
        name="get_usage",
        title="Get API Usage",
        description="Check your API usage quota for the current billing month",
        hints=ToolHints(read_only=True, destructive=False, idempotent=True),
        input_type=GetUsageInput,
        handler=get_usage_impl,
    ),
)

TOOL_REGISTRY: dict[str, ToolDefinition] = {definition.name: definition for definition in TOOL_DEFINITIONS}


def get_tool_definition(name: str) -> ToolDefinition:
    """Return the tool record registered under ``name``.

    Raises
    ------
    KeyError
        If no tool has that name

    """
    try:
        return TOOL_REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown tool: {name}") from None


def _describe_validation_error(error: PydanticValidationError) -> str:
    problems = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"])
        problems.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(problems)


def validate_arguments(definition: ToolDefinition, arguments: Mapping[str, Any] | None) -> ToolInput:
    """Validate raw arguments and build the tool's input model.

    Parameters
    ----------
    definition : ToolDefinition
        Tool whose input model applies
    arguments : Mapping[str, Any] | None
        Arguments as received from the MCP client

    Returns
    -------
    ToolInput
        ``definition.input_type`` populated with the supplied values

    Raises
    ------
    ValidationError
        If an argument is unknown, a required argument is missing or null,
        or a value fails its field's type, choice or bound checks

    """
    if arguments is None:
        arguments = {}
    if isinstance(arguments, Mapping):
        arguments = dict(arguments)

    try:
        return definition.input_type.model_validate(arguments)
    except PydanticValidationError as e:
        first = e.errors(include_url=False)[0]
        raise ValidationError(
            f"Invalid arguments for {definition.name}: {_describe_validation_error(e)}",
            parameter_name=".".join(str(part) for part in first["loc"]) or None,
            parameter_value=first.get("input"),
        ) from e


def invoke_tool(name: str, arguments: Mapping[str, Any] | None, client: UnmarkdownClient) -> InvocationResult:
    """Run one tool invocation end to end.

    Validation happens before any network activity. Whatever happens, the
    outcome is returned as an :class:`InvocationResult`; no exception
    escapes this function.

    Parameters
    ----------
    name : str
        Tool name
    arguments : Mapping[str, Any] | None
        Raw arguments from the MCP client
    client : UnmarkdownClient
        Shared API client

    Returns
    -------
    InvocationResult
        Success with the raw payload, or failure with rendered error text

    """
    try:
        definition = get_tool_definition(name)
    except KeyError as e:
        logger.warning(f"Rejected call to unknown tool {name!r}")
        return InvocationResult.failure(f"Error: {e.args[0]}")

    try:
        input_data = validate_arguments(definition, arguments)
        payload = definition.handler(input_data, client)
    except ApiError as e:
        return InvocationResult.failure(str(e))
    except ValidationError as e:
        logger.info(f"Rejected {name} call: {e.message}")
        return InvocationResult.failure(f"Error: {e.message}")
    except UnmarkdownMCPError as e:
        logger.error(f"{name} failed: {e.message}")
        return InvocationResult.failure(f"Error: {e.message}")
    except Exception as e:
        logger.error(f"Unexpected error in {name}: {e}", exc_info=True)
        return InvocationResult.failure(f"Error: {e}")

    logger.info(f"{name} succeeded")
    return InvocationResult.success(payload)


__all__ = [
    "ToolHints",
    "ToolDefinition",
    "TOOL_DEFINITIONS",
    "TOOL_REGISTRY",
    "get_tool_definition",
    "validate_arguments",
    "invoke_tool",
]
