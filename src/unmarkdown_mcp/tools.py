"""Tool implementations for the unmarkdown MCP server.

Each ``*_impl`` function maps a validated input dataclass to exactly one
:meth:`UnmarkdownClient.request` call and returns the raw JSON payload.
Optional arguments are forwarded only when the caller supplied them.
Errors propagate to the registry, which turns them into failed
invocation results.

Functions
---------
- convert_markdown_impl: POST /v1/convert
- create_document_impl: POST /v1/documents
- list_documents_impl: GET /v1/documents
- get_document_impl: GET /v1/documents/{id}
- update_document_impl: PATCH /v1/documents/{id}
- publish_document_impl: POST /v1/documents/{id}/publish
- get_usage_impl: GET /v1/usage

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
from typing import Any
from urllib.parse import quote

from unmarkdown_mcp.client import UnmarkdownClient
from unmarkdown_mcp.constants import PATH_SEGMENT_SAFE
from unmarkdown_mcp.schemas import (
    ConvertMarkdownInput,
    CreateDocumentInput,
    GetDocumentInput,
    GetUsageInput,
    ListDocumentsInput,
    PublishDocumentInput,
    UpdateDocumentInput,
)

logger = logging.getLogger(__name__)


def encode_path_segment(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment.

    Matches JavaScript's ``encodeURIComponent``: ``/`` and every other
    reserved character are escaped.

    >>> encode_path_segment("abc/def")
    'abc%2Fdef'

    """
    return quote(value, safe=PATH_SEGMENT_SAFE)


def _document_path(document_id: str, suffix: str = "") -> str:
    return f"/v1/documents/{encode_path_segment(document_id)}{suffix}"


def convert_markdown_impl(input_data: ConvertMarkdownInput, client: UnmarkdownClient) -> Any:
    """Convert markdown to destination-specific HTML and plain text."""
    return client.request("POST", "/v1/convert", input_data.supplied())


def create_document_impl(input_data: CreateDocumentInput, client: UnmarkdownClient) -> Any:
    """Create a new document; an empty body lets the API apply its defaults."""
    return client.request("POST", "/v1/documents", input_data.supplied())


def list_documents_impl(input_data: ListDocumentsInput, client: UnmarkdownClient) -> Any:
    """List saved documents, one page at a time.

    The query string carries only the supplied filters; ``limit`` is sent
    as its decimal string form.
    """
    query = {name: str(value) for name, value in input_data.supplied().items()}
    return client.request("GET", "/v1/documents", query=query)


def get_document_impl(input_data: GetDocumentInput, client: UnmarkdownClient) -> Any:
    """Fetch one document including its full markdown content."""
    return client.request("GET", _document_path(input_data.id))


def update_document_impl(input_data: UpdateDocumentInput, client: UnmarkdownClient) -> Any:
    """Patch a document's content or metadata.

    ``folder`` and ``description`` may be ``None``; the explicit null is
    sent so the API unfiles the document or clears its description.
    """
    body = input_data.supplied(exclude={"id"})
    if not body:
        logger.info(f"update_document called for {input_data.id!r} with no fields to change")
    return client.request("PATCH", _document_path(input_data.id), body)


def publish_document_impl(input_data: PublishDocumentInput, client: UnmarkdownClient) -> Any:
    """Publish a document to a shareable web page."""
    body = input_data.supplied(exclude={"id"})
    return client.request("POST", _document_path(input_data.id, "/publish"), body)


def get_usage_impl(input_data: GetUsageInput, client: UnmarkdownClient) -> Any:
    """Report API usage for the current billing month."""
    return client.request("GET", "/v1/usage")


__all__ = [
    "encode_path_segment",
    "convert_markdown_impl",
    "create_document_impl",
    "list_documents_impl",
    "get_document_impl",
    "update_document_impl",
    "publish_document_impl",
    "get_usage_impl",
]
