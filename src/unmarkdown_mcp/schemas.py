"""Tool input/output schemas for the unmarkdown MCP server.

This module defines one pydantic input model per tool plus the uniform
:class:`InvocationResult` envelope every tool returns. The models drive
both the JSON Schema advertised to MCP clients and the validation of
incoming arguments. Arguments are forwarded to the API only when the
caller supplied them, which pydantic tracks in ``model_fields_set``; an
explicit ``null`` is kept only for the fields listed in
``NULLABLE_FIELDS`` and otherwise counts as an omitted argument.

Classes
-------
- ToolInput: Base model shared by every tool input
- ConvertMarkdownInput: Input schema for convert_markdown
- CreateDocumentInput: Input schema for create_document
- ListDocumentsInput: Input schema for list_documents
- GetDocumentInput: Input schema for get_document
- UpdateDocumentInput: Input schema for update_document
- PublishDocumentInput: Input schema for publish_document
- GetUsageInput: Input schema for get_usage (no parameters)
- InvocationResult: Result envelope returned for every invocation

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import json
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from unmarkdown_mcp.constants import LIST_LIMIT_DEFAULT, LIST_LIMIT_MAX, LIST_LIMIT_MIN

# Type aliases for better readability
Destination = Literal[
    "google-docs",
    "word",
    "slack",
    "onenote",
    "email",
    "plain-text",
    "generic",
    "html",
]

ThemeMode = Literal["light", "dark"]

PageWidth = Literal["full", "wide", "standard"]

Visibility = Literal["public", "link"]

DocumentId = Annotated[str, Field(description="Document UUID")]
TemplateId = Annotated[str | None, Field(description='Visual template ID (default: "swiss")')]
PageWidthChoice = Annotated[PageWidth | None, Field(description="Page width for published view")]
ListLimit = Annotated[int, Field(ge=LIST_LIMIT_MIN, le=LIST_LIMIT_MAX)]


class ToolInput(BaseModel):
    """Base model for tool arguments.

    Unknown argument names are rejected. A ``null`` sent for a field not
    named in ``NULLABLE_FIELDS`` is discarded before validation, so the
    field counts as omitted (or missing, when it is required).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _discard_null_arguments(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            name: value
            for name, value in data.items()
            if value is not None or name not in cls.model_fields or name in cls.NULLABLE_FIELDS
        }

    def supplied(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """Return the arguments the caller supplied, in declaration order."""
        return self.model_dump(exclude_unset=True, exclude=exclude)


class ConvertMarkdownInput(ToolInput):
    """Input schema for convert_markdown."""

    markdown: Annotated[str, Field(description="Markdown content to convert")]
    destination: Annotated[Destination | None, Field(description='Target format (default: "generic")')] = None
    template_id: TemplateId = None
    theme_mode: Annotated[ThemeMode | None, Field(description='Color theme (default: "light")')] = None


class CreateDocumentInput(ToolInput):
    """Input schema for create_document. Every field is optional."""

    title: Annotated[str | None, Field(description="Document title")] = None
    content: Annotated[str | None, Field(description="Markdown content (default: empty)")] = None
    folder: Annotated[
        str | None, Field(description="Folder name (case-insensitive) or folder ID to place the document in")
    ] = None
    template_id: TemplateId = None
    theme_mode: Annotated[ThemeMode | None, Field(description='Color theme (default: "light")')] = None


class ListDocumentsInput(ToolInput):
    """Input schema for list_documents.

    Attributes
    ----------
    folder : str | None
        Folder name (case-insensitive) or folder ID to filter by
    limit : int | None
        Page size between 1 and 100; the API defaults to 20
    cursor : str | None
        Opaque pagination cursor from a previous response

    """

    folder: Annotated[
        str | None, Field(description="Optional. Filter by folder name (case-insensitive) or folder ID.")
    ] = None
    limit: ListLimit | None = Field(
        None,
        description=f"Max results per page (default: {LIST_LIMIT_DEFAULT}, max: {LIST_LIMIT_MAX})",
    )
    cursor: Annotated[str | None, Field(description="Pagination cursor from a previous response")] = None


class GetDocumentInput(ToolInput):
    """Input schema for get_document."""

    id: DocumentId


class UpdateDocumentInput(ToolInput):
    """Input schema for update_document.

    Attributes
    ----------
    id : str
        Document UUID (required)
    title, content, template_id : str | None
        Replacement values
    folder : str | None
        Target folder by name or ID; an explicit ``None`` moves the
        document to Unfiled
    theme_mode : ThemeMode | None
        New color theme
    description : str | None
        Document description; an explicit ``None`` clears it
    page_width : PageWidth | None
        Page width for the published view

    """

    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"folder", "description"})

    id: DocumentId
    title: Annotated[str | None, Field(description="New title")] = None
    content: Annotated[str | None, Field(description="New markdown content")] = None
    folder: Annotated[
        str | None,
        Field(description="Move to folder by name (case-insensitive) or folder ID. Set to null to move to Unfiled."),
    ] = None
    template_id: Annotated[str | None, Field(description="New template ID")] = None
    theme_mode: Annotated[ThemeMode | None, Field(description="New color theme")] = None
    description: Annotated[str | None, Field(description="Document description (null to clear)")] = None
    page_width: PageWidthChoice = None


class PublishDocumentInput(ToolInput):
    """Input schema for publish_document.

    Attributes
    ----------
    id : str
        Document UUID (required)
    slug : str | None
        Custom URL slug; generated by the API when omitted
    description : str | None
        SEO description for the published page
    visibility : Visibility | None
        "public" or "link"; the API defaults to "link" (unlisted)
    page_width : PageWidth | None
        Page width for the published view

    """

    id: DocumentId
    slug: Annotated[str | None, Field(description="Custom URL slug (auto-generated if omitted)")] = None
    description: Annotated[str | None, Field(description="SEO description for published page")] = None
    visibility: Annotated[Visibility | None, Field(description='"public" or "link" (default, unlisted)')] = None
    page_width: PageWidthChoice = None


class GetUsageInput(ToolInput):
    """Input schema for get_usage, which takes no parameters."""


@dataclass(frozen=True)
class InvocationResult:
    """Result envelope returned for every tool invocation.

    Exactly one of two shapes is produced: a success carrying the raw API
    payload and its pretty-printed rendering, or a failure carrying only a
    one-line human-readable message.

    Attributes
    ----------
    ok : bool
        Whether the invocation succeeded
    rendered_as : str
        Text shown to the caller: indented JSON on success, an error line
        on failure
    payload : Any
        Raw JSON payload from the API (success only)

    """

    ok: bool
    rendered_as: str
    payload: Any = None

    @classmethod
    def success(cls, payload: Any) -> "InvocationResult":
        """Wrap an API payload, rendering it as indented JSON."""
        return cls(ok=True, rendered_as=json.dumps(payload, indent=2, ensure_ascii=False), payload=payload)

    @classmethod
    def failure(cls, message: str) -> "InvocationResult":
        """Build a failed result carrying only the rendered error text."""
        return cls(ok=False, rendered_as=message)

    def to_dict(self) -> dict[str, Any]:
        """Return the envelope as a plain mapping in its exact wire shape."""
        if self.ok:
            return {"ok": True, "payload": self.payload, "rendered_as": self.rendered_as}
        return {"ok": False, "rendered_as": self.rendered_as}
