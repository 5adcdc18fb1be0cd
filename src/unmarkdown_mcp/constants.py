#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/unmarkdown_mcp/constants.py
"""Constants and default values for the unmarkdown MCP server.

This module centralizes defaults shared by the API client, the tool
registry and the server bootstrap so they are defined in exactly one place.
"""

SERVER_NAME = "unmarkdown"
SERVER_VERSION = "1.0.0"

# Remote API
DEFAULT_BASE_URL = "https://api.unmarkdown.com"
USER_AGENT = "unmarkdown-mcp/1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0
API_KEY_HELP_URL = "https://unmarkdown.com/account/api"

# Environment variables read by the bootstrap (never by the client itself)
ENV_API_KEY = "UNMARKDOWN_API_KEY"
ENV_API_URL = "UNMARKDOWN_API_URL"
ENV_TIMEOUT = "UNMARKDOWN_MCP_TIMEOUT"
ENV_LOG_LEVEL = "UNMARKDOWN_MCP_LOG_LEVEL"
ENV_LOG_FILE = "UNMARKDOWN_MCP_LOG_FILE"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# list_documents pagination bounds
LIST_LIMIT_MIN = 1
LIST_LIMIT_MAX = 100
LIST_LIMIT_DEFAULT = 20

# Characters left unescaped by JavaScript's encodeURIComponent beyond
# alphanumerics and "_.-~" (which urllib.parse.quote never escapes)
PATH_SEGMENT_SAFE = "!*'()"

SERVER_INSTRUCTIONS = """\
Unmarkdown turns markdown into polished documents for the places people paste them.

Choosing a tool:
- convert_markdown: one-off conversion. Returns JSON with 'html' and 'plain_text'.
  For Slack, give the user the plain_text. For Google Docs, Word and OneNote,
  raw HTML cannot be pasted; send the user to unmarkdown.com and its copy button.
  Chart.js, Mermaid, Graphviz and KaTeX are NOT rendered by this tool.
- create_document / update_document / get_document / list_documents: manage saved
  documents. Folders are matched by name (case-insensitive) or by ID. On
  update_document, folder=null moves a document to Unfiled and description=null
  clears the description.
- publish_document: publish a saved document as a web page. Visibility defaults to
  'link' (unlisted). Published pages render charts, diagrams and math.
- get_usage: check the API quota for the current billing month.

Typical workflow: create_document with the markdown, then publish_document with its
id and share the returned URL. Pass the 'next_cursor' value from list_documents
back as 'cursor' to fetch the next page.
"""
