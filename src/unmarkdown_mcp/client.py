"""HTTP client for the Unmarkdown REST API.

This module wraps a single ``httpx.Client`` and turns a
``(method, path, body, query)`` tuple into exactly one HTTP round trip.
Non-2xx responses are normalized into :class:`ApiError`; network faults,
timeouts and malformed success bodies become :class:`TransportError`.

Classes
-------
- UnmarkdownClient: Authenticated client bound to one base URL and API key

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/unmarkdown_mcp/client.py

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from unmarkdown_mcp.constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, USER_AGENT
from unmarkdown_mcp.exceptions import ApiError, TransportError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST", "PATCH", "DELETE")


def _extract_error_details(data: Any, status: int) -> tuple[str, str]:
    """Pull ``error.code`` and ``error.message`` out of an error payload.

    Parameters
    ----------
    data : Any
        Parsed response body, or None when the body was not valid JSON
    status : int
        HTTP status code, used for the fallback message

    Returns
    -------
    tuple[str, str]
        Error code (``"unknown"`` if absent) and message
        (``"API returned <status>"`` if absent)

    """
    code = "unknown"
    message = f"API returned {status}"

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        if error.get("code") is not None:
            code = str(error["code"])
        if error.get("message") is not None:
            message = str(error["message"])

    return code, message


class UnmarkdownClient:
    """Authenticated client for the Unmarkdown API.

    The base URL and API key are fixed at construction time and never
    mutated, so one instance can be shared by concurrent tool invocations.

    Parameters
    ----------
    api_key : str
        Bearer token sent with every request
    base_url : str | None, default None
        API root; trailing slashes are stripped. Defaults to
        ``https://api.unmarkdown.com``.
    timeout : float, default 30.0
        Per-request timeout in seconds
    transport : httpx.BaseTransport | None, default None
        Optional transport override (e.g. ``httpx.MockTransport`` in tests)

    Raises
    ------
    ValueError
        If the API key is empty or the base URL is empty after stripping

    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("API key must not be empty")

        normalized = (base_url or DEFAULT_BASE_URL).rstrip("/")
        if not normalized:
            raise ValueError(f"Invalid base URL: {base_url!r}")

        self._api_key = api_key
        self._base_url = normalized
        self._timeout = timeout
        self._http = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "User-Agent": USER_AGENT,
            },
        )

    @property
    def base_url(self) -> str:
        """API root without a trailing slash."""
        return self._base_url

    def __repr__(self) -> str:
        return f"UnmarkdownClient(base_url={self._base_url!r})"

    def build_url(self, path: str, query: Mapping[str, str] | None = None) -> str:
        """Join the base URL, an API path and an optional query string."""
        url = f"{self._base_url}{path}"
        if query:
            url += f"?{urlencode(query)}"
        return url

    def request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, str] | None = None,
    ) -> Any:
        """Send one request to the API and return its parsed JSON payload.

        Parameters
        ----------
        method : str
            HTTP method (GET, POST, PATCH or DELETE)
        path : str
            API path beginning with ``/``
        body : Mapping[str, Any] | None, default None
            JSON body; when given, it is serialized and sent with a JSON
            content type
        query : Mapping[str, str] | None, default None
            Query parameters appended to the URL

        Returns
        -------
        Any
            Parsed JSON payload of a 2xx response, untyped

        Raises
        ------
        ApiError
            If the API responds with a non-2xx status
        TransportError
            If the request fails at the network level, times out, or a
            successful response body is not valid JSON
        ValueError
            If the method or path is malformed

        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method!r}")
        if not path.startswith("/"):
            raise ValueError(f"API path must start with '/': {path!r}")

        url = self.build_url(path, query)
        headers: dict[str, str] = {}
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        logger.debug(f"{method} {url}")

        try:
            response = self._http.request(method, url, content=content, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out after {self._timeout:g}s: {method} {path}", e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", e) from e

        try:
            data = response.json()
        except ValueError as e:
            if response.is_success:
                raise TransportError(f"Invalid JSON in response from {method} {path}", e) from e
            data = None

        if not response.is_success:
            code, message = _extract_error_details(data, response.status_code)
            logger.warning(f"{method} {path} returned {response.status_code} ({code})")
            raise ApiError(response.status_code, code, message)

        return data

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "UnmarkdownClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "UnmarkdownClient",
]
