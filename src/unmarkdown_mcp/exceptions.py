#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the unmarkdown MCP server.

Exception Hierarchy
-------------------
- UnmarkdownMCPError (base exception)

  - ValidationError (tool arguments fail the declared schema)

  - ApiError (remote service answered with a non-2xx status)

  - TransportError (network failures, timeouts, malformed response bodies)

Tool handlers convert every one of these into a failed invocation result;
none of them is fatal to the server process.

"""

from typing import Any


class UnmarkdownMCPError(Exception):
    """Base exception class for all unmarkdown-mcp errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(UnmarkdownMCPError):
    """Exception raised when tool arguments do not match the tool's schema.

    Raised before any network activity takes place.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ApiError(UnmarkdownMCPError):
    """Exception raised when the Unmarkdown API returns a non-2xx response.

    Parameters
    ----------
    status : int
        HTTP status code of the response
    code : str
        Machine-readable error code from the response body (``"unknown"``
        when the body carries none)
    message : str
        Human-readable error message from the response body

    """

    def __init__(self, status: int, code: str, message: str):
        """Initialize the API error with status, code and message."""
        super().__init__(message)
        self.status = status
        self.code = code

    def __str__(self) -> str:
        return f"Error {self.status} ({self.code}): {self.message}"


class TransportError(UnmarkdownMCPError):
    """Exception raised when a request cannot complete at the transport level.

    Covers connection failures, timeouts and response bodies that are not
    valid JSON on an otherwise successful response.
    """


__all__ = [
    "UnmarkdownMCPError",
    "ValidationError",
    "ApiError",
    "TransportError",
]
