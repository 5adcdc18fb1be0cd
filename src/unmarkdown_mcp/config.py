"""Configuration management for the unmarkdown MCP server.

This module resolves the server settings from environment variables and
CLI arguments, with CLI arguments taking precedence over environment
variables. The API key is read from the environment only so it never
appears in process listings.

All configuration is resolved once at startup; the tool layer receives a
ready-made client and never reads the environment itself.

Classes
-------
- ServerConfig: Immutable server configuration

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
from dataclasses import dataclass, replace
from importlib.metadata import version
from typing import Any
from urllib.parse import urlparse

from unmarkdown_mcp.constants import (
    API_KEY_HELP_URL,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT,
    VALID_LOG_LEVELS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
    """MCP server configuration.

    All settings are immutable after server startup.

    Attributes
    ----------
    api_key : str | None
        Unmarkdown API key, sent as a bearer token. Required.
    base_url : str
        API root (default: https://api.unmarkdown.com). Trailing slashes
        are stripped.
    timeout : float
        Per-request timeout in seconds (default: 30.0)
    log_level : str
        Logging level (DEBUG|INFO|WARNING|ERROR|CRITICAL)
    log_file : str | None
        Optional file that receives a copy of the log output

    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return (
            f"ServerConfig(api_key={masked!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, log_level={self.log_level!r}, log_file={self.log_file!r})"
        )

    def create_updated(self, **kwargs: Any) -> "ServerConfig":
        """Create a new configuration with updated field values."""
        return replace(self, **kwargs)

    def validate(self) -> None:
        """Validate configuration consistency.

        Raises
        ------
        ValueError
            If the API key is missing, the base URL is not an http(s) URL,
            or the timeout is not positive

        """
        if not self.api_key:
            raise ValueError(f"{ENV_API_KEY} environment variable is required.\nGet your API key at {API_KEY_HELP_URL}")

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid API URL: {self.base_url!r}. Must be an http(s) URL")

        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout: {self.timeout}. Must be greater than 0")


def _validate_log_level(value: str | None, default: str = "INFO") -> str:
    """Validate and normalize log level string.

    Parameters
    ----------
    value : str | None
        Log level string
    default : str, default "INFO"
        Default value if input is None

    Returns
    -------
    str
        Validated and uppercase log level

    Raises
    ------
    ValueError
        If value is not a valid log level

    """
    if value is None:
        return default

    normalized = value.upper().strip()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value!r}. " f"Must be one of: {', '.join(VALID_LOG_LEVELS)}")

    return normalized


def _parse_timeout(value: str | None, default: float = DEFAULT_TIMEOUT_SECONDS) -> float:
    """Parse a timeout in seconds from an environment string.

    Raises
    ------
    ValueError
        If value is not a number

    """
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid timeout: {value!r}. Must be a number of seconds") from None


def load_config_from_env() -> ServerConfig:
    """Load configuration from environment variables.

    Returns
    -------
    ServerConfig
        Configuration loaded from environment

    """
    return ServerConfig(
        api_key=os.getenv(ENV_API_KEY) or None,
        base_url=os.getenv(ENV_API_URL) or DEFAULT_BASE_URL,
        timeout=_parse_timeout(os.getenv(ENV_TIMEOUT)),
        log_level=_validate_log_level(os.getenv(ENV_LOG_LEVEL), default="INFO"),
        log_file=os.getenv(ENV_LOG_FILE) or None,
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for the MCP server CLI.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser

    """
    parser = argparse.ArgumentParser(
        prog="unmarkdown-mcp",
        description="MCP server exposing the Unmarkdown document API as tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment Variables:
  {ENV_API_KEY}           API key (required). Get one at {API_KEY_HELP_URL}
  {ENV_API_URL}           API base URL (default: {DEFAULT_BASE_URL})
  {ENV_TIMEOUT}       Request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g})
  {ENV_LOG_LEVEL}     Logging level (default: INFO)
  {ENV_LOG_FILE}      Also write logs to this file

Examples:
  # Basic usage
  {ENV_API_KEY}=um_... unmarkdown-mcp

  # Against a staging API with verbose logging
  unmarkdown-mcp --api-url https://staging.api.unmarkdown.com --log-level DEBUG
        """,
    )

    try:
        version_string = f'unmarkdown-mcp {version("unmarkdown-mcp")}'
    except Exception:
        version_string = "unmarkdown-mcp (version unknown)"

    parser.add_argument("--version", action="version", version=version_string)

    parser.add_argument("--api-url", type=str, metavar="URL", help=f"API base URL (default: {DEFAULT_BASE_URL})")

    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g})",
    )

    parser.add_argument(
        "--log-level", type=str, help="Logging level: DEBUG, INFO, WARNING, ERROR (case-insensitive, default: INFO)"
    )

    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write logs to this file")

    return parser


def load_config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Load configuration from parsed CLI arguments, using env as fallback.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments

    Returns
    -------
    ServerConfig
        Merged configuration (CLI overrides env)

    """
    config = load_config_from_env()

    updated_kwargs: dict[str, Any] = {}

    if args.api_url is not None:
        updated_kwargs.update(base_url=args.api_url)

    if args.timeout is not None:
        updated_kwargs.update(timeout=args.timeout)

    if args.log_level is not None:
        updated_kwargs.update(log_level=_validate_log_level(args.log_level))

    if args.log_file is not None:
        updated_kwargs.update(log_file=args.log_file)

    if updated_kwargs:
        config = config.create_updated(**updated_kwargs)

    return config


def load_config(argv: list[str] | None = None) -> ServerConfig:
    """Load and validate configuration from CLI args and environment.

    Parameters
    ----------
    argv : list[str] | None, default None
        Arguments to parse; defaults to ``sys.argv[1:]``

    Returns
    -------
    ServerConfig
        Validated configuration

    Raises
    ------
    ValueError
        If configuration is invalid

    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    config = load_config_from_args(args)
    config.validate()

    return config
