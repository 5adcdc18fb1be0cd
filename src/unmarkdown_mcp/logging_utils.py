"""Logging setup for the unmarkdown MCP server.

stdout carries the MCP stdio protocol, so every handler installed here
writes to stderr or to a file.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Route server logs to stderr, and optionally to a file as well.

    Parameters
    ----------
    level : str
        Level name such as "INFO" or "DEBUG"
    log_file : str | None, default None
        File that receives a copy of every record; opened in append mode

    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers, force=True)

    if file_error is not None:
        logging.getLogger(__name__).warning(f"Could not open log file {log_file}: {file_error}")

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)
