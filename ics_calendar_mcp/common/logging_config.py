"""
Logging configuration for the MCP server.

stdout carries the MCP protocol, so every log record goes to stderr.
Verbose library loggers are quieted when ICS_QUIET is set.
"""

import logging
import sys

from ics_calendar_mcp.config import is_quiet

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
NOISY_LOGGERS = ["mcp", "mcp.server", "mcp.client", "httpx", "urllib3", "asyncio"]


def configure_logging(quiet: bool = None, level: int = logging.INFO):
    """Configure root logging to stderr, quieter when ICS_QUIET is set."""
    if quiet is None:
        quiet = is_quiet()

    root_level = logging.WARNING if quiet else level
    logging.basicConfig(level=root_level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger().setLevel(root_level)

    if quiet:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)
