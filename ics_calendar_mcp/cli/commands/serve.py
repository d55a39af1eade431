# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Serve command for the ics-calendar CLI."""

import asyncio
import logging

import typer
from rich.console import Console

from ics_calendar_mcp.calendar_feed.server import serve
from ics_calendar_mcp.cli.commands.query import resolve_settings
from ics_calendar_mcp.common.logging_config import configure_logging
from ics_calendar_mcp.config import apply_host_locale

# stdout belongs to the MCP protocol while serving
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def serve_command() -> None:
    """Run the MCP server on stdio.

    Reads ICS_URL (and optional ICS_FETCH_TIMEOUT, ICS_QUIET) from the
    environment or a .env file in the working directory.

    Example:
        ICS_URL=https://example.com/calendar.ics ics-calendar serve
    """
    settings = resolve_settings(console)
    configure_logging(quiet=settings.quiet)
    apply_host_locale()

    try:
        asyncio.run(serve(settings))
    except Exception as e:
        logger.exception("Server failed to start")
        console.print(f"[red]Error:[/red] Server failed to start: {e}", highlight=False)
        raise typer.Exit(1)
