# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""One-shot query commands for the ics-calendar CLI.

Each command runs the same tool the MCP server exposes and prints its text.
"""

import asyncio
from typing import Annotated, Any, Dict

import typer
from rich.console import Console
from rich.markup import escape

from ics_calendar_mcp.calendar_feed.feed_utils import CalendarFeedError
from ics_calendar_mcp.calendar_feed.server import DEFAULT_UPCOMING_DAYS, ICSCalendarMCPServer
from ics_calendar_mcp.common.logging_config import configure_logging
from ics_calendar_mcp.common.mcp.tools import ToolArgumentError
from ics_calendar_mcp.config import ConfigurationError, Settings, apply_host_locale, load_settings

console = Console()
error_console = Console(stderr=True)


def resolve_settings(output: Console = error_console) -> Settings:
    """Load settings or exit with status 1"""
    try:
        return load_settings()
    except ConfigurationError as e:
        output.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def run_tool(name: str, arguments: Dict[str, Any]) -> None:
    """Call one server tool against the configured feed and print the result"""
    settings = resolve_settings()
    configure_logging(quiet=True)
    apply_host_locale()
    server = ICSCalendarMCPServer.from_settings(settings)

    try:
        result = asyncio.run(server.call_tool(name, arguments))
    except (ToolArgumentError, CalendarFeedError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    for content in result:
        console.print(content.text, markup=False, highlight=False)


def today_command() -> None:
    """Show today's events.

    Example:
        ics-calendar today
    """
    run_tool("get_today_events", {})


def upcoming_command(
    days: Annotated[
        int,
        typer.Option(
            "--days",
            "-d",
            help="Number of days to look ahead (1-90).",
        ),
    ] = DEFAULT_UPCOMING_DAYS,
) -> None:
    """Show events in the next N days.

    Example:
        ics-calendar upcoming --days 14
    """
    run_tool("get_upcoming_events", {"days": days})


def search_command(
    keyword: Annotated[
        str,
        typer.Argument(help="Text to look for in event names, locations and descriptions."),
    ],
) -> None:
    """Search events by keyword.

    Example:
        ics-calendar search exam
    """
    run_tool("search_events", {"keyword": keyword})
