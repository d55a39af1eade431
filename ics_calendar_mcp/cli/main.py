# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Main ics-calendar CLI application."""

from typing import Optional

import typer
from rich.console import Console

from ics_calendar_mcp import __version__
from ics_calendar_mcp.cli.commands import query, serve

console = Console()

app = typer.Typer(
    name="ics-calendar",
    help="Read-only MCP server and query tool for a remote iCalendar feed",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ics-calendar version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Query an .ics feed from the terminal or serve it to MCP clients."""
    pass


# Register subcommands
app.command(name="serve", help="Run the MCP server on stdio.")(serve.serve_command)
app.command(name="today", help="Show today's events.")(query.today_command)
app.command(name="upcoming", help="Show events in the next N days.")(query.upcoming_command)
app.command(name="search", help="Search events by keyword.")(query.search_command)


if __name__ == "__main__":
    app()
