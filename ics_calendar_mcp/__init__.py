# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Read-only MCP server for querying a remote iCalendar feed."""

from ics_calendar_mcp.__about__ import __version__

__all__ = ["__version__"]
