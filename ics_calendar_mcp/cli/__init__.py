# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Command-line interface for the ICS calendar MCP server."""
